"""
Web server for CloneSome AI.
Exposes the image generation core and the character chat responder as JSON endpoints
for the front-end.
"""

import asyncio
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError as SchemaError

from clonesome.chat import build_chat_context, generate_character_response
from clonesome.config import settings
from clonesome.core import generate_image_core
from clonesome.models import ChatRequest, GenerationRequest

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes


@app.route('/api/generate-image', methods=['POST'])
def generate_image():
    """Generate a character image and return its URL"""
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not data.get('prompt'):
        return jsonify({
            'success': False,
            'error': 'Prompt is required'
        }), 400

    try:
        image_request = GenerationRequest(
            prompt=data['prompt'],
            style=data.get('style', 'realistic'),
            width=data.get('width', 1024),
            height=data.get('height', 1024),
        )
    except SchemaError as e:
        return jsonify({
            'success': False,
            'error': f'Invalid request: {e.errors()[0]["msg"]}'
        }), 400

    result = asyncio.run(generate_image_core(image_request))
    return jsonify(result.to_response()), result.status_code


@app.route('/api/chat', methods=['POST'])
def chat():
    """Reply to a user message in the character's voice"""
    data = request.get_json(silent=True) or {}

    try:
        chat_request = ChatRequest.model_validate(data)
    except SchemaError as e:
        return jsonify({
            'success': False,
            'error': f'Invalid request: {e.errors()[0]["msg"]}'
        }), 400

    if not chat_request.message or not chat_request.character_personality:
        return jsonify({
            'success': False,
            'error': 'Message and character personality are required'
        }), 400

    logger.debug(
        build_chat_context(
            chat_request.message,
            chat_request.character_personality,
            chat_request.conversation_history,
        )
    )
    response = generate_character_response(
        chat_request.message,
        chat_request.character_personality,
        chat_request.conversation_history,
    )
    return jsonify({
        'success': True,
        'response': response
    })


@app.errorhandler(404)
def not_found(error):
    return jsonify({
        'success': False,
        'error': 'Endpoint not found'
    }), 404


@app.errorhandler(500)
def internal_error(error):
    return jsonify({
        'success': False,
        'error': 'Internal server error'
    }), 500


if __name__ == '__main__':
    logging.basicConfig(level=settings.log_level.upper())
    print("🎭 Starting CloneSome Web Server...")
    print(f"🔧 Model version: {settings.provider.model_version}")
    print(f"🌐 API will be available at: http://localhost:5000")
    print("\n" + "="*50)

    app.run(
        host='0.0.0.0',
        port=5000,
        debug=True,
        threaded=True
    )
