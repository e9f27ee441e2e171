"""Rule-based character chat responder.

Responses are picked from a fixed table by matching keywords in the
character's personality description. No model is called.
"""

from clonesome.models import ChatMessage
from typing import Iterable, Sequence, Tuple

PERSONALITY_RESPONSES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (
        ("friendly", "warm"),
        "That's wonderful! I love how you think about things. Tell me more about your perspective on this.",
    ),
    (
        ("mysterious", "enigmatic"),
        "Hmm, that's an intriguing thought. There's more to this than meets the eye, isn't there?",
    ),
    (
        ("playful", "fun"),
        "Oh, that's so interesting! I can't help but be curious about what you're thinking. What else is on your mind?",
    ),
    (
        ("intellectual", "smart"),
        "That's a fascinating point. The implications of what you're saying are quite profound. I'd love to explore this further.",
    ),
)

DEFAULT_RESPONSE = "That's really interesting! I'm enjoying our conversation. What else would you like to talk about?"


def generate_character_response(
    message: str, personality: str, history: Iterable[ChatMessage] = ()
) -> str:
    # First matching keyword group wins; message and history do not affect the reply.
    personality_lower = personality.lower()
    for keywords, response in PERSONALITY_RESPONSES:
        if any(keyword in personality_lower for keyword in keywords):
            return response
    return DEFAULT_RESPONSE


def build_chat_context(
    message: str, personality: str, history: Iterable[ChatMessage] = ()
) -> str:
    """Render the conversation as a transcript ending on the character's turn."""
    lines = [
        f"{'Character' if msg.is_character else 'User'}: {msg.content}"
        for msg in history
    ]
    transcript = "\n".join(lines)
    return (
        f"Character Personality: {personality}\n\n"
        f"Previous conversation:\n{transcript}\n\n"
        f"User: {message}\n"
        "Character:"
    )
