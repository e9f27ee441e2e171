import httpx
from pathlib import Path
from datetime import datetime
from PIL import Image
import io
import logging
from typing import Optional
from urllib.parse import urlparse
import re

logger = logging.getLogger(__name__)


def sanitize_filename(name: str) -> str:
    """Sanitizes a string to be a valid filename."""
    name = re.sub(r'[<>:"/\\|?*\x00-\x1F]', "_", name)
    name = re.sub(r"\s+", "_", name)
    name = name[:100]
    return name


def generate_filename(prompt: Optional[str] = None, extension: str = "png") -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    if prompt:
        sane_prompt = "".join(
            c if c.isalnum() or c in (" ", "-") else "_" for c in prompt[:30]
        ).rstrip()
        sane_prompt = sane_prompt.replace(" ", "_")
        return f"{sane_prompt}_{timestamp}.{extension}"
    return f"image_{timestamp}.{extension}"


def get_image_extension(filename: str) -> str:
    ext = Path(urlparse(filename).path).suffix[1:].lower()
    if ext in ["jpg", "jpeg", "png", "gif", "webp"]:
        return ext
    return "png"


async def save_image_from_url(image_url: str, output_path: Path) -> Optional[Path]:
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(image_url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(
            f"HTTP error downloading image {image_url}: {e.response.status_code} - {e.response.text}"
        )
        return None
    except httpx.HTTPError as e:
        logger.error(f"Error downloading image {image_url}: {e}")
        return None

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        img = Image.open(io.BytesIO(response.content))
        img.save(output_path)
    except (OSError, ValueError) as e:
        logger.error(
            f"Failed to process and save image from {image_url} to {output_path}: {e}"
        )
        return None
    logger.info(f"Image saved to {output_path}")
    return output_path
