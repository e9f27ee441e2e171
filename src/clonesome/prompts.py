from typing import Optional

STYLE_SUFFIXES = {
    "realistic": "photorealistic, high quality, detailed, beautiful person, professional photography",
    "anime": "anime style, high quality, detailed, beautiful character",
    "cartoon": "cartoon style, vibrant colors, detailed, cute character",
    "fantasy": "fantasy art style, magical, detailed, ethereal beauty",
}


def enhance_prompt(prompt: str, style: Optional[str]) -> str:
    """Append the style-specific suffix to a prompt.

    Unknown styles return the prompt unchanged.
    """
    suffix = STYLE_SUFFIXES.get(style)
    if suffix is None:
        return prompt
    return f"{prompt}, {suffix}"
