"""Image generation through the Gemini ``generateContent`` API.

The model answers with a list of content parts; generated images arrive as
base64 ``inlineData`` parts. Only the first image part is used, and it is
handed on as a ``data:`` URL so the hosting chain can upload it unchanged.
"""

import json
import logging
from typing import Any, Dict, Literal, Optional

import httpx

from reddit_ads_mcp.config import config

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_IMAGE_MIME_TYPE = "image/png"

ImageStyle = Literal["photorealistic", "illustration", "minimalist", "artistic"]

STYLE_PROMPTS: Dict[str, str] = {
    "photorealistic": (
        "Create a photorealistic, high-quality image: {prompt}. "
        "Ultra-realistic details, professional photography, sharp focus."
    ),
    "illustration": (
        "Create an illustrated image: {prompt}. "
        "Digital illustration style, vibrant colors, clean lines."
    ),
    "minimalist": (
        "Create a minimalist image: {prompt}. "
        "Simple, clean design, minimal elements, lots of negative space."
    ),
    "artistic": (
        "Create an artistic image: {prompt}. "
        "Creative interpretation, artistic style, unique perspective."
    ),
}

AD_IMAGE_PROMPT = (
    "Generate a high-quality image based on this description: {description}. "
    "Make it photorealistic and suitable for advertising."
)

MISSING_API_KEY_MESSAGE = (
    "Google Gemini API key not configured. "
    "Please set GOOGLE_GEMINI_API_KEY environment variable."
)


class ImageGenerationError(Exception):
    pass


def build_style_prompt(prompt: str, style: str = "photorealistic") -> str:
    template = STYLE_PROMPTS.get(style)
    if template is None:
        return prompt
    return template.format(prompt=prompt)


def build_ad_image_prompt(description: str) -> str:
    return AD_IMAGE_PROMPT.format(description=description)


def extract_inline_image(response: Any) -> Optional[str]:
    """Return the first inline image of a Gemini response as a data URL."""
    if not isinstance(response, dict):
        return None

    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    if not isinstance(candidates[0], dict):
        return None

    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None

    for part in parts:
        if not isinstance(part, dict):
            continue
        inline_data = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline_data, dict) and inline_data.get("data"):
            mime_type = (
                inline_data.get("mimeType")
                or inline_data.get("mime_type")
                or DEFAULT_IMAGE_MIME_TYPE
            )
            return f"data:{mime_type};base64,{inline_data['data']}"

    return None


def _error_message(error: httpx.HTTPStatusError) -> str:
    try:
        body = error.response.json()
    except json.JSONDecodeError:
        return str(error)

    error_info = body.get("error") if isinstance(body, dict) else None
    if isinstance(error_info, dict) and error_info.get("message"):
        return str(error_info["message"])
    return str(error)


async def generate_image_data_url(prompt: str) -> Optional[str]:
    """Generate an image for ``prompt``.

    Args:
        prompt: Full text prompt sent to the model.

    Returns:
        A ``data:<mime>;base64,...`` URL, or None when the model answered
        without an image part.

    Raises:
        ImageGenerationError: The API key is missing or the request failed.
    """
    api_key = config.GOOGLE_GEMINI_API_KEY
    if not api_key:
        raise ImageGenerationError(MISSING_API_KEY_MESSAGE)

    url = f"{GEMINI_API_URL}/{config.GEMINI_IMAGE_MODEL}:generateContent"
    body = {"contents": [{"parts": [{"text": prompt}]}]}
    headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}

    try:
        async with httpx.AsyncClient(timeout=config.IMAGE_REQUEST_TIMEOUT) as client:
            response = await client.post(url, json=body, headers=headers)

        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.debug(f"Image generation failed: {str(e)}")
        raise ImageGenerationError(_error_message(e)) from e
    except httpx.HTTPError as e:
        raise ImageGenerationError(str(e) or e.__class__.__name__) from e
    except json.JSONDecodeError as e:
        raise ImageGenerationError(
            f"Invalid JSON in image generation response: {e}"
        ) from e

    data_url = extract_inline_image(data)
    if data_url is None:
        logger.info("Image generation response contained no image part")
    return data_url
