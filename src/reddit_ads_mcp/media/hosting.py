"""Public hosting for generated images.

Reddit needs a reachable URL for thumbnails and media, so generated images
are pushed to an image host. Hosts are tried in order and the first one that
returns a URL wins. A host that errors out is logged and skipped. When every
host fails, the original ``data:`` URL is handed back so the caller still
gets the image.
"""

import base64
import logging
import mimetypes
import re
import time
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel

from reddit_ads_mcp.config import config

logger = logging.getLogger(__name__)

IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"
UPLOADCARE_UPLOAD_URL = "https://upload.uploadcare.com/base/"
UPLOADCARE_CDN_URL = "https://ucarecdn.com"

_DATA_URL_PATTERN = re.compile(
    r"^data:(?P<mime_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL
)

ImageHost = Callable[[str], Awaitable[Optional[str]]]


class ImageUploadResult(BaseModel):
    url: str
    provider: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        """True when no host accepted the image and ``url`` is the data URL."""
        return self.provider is None


def parse_data_url(data_url: str) -> Tuple[str, str]:
    """Split a base64 ``data:`` URL into its mime type and payload.

    Raises:
        ValueError: If ``data_url`` is not a base64 data URL.
    """
    match = _DATA_URL_PATTERN.match(data_url or "")
    if not match:
        raise ValueError("Image is not a base64 data URL")
    return match.group("mime_type"), match.group("data")


async def upload_to_imgbb(data_url: str) -> Optional[str]:
    api_key = config.IMGBB_API_KEY
    if not api_key:
        logger.info("IMGBB_API_KEY not configured, skipping ImgBB upload")
        return None

    _, image_base64 = parse_data_url(data_url)

    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        response = await client.post(
            IMGBB_UPLOAD_URL,
            params={"key": api_key},
            files={"image": (None, image_base64)},
        )

    response.raise_for_status()
    body = response.json()

    if isinstance(body, dict) and body.get("success"):
        image_data = body.get("data")
        if isinstance(image_data, dict) and image_data.get("url"):
            return image_data["url"]

    logger.warning(f"ImgBB upload failed: {body}")
    return None


async def upload_to_uploadcare(data_url: str) -> Optional[str]:
    mime_type, image_base64 = parse_data_url(data_url)
    # binascii.Error is a ValueError
    image_bytes = base64.b64decode(image_base64, validate=True)

    extension = mimetypes.guess_extension(mime_type) or ".png"
    filename = f"generated-{int(time.time() * 1000)}{extension}"

    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        response = await client.post(
            UPLOADCARE_UPLOAD_URL,
            data={"UPLOADCARE_PUB_KEY": config.UPLOADCARE_PUB_KEY},
            files={"file": (filename, image_bytes, mime_type)},
        )

    response.raise_for_status()
    body = response.json()

    file_id = body.get("file") if isinstance(body, dict) else None
    if file_id:
        return f"{UPLOADCARE_CDN_URL}/{file_id}/"

    logger.warning(f"UploadCare upload failed: {body}")
    return None


def default_image_hosts() -> List[Tuple[str, ImageHost]]:
    return [
        ("imgbb", upload_to_imgbb),
        ("uploadcare", upload_to_uploadcare),
    ]


async def upload_image(
    data_url: str, hosts: Optional[Sequence[Tuple[str, ImageHost]]] = None
) -> ImageUploadResult:
    """Host ``data_url`` on the first image host that accepts it.

    Args:
        data_url: Image as a ``data:<mime>;base64,...`` URL.
        hosts: Ordered ``(name, uploader)`` pairs. Defaults to ImgBB then
            Uploadcare.

    Returns:
        ImageUploadResult: the hosted URL and host name, or the data URL
        itself with no provider when every host failed.
    """
    for name, host in hosts if hosts is not None else default_image_hosts():
        try:
            image_url = await host(data_url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Image upload to {name} failed: {e!r}")
            continue

        if image_url:
            logger.info(f"Successfully uploaded image to {name}: {image_url}")
            return ImageUploadResult(url=image_url, provider=name)

    logger.warning("All image upload services failed, using base64 data URL")
    return ImageUploadResult(url=data_url)
