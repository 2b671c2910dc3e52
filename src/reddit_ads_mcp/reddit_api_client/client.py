from typing import Any, Dict, Optional
import httpx

from reddit_ads_mcp.config import config
from reddit_ads_mcp.reddit_api_client.utils import reddit_request_handler
from reddit_ads_mcp.reddit_api_client.constants import REDDIT_ADS_API_URL


def build_url(path: str) -> str:
    """Join an Ads API path such as ``/ad_accounts/123/campaigns`` onto the base URL."""
    return f"{REDDIT_ADS_API_URL}/{path.lstrip('/')}"


def build_headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {config.REDDIT_BEARER_TOKEN}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": config.REDDIT_USER_AGENT,
    }


@reddit_request_handler
async def make_ads_api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Dict:
    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        response = await client.get(
            build_url(path), params=params, headers=build_headers()
        )

    response.raise_for_status()

    return response.json()


@reddit_request_handler
async def make_ads_api_post(path: str, payload: Dict[str, Any]) -> Dict:
    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        response = await client.post(
            build_url(path), json=payload, headers=build_headers()
        )

    response.raise_for_status()
    response_json = response.json()

    return response_json
