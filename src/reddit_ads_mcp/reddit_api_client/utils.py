from typing import Any, Dict
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
import functools
import json
import httpx
import logging

from pydantic import BaseModel

from reddit_ads_mcp.reddit_api_client.errors import (
    AuthenticationError,
    NetworkError,
    NotFoundError,
    RedditApiError,
    RequestError,
    ServerError,
    TooManyRequestsError,
)

from reddit_ads_mcp.config import config

logger = logging.getLogger(__name__)

EXCEPTION_MAPPING = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    429: TooManyRequestsError,
}


def reddit_request_handler(func):
    @functools.wraps(func)
    @retry(
        reraise=True,
        stop=stop_after_attempt(config.MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=(
            retry_if_exception_type(ServerError)
            | retry_if_exception_type(TooManyRequestsError)
            | retry_if_exception_type(NetworkError)
        ),
    )
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.debug(f"HTTP error occurred: {str(e)}")

            try:
                error_response = e.response.json()
            except json.JSONDecodeError:
                raise RedditApiError(
                    f"HTTP error occurred: {str(e)} with non-JSON response"
                )

            handle_error_response(e.response.status_code, error_response)

            raise RedditApiError(f"HTTP error occurred: {str(e)}")
        except httpx.TransportError as e:
            logger.debug(f"Transport error occurred: {e!r}")
            raise NetworkError(
                {"error": {"message": str(e) or e.__class__.__name__}}
            ) from e
        except json.JSONDecodeError as e:
            raise RedditApiError(f"Invalid JSON in response: {e}") from e

    return wrapper


def extract_error_message(response: Any) -> str:
    """Pull a human readable message out of an Ads API error body.

    The API answers with ``{"message": ...}`` on some endpoints and with
    ``{"error": {"message": ...}}`` or ``{"error": "..."}`` on others.
    """
    if not isinstance(response, dict):
        return "Unknown error"

    if isinstance(response.get("message"), str) and response["message"]:
        return response["message"]

    error_info = response.get("error")
    if isinstance(error_info, dict) and error_info.get("message"):
        return str(error_info["message"])
    if isinstance(error_info, str) and error_info:
        return error_info

    return "Unknown error"


def handle_error_response(status_code: int, response: Any) -> None:
    if status_code < 400:
        return

    exception_class = EXCEPTION_MAPPING.get(status_code)
    if exception_class is None:
        exception_class = ServerError if status_code >= 500 else RequestError

    detailed_error: Dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": extract_error_message(response),
        }
    }

    # Add optional fields if present
    error_info = response.get("error") if isinstance(response, dict) else None
    if isinstance(error_info, dict):
        if "code" in error_info:
            detailed_error["error"]["error_code"] = error_info["code"]
        if "details" in error_info:
            detailed_error["error"]["details"] = error_info["details"]
        if "fields" in error_info:
            detailed_error["error"]["fields"] = error_info["fields"]

    raise exception_class(detailed_error)


def _encode_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def prepare_data(base_data: Dict[str, Any], **kwargs) -> Dict[str, Any]:
    """Adds optional values to a request body if they are set. Handles model encoding.

    ``None``, empty strings and empty lists are left out; ``0`` and ``False``
    are sent as given.
    """
    data = base_data.copy()
    for key, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, (str, list)) and not value:
            continue
        data[key] = _encode_value(value)
    return data
