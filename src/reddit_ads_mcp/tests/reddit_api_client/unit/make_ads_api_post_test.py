import asyncio
import httpx
import pytest

from reddit_ads_mcp.reddit_api_client.client import build_headers, make_ads_api_post
from reddit_ads_mcp.reddit_api_client.constants import REDDIT_ADS_API_URL
from reddit_ads_mcp.reddit_api_client.errors import (
    RequestError,
    TooManyRequestsError,
)
from reddit_ads_mcp.reddit_api_client import utils as utils_module


@pytest.fixture(autouse=True)
def _fast_asyncio_sleep(mocker):
    mocker.patch.object(asyncio, "sleep", new=mocker.AsyncMock(return_value=None))


def _patch_async_client(mocker, mock_client):
    mock_async_client = mocker.patch(
        "reddit_ads_mcp.reddit_api_client.client.httpx.AsyncClient"
    )
    mock_async_client.return_value.__aenter__ = mocker.AsyncMock(
        return_value=mock_client
    )
    mock_async_client.return_value.__aexit__ = mocker.AsyncMock(return_value=None)
    return mock_async_client


@pytest.mark.asyncio
async def test_make_ads_api_post_sends_json_body_and_returns_response(mocker):
    expected_response = {"data": {"id": "camp_1"}}
    payload = {"data": {"name": "Launch"}}

    mock_response = mocker.Mock()
    mock_response.json.return_value = expected_response
    mock_response.raise_for_status.return_value = None

    mock_client = mocker.AsyncMock()
    mock_client.post.return_value = mock_response

    mock_async_client = _patch_async_client(mocker, mock_client)

    response = await make_ads_api_post("/ad_accounts/acc_1/campaigns", payload)

    assert response == expected_response
    mock_async_client.assert_called_once()
    mock_client.post.assert_awaited_once_with(
        f"{REDDIT_ADS_API_URL}/ad_accounts/acc_1/campaigns",
        json=payload,
        headers=build_headers(),
    )
    mock_response.raise_for_status.assert_called_once_with()


@pytest.mark.asyncio
async def test_make_ads_api_post_does_not_retry_validation_errors(mocker):
    url = f"{REDDIT_ADS_API_URL}/ad_accounts/acc_1/ads"
    error_body = {
        "error": {
            "code": "INVALID_FIELD",
            "message": "Invalid click_url",
            "fields": ["click_url"],
        }
    }
    response = httpx.Response(400, request=httpx.Request("POST", url), json=error_body)
    exception = httpx.HTTPStatusError(
        "client error", request=response.request, response=response
    )

    mock_client = mocker.AsyncMock()
    mock_client.post.side_effect = exception
    _patch_async_client(mocker, mock_client)

    with pytest.raises(RequestError) as exc:
        await make_ads_api_post("/ad_accounts/acc_1/ads", {"data": {}})

    assert type(exc.value) is RequestError
    assert mock_client.post.await_count == 1
    assert exc.value.response["error"]["message"] == "Invalid click_url"
    assert exc.value.response["error"]["fields"] == ["click_url"]
    assert "Invalid click_url" in str(exc.value)


@pytest.mark.asyncio
async def test_make_ads_api_post_raises_too_many_requests_after_exhausting_retries(
    mocker,
):
    url = f"{REDDIT_ADS_API_URL}/ad_accounts/acc_1/campaigns"

    errors = []
    for _ in range(utils_module.config.MAX_RETRIES):
        retry_response = httpx.Response(
            429, request=httpx.Request("POST", url), json={"message": "Slow down"}
        )
        errors.append(
            httpx.HTTPStatusError(
                "rate limited",
                request=retry_response.request,
                response=retry_response,
            )
        )

    mock_client = mocker.AsyncMock()
    mock_client.post.side_effect = errors
    _patch_async_client(mocker, mock_client)

    with pytest.raises(TooManyRequestsError):
        await make_ads_api_post("/ad_accounts/acc_1/campaigns", {"data": {}})

    assert mock_client.post.await_count == utils_module.config.MAX_RETRIES
