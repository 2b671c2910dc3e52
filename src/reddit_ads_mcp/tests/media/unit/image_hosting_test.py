import base64

import httpx
import pytest

from reddit_ads_mcp.config import config
from reddit_ads_mcp.media.hosting import (
    IMGBB_UPLOAD_URL,
    UPLOADCARE_UPLOAD_URL,
    parse_data_url,
    upload_image,
    upload_to_imgbb,
    upload_to_uploadcare,
)

IMAGE_BASE64 = base64.b64encode(b"fake-png-bytes").decode()
DATA_URL = f"data:image/png;base64,{IMAGE_BASE64}"


def _patch_async_client(mocker, mock_client):
    mock_async_client = mocker.patch("reddit_ads_mcp.media.hosting.httpx.AsyncClient")
    mock_async_client.return_value.__aenter__ = mocker.AsyncMock(
        return_value=mock_client
    )
    mock_async_client.return_value.__aexit__ = mocker.AsyncMock(return_value=None)
    return mock_async_client


def _json_response(mocker, body):
    mock_response = mocker.Mock()
    mock_response.json.return_value = body
    mock_response.raise_for_status.return_value = None
    return mock_response


def test_parse_data_url_splits_mime_type_and_payload():
    assert parse_data_url(DATA_URL) == ("image/png", IMAGE_BASE64)


def test_parse_data_url_rejects_plain_urls():
    with pytest.raises(ValueError):
        parse_data_url("https://example.com/image.png")


@pytest.mark.asyncio
async def test_upload_to_imgbb_is_skipped_without_api_key(mocker):
    mocker.patch.object(config, "IMGBB_API_KEY", None)
    mock_async_client = mocker.patch("reddit_ads_mcp.media.hosting.httpx.AsyncClient")

    assert await upload_to_imgbb(DATA_URL) is None
    mock_async_client.assert_not_called()


@pytest.mark.asyncio
async def test_upload_to_imgbb_returns_hosted_url(mocker):
    mocker.patch.object(config, "IMGBB_API_KEY", "imgbb-key")
    mock_client = mocker.AsyncMock()
    mock_client.post.return_value = _json_response(
        mocker, {"success": True, "data": {"url": "https://i.ibb.co/abc/image.png"}}
    )
    _patch_async_client(mocker, mock_client)

    assert await upload_to_imgbb(DATA_URL) == "https://i.ibb.co/abc/image.png"
    mock_client.post.assert_awaited_once_with(
        IMGBB_UPLOAD_URL,
        params={"key": "imgbb-key"},
        files={"image": (None, IMAGE_BASE64)},
    )


@pytest.mark.asyncio
async def test_upload_to_uploadcare_sends_decoded_bytes_and_builds_cdn_url(mocker):
    mock_client = mocker.AsyncMock()
    mock_client.post.return_value = _json_response(mocker, {"file": "uuid-123"})
    _patch_async_client(mocker, mock_client)

    assert await upload_to_uploadcare(DATA_URL) == "https://ucarecdn.com/uuid-123/"

    call = mock_client.post.await_args
    assert call.args == (UPLOADCARE_UPLOAD_URL,)
    assert call.kwargs["data"] == {"UPLOADCARE_PUB_KEY": config.UPLOADCARE_PUB_KEY}
    filename, image_bytes, mime_type = call.kwargs["files"]["file"]
    assert filename.startswith("generated-") and filename.endswith(".png")
    assert image_bytes == b"fake-png-bytes"
    assert mime_type == "image/png"


@pytest.mark.asyncio
async def test_upload_image_returns_first_successful_host():
    calls = []

    async def first_host(data_url):
        calls.append("first")
        return "https://first.example/image.png"

    async def second_host(data_url):
        calls.append("second")
        return "https://second.example/image.png"

    result = await upload_image(
        DATA_URL, hosts=[("first", first_host), ("second", second_host)]
    )

    assert result.url == "https://first.example/image.png"
    assert result.provider == "first"
    assert not result.is_fallback
    assert calls == ["first"]


@pytest.mark.asyncio
async def test_upload_image_skips_hosts_that_fail_or_decline():
    request = httpx.Request("POST", "https://first.example/upload")

    async def failing_host(data_url):
        raise httpx.ConnectError("connection refused", request=request)

    async def declining_host(data_url):
        return None

    async def working_host(data_url):
        return "https://third.example/image.png"

    result = await upload_image(
        DATA_URL,
        hosts=[
            ("failing", failing_host),
            ("declining", declining_host),
            ("working", working_host),
        ],
    )

    assert result.url == "https://third.example/image.png"
    assert result.provider == "working"


@pytest.mark.asyncio
async def test_upload_image_falls_back_to_data_url_when_every_host_fails(mocker):
    mocker.patch.object(config, "IMGBB_API_KEY", "imgbb-key")
    url = UPLOADCARE_UPLOAD_URL
    error_response = httpx.Response(500, request=httpx.Request("POST", url))

    mock_client = mocker.AsyncMock()
    mock_client.post.side_effect = [
        _json_response(mocker, {"success": False, "error": {"message": "Invalid key"}}),
        httpx.HTTPStatusError(
            "server error", request=error_response.request, response=error_response
        ),
    ]
    _patch_async_client(mocker, mock_client)

    result = await upload_image(DATA_URL)

    assert result.url == DATA_URL
    assert result.provider is None
    assert result.is_fallback
    assert mock_client.post.await_count == 2
