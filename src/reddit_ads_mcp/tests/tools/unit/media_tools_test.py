import json

import pytest
from fastmcp import Client

from reddit_ads_mcp.config import config
from reddit_ads_mcp.main import create_server
from reddit_ads_mcp.media.hosting import ImageUploadResult

DATA_URL = "data:image/png;base64,aGVsbG8="


@pytest.mark.asyncio
async def test_generate_image_returns_message_and_hosted_url(mocker):
    mock_generate = mocker.patch(
        "reddit_ads_mcp.tools.media.generate_image_data_url",
        new=mocker.AsyncMock(return_value=DATA_URL),
    )
    mocker.patch(
        "reddit_ads_mcp.tools.media.upload_image",
        new=mocker.AsyncMock(
            return_value=ImageUploadResult(
                url="https://i.ibb.co/abc/generated.png", provider="imgbb"
            )
        ),
    )

    async with Client(create_server()) as client:
        result = await client.call_tool_mcp(
            "generate_image", {"prompt": "a red bike", "style": "illustration"}
        )

    assert not result.isError
    assert mock_generate.await_args.args[0].startswith(
        "Create an illustrated image: a red bike."
    )
    assert len(result.content) == 2
    assert result.content[0].text == "Successfully generated image with illustration style."
    assert json.loads(result.content[1].text) == {
        "image_url": "https://i.ibb.co/abc/generated.png",
        "provider": "imgbb",
        "upload_status": "Successfully uploaded to imgbb",
    }


@pytest.mark.asyncio
async def test_generate_image_returns_data_url_when_hosting_fails(mocker):
    mocker.patch(
        "reddit_ads_mcp.tools.media.generate_image_data_url",
        new=mocker.AsyncMock(return_value=DATA_URL),
    )
    mocker.patch(
        "reddit_ads_mcp.tools.media.upload_image",
        new=mocker.AsyncMock(return_value=ImageUploadResult(url=DATA_URL)),
    )

    async with Client(create_server()) as client:
        result = await client.call_tool_mcp("generate_image", {"prompt": "a red bike"})

    payload = json.loads(result.content[1].text)
    assert payload["image_url"] == DATA_URL
    assert payload["provider"] is None
    assert "base64 data URL" in payload["upload_status"]


@pytest.mark.asyncio
async def test_generate_image_errors_without_gemini_key(mocker):
    mocker.patch.object(config, "GOOGLE_GEMINI_API_KEY", None)
    mock_upload = mocker.patch(
        "reddit_ads_mcp.tools.media.upload_image", new=mocker.AsyncMock()
    )

    async with Client(create_server()) as client:
        result = await client.call_tool_mcp("generate_image", {"prompt": "a red bike"})

    assert result.isError
    assert "Error generating image:" in result.content[0].text
    assert "GOOGLE_GEMINI_API_KEY" in result.content[0].text
    mock_upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_image_errors_when_no_image_comes_back(mocker):
    mocker.patch(
        "reddit_ads_mcp.tools.media.generate_image_data_url",
        new=mocker.AsyncMock(return_value=None),
    )

    async with Client(create_server()) as client:
        result = await client.call_tool_mcp("generate_image", {"prompt": "a red bike"})

    assert result.isError
    assert "No image was generated in the response" in result.content[0].text
