import json

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent

from reddit_ads_mcp.media.gemini import (
    ImageGenerationError,
    ImageStyle,
    build_style_prompt,
    generate_image_data_url,
)
from reddit_ads_mcp.media.hosting import upload_image


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def generate_image(
        prompt: str,
        style: ImageStyle = "photorealistic",
    ) -> list[TextContent]:
        """Generate an image from a text description using Google's Gemini image model.

        The generated image is uploaded to a public image host (ImgBB, then
        Uploadcare) so it can be used as a post thumbnail or media URL. If
        every host fails, the image is returned as a base64 data URL.

        Args:
            prompt (str): Text description of the image to generate.
            style (str): Style of the generated image. enum{photorealistic,
                illustration, minimalist, artistic}. Default is photorealistic.

        Returns:
            A confirmation message and a JSON object with ``image_url``,
            ``provider`` and ``upload_status``.
        """
        try:
            data_url = await generate_image_data_url(build_style_prompt(prompt, style))
        except ImageGenerationError as e:
            raise ToolError(f"Error generating image: {e}") from e

        if not data_url:
            raise ToolError("No image was generated in the response")

        upload = await upload_image(data_url)

        if upload.is_fallback:
            upload_status = "Image upload failed on all hosts, returned base64 data URL"
        else:
            upload_status = f"Successfully uploaded to {upload.provider}"

        return [
            TextContent(
                type="text", text=f"Successfully generated image with {style} style."
            ),
            TextContent(
                type="text",
                text=json.dumps(
                    {
                        "image_url": upload.url,
                        "provider": upload.provider,
                        "upload_status": upload_status,
                    },
                    indent=2,
                ),
            ),
        ]
