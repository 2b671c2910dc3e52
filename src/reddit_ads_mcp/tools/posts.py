import json
import logging
from typing import Annotated, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from reddit_ads_mcp.media.gemini import (
    ImageGenerationError,
    build_ad_image_prompt,
    generate_image_data_url,
)
from reddit_ads_mcp.media.hosting import upload_image
from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get, make_ads_api_post
from reddit_ads_mcp.reddit_api_client.errors import EmptyResponseError, RedditApiError
from reddit_ads_mcp.reddit_api_client.models import (
    Post,
    dump_records,
    parse_records,
    unwrap_data,
)
from reddit_ads_mcp.reddit_api_client.schemas import HttpUrlString, PostContent, PostType
from reddit_ads_mcp.reddit_api_client.utils import prepare_data

logger = logging.getLogger(__name__)


async def _generate_thumbnail(image_description: str) -> Optional[str]:
    """Generate and host an image for a post. Never fails the post."""
    try:
        data_url = await generate_image_data_url(
            build_ad_image_prompt(image_description)
        )
    except ImageGenerationError as e:
        logger.warning(f"Skipping image generation for post: {e}")
        return None

    if not data_url:
        return None

    upload = await upload_image(data_url)
    return upload.url


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def get_posts(profile_id: str) -> str:
        """Get all posts for a specific Reddit profile.

        Args:
            profile_id (str): Reddit profile ID (format: t2_xxxxx).

        Returns:
            str: JSON list of posts.
        """
        try:
            data = await make_ads_api_get(f"/profiles/{profile_id}/posts")
            posts = parse_records(Post, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching posts: {e}") from e

        return json.dumps(dump_records(posts), indent=2)

    @mcp.tool()
    async def get_post(post_id: str) -> str:
        """Get details for a specific Reddit post.

        Args:
            post_id (str): Reddit post ID (format: t3_xxxxx).

        Returns:
            str: JSON object with the post details.
        """
        try:
            data = await make_ads_api_get(f"/posts/{post_id}")
            post_data = unwrap_data(data)
            post = Post.from_api(post_data) if post_data is not None else None
        except RedditApiError as e:
            raise ToolError(f"Error fetching post: {e}") from e

        if post is None:
            raise ToolError(f"Post with ID {post_id} not found")

        return json.dumps(post.to_payload(), indent=2)

    @mcp.tool()
    async def create_post(
        profile_id: str,
        type: PostType,
        headline: str,
        allow_comments: bool = True,
        body: Optional[Annotated[str, Field(max_length=40000)]] = None,
        thumbnail_url: Optional[HttpUrlString] = None,
        content: Optional[Annotated[List[PostContent], Field(max_length=6)]] = None,
        is_richtext: Optional[bool] = None,
        image_description: Optional[str] = None,
    ) -> str:
        """Create a new Reddit post for advertising.

        When ``image_description`` is given, an image is generated with Gemini,
        hosted, and used as the thumbnail unless ``thumbnail_url`` is also set.
        A failed image generation does not stop the post from being created.

        Args:
            profile_id (str): Reddit profile ID (format: t2_xxxxx).
            type (str): Post type. enum{CAROUSEL, IMAGE, TEXT, VIDEO}.
            headline (str): Post title/headline.
            allow_comments (bool): Enable comments on the post. Default True.
            body (str): Text content for text posts (max 40,000 characters).
            thumbnail_url (str): Thumbnail image URL (required for video posts).
            content (list[dict]): Post content items (max 6 for carousel, 1 for
                others), each with optional ``call_to_action``,
                ``destination_url``, ``display_url`` and ``media_url``.
            is_richtext (bool): Whether the text post body is in richtext format.
            image_description (str): Description of an image to generate for
                the post thumbnail.

        Returns:
            str: ``Successfully created post:`` followed by the created post as
            JSON.
        """
        if image_description:
            generated_image_url = await _generate_thumbnail(image_description)
            if not thumbnail_url and generated_image_url:
                thumbnail_url = generated_image_url

        base_data = {
            "type": type,
            "headline": headline,
            "allow_comments": allow_comments,
        }

        post_data = prepare_data(
            base_data,
            body=body,
            thumbnail_url=thumbnail_url,
            content=content,
            is_richtext=is_richtext,
        )

        try:
            response = await make_ads_api_post(
                f"/profiles/{profile_id}/posts", {"data": post_data}
            )
            created = unwrap_data(response)
            if created is None:
                raise EmptyResponseError("Reddit returned no post data")
            post = Post.from_created(created)
        except RedditApiError as e:
            raise ToolError(f"Error creating post: {e}") from e

        return f"Successfully created post: {json.dumps(post.to_payload(), indent=2)}"
