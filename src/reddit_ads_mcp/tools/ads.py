import json
import logging
from typing import Annotated, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get, make_ads_api_post
from reddit_ads_mcp.reddit_api_client.constants import DEFAULT_AD_TYPE
from reddit_ads_mcp.reddit_api_client.errors import EmptyResponseError, RedditApiError
from reddit_ads_mcp.reddit_api_client.models import (
    Ad,
    dump_records,
    parse_records,
    unwrap_data,
)
from reddit_ads_mcp.reddit_api_client.schemas import (
    CampaignObjective,
    ClickUrlQueryParam,
    ConfiguredStatus,
    EventTracker,
    ProductRef,
    ShoppingCreative,
)
from reddit_ads_mcp.reddit_api_client.utils import prepare_data

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def create_ad(
        ad_account_id: str,
        name: Annotated[str, Field(min_length=1, max_length=500)],
        configured_status: ConfiguredStatus,
        ad_group_id: Optional[str] = None,
        campaign_id: Optional[str] = None,
        click_url: Optional[Annotated[str, Field(max_length=5000)]] = None,
        post_id: Optional[Annotated[str, Field(pattern=r"^t3_")]] = None,
        campaign_objective_type: Optional[CampaignObjective] = None,
        profile_id: Optional[str] = None,
        profile_username: Optional[str] = None,
        click_url_query_params: Optional[
            Annotated[List[ClickUrlQueryParam], Field(max_length=14)]
        ] = None,
        event_trackers: Optional[List[EventTracker]] = None,
        shopping_creative: Optional[ShoppingCreative] = None,
        products: Optional[List[ProductRef]] = None,
        preview_expiry: Optional[str] = None,
    ) -> str:
        """Create a Reddit ad using the official Reddit Ads API.

        Args:
            ad_account_id (str): Reddit ad account ID.
            name (str): Ad name (1-500 characters).
            configured_status (str): Ad status. enum{ACTIVE, ARCHIVED, DELETED, PAUSED}.
            ad_group_id (str): Ad group ID this ad belongs to.
            campaign_id (str): Campaign ID this ad belongs to.
            click_url (str): Destination URL when the ad is clicked (max 5000
                characters).
            post_id (str): Reddit post ID to promote (format: t3_xxxxx).
            campaign_objective_type (str): Campaign objective type, same values
                as ``create_campaign``'s objective.
            profile_id (str): Profile ID for catalog sales campaigns.
            profile_username (str): Profile username for catalog sales campaigns.
            click_url_query_params (list[dict]): UTM parameters for the click URL,
                ``{"name": ..., "value": ...}`` (max 14 items).
            event_trackers (list[dict]): Event tracking pixels from approved
                providers, ``{"type": "CLICK", "url": ...}``.
            shopping_creative (dict): Shopping creative settings: allow_comments,
                call_to_action, destination_url, headline, second_line_cta,
                dpa_carousel_mode.
            products (list[dict]): Products associated with the ad,
                ``{"product_id": ...}``.
            preview_expiry (str): ISO 8601 timestamp for preview URL expiry.

        Returns:
            str: ``Successfully created ad:`` followed by the created ad as JSON.
        """
        base_data = {
            "type": DEFAULT_AD_TYPE,
            "name": name,
            "configured_status": configured_status,
        }

        ad_data = prepare_data(
            base_data,
            ad_group_id=ad_group_id,
            campaign_id=campaign_id,
            click_url=click_url,
            post_id=post_id,
            campaign_objective_type=campaign_objective_type,
            profile_id=profile_id,
            profile_username=profile_username,
            click_url_query_parameters=click_url_query_params,
            event_trackers=event_trackers,
            shopping_creative=shopping_creative,
            products=products,
            preview_expiry=preview_expiry,
        )

        try:
            response = await make_ads_api_post(
                f"/ad_accounts/{ad_account_id}/ads", {"data": ad_data}
            )
            created = unwrap_data(response)
            if created is None:
                raise EmptyResponseError("Reddit returned no ad data")
            ad = Ad.from_api(created)
        except RedditApiError as e:
            raise ToolError(f"Error creating ad: {e}") from e

        return f"Successfully created ad: {json.dumps(ad.to_payload(), indent=2)}"

    @mcp.tool()
    async def get_ads(ad_account_id: str) -> str:
        """Get all ads from a Reddit ad account.

        Args:
            ad_account_id (str): Reddit ad account ID.

        Returns:
            str: ``Found <n> ads:`` followed by the ads as a JSON list.
        """
        try:
            data = await make_ads_api_get(f"/ad_accounts/{ad_account_id}/ads")
            logger.debug(f"get_ads response: {json.dumps(data, indent=2)}")
            ads = parse_records(Ad, data)
        except RedditApiError as e:
            raise ToolError(f"Error getting ads: {e}") from e

        return f"Found {len(ads)} ads:\n\n{json.dumps(dump_records(ads), indent=2)}"
