import json
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get, make_ads_api_post
from reddit_ads_mcp.reddit_api_client.constants import (
    DEFAULT_AGE_RESTRICTION,
    DEFAULT_CONFIGURED_STATUS,
)
from reddit_ads_mcp.reddit_api_client.errors import EmptyResponseError, RedditApiError
from reddit_ads_mcp.reddit_api_client.models import (
    Campaign,
    dump_records,
    parse_records,
    unwrap_data,
)
from reddit_ads_mcp.reddit_api_client.schemas import (
    AgeRestriction,
    CampaignObjective,
    ConfiguredStatus,
    GoalType,
)
from reddit_ads_mcp.reddit_api_client.utils import prepare_data


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def get_campaigns(ad_account_id: str) -> str:
        """Get all campaigns for an ad account.

        Args:
            ad_account_id (str): Reddit ad account ID.

        Returns:
            str: JSON list of campaigns with status, objective, funding
            instrument and schedule.
        """
        try:
            data = await make_ads_api_get(f"/ad_accounts/{ad_account_id}/campaigns")
            campaigns = parse_records(Campaign, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching campaigns: {e}") from e

        return json.dumps(dump_records(campaigns), indent=2)

    @mcp.tool()
    async def create_campaign(
        ad_account_id: str,
        name: Annotated[str, Field(min_length=3, max_length=200)],
        objective: CampaignObjective,
        funding_instrument_id: str,
        configured_status: ConfiguredStatus = DEFAULT_CONFIGURED_STATUS,
        spend_cap: Optional[int] = None,
        goal_value: Optional[int] = None,
        goal_type: Optional[GoalType] = None,
        app_id: Optional[str] = None,
        age_restriction: AgeRestriction = DEFAULT_AGE_RESTRICTION,
    ) -> str:
        """Create a new Reddit advertising campaign.

        Args:
            ad_account_id (str): Reddit ad account ID.
            name (str): Campaign name (3-200 characters).
            objective (str): Campaign objective type. enum{APP_INSTALLS,
                CATALOG_SALES, CLICKS, CONVERSIONS, IMPRESSIONS, LEAD_GENERATION,
                VIDEO_VIEWABLE_IMPRESSIONS}.
            funding_instrument_id (str): Funding instrument ID for payment.
            configured_status (str): Campaign status. enum{ACTIVE, ARCHIVED,
                DELETED, PAUSED}. Default is ACTIVE.
            spend_cap (int): Campaign lifetime spend cap in microcurrency.
            goal_value (int): Campaign level goal value in micros (requires CBO).
            goal_type (str): Campaign goal type, LIFETIME_SPEND or DAILY_SPEND
                (requires CBO).
            app_id (str): App ID for app installs campaigns (Apple App Store or
                Google Play).
            age_restriction (str): Age restriction for the campaign. enum{ABOVE_18,
                ABOVE_21, NO_AGE_RESTRICTION}. Default is NO_AGE_RESTRICTION.

        Returns:
            str: ``Successfully created campaign:`` followed by the created
            campaign as JSON.
        """
        base_data = {
            "name": name,
            "configured_status": configured_status,
            "objective": objective,
            "funding_instrument_id": funding_instrument_id,
            "age_restriction": age_restriction,
        }

        campaign_data = prepare_data(
            base_data,
            spend_cap=spend_cap,
            goal_value=goal_value,
            goal_type=goal_type,
            app_id=app_id,
        )

        try:
            response = await make_ads_api_post(
                f"/ad_accounts/{ad_account_id}/campaigns", {"data": campaign_data}
            )
            created = unwrap_data(response)
            if created is None:
                raise EmptyResponseError("Reddit returned no campaign data")
            campaign = Campaign.from_created(created)
        except RedditApiError as e:
            raise ToolError(f"Error creating campaign: {e}") from e

        return (
            "Successfully created campaign: "
            f"{json.dumps(campaign.to_payload(), indent=2)}"
        )
