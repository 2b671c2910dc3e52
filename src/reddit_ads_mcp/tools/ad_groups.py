import json
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get, make_ads_api_post
from reddit_ads_mcp.reddit_api_client.constants import DEFAULT_CONFIGURED_STATUS
from reddit_ads_mcp.reddit_api_client.errors import EmptyResponseError, RedditApiError
from reddit_ads_mcp.reddit_api_client.models import (
    AdGroup,
    dump_records,
    parse_records,
    unwrap_data,
)
from reddit_ads_mcp.reddit_api_client.schemas import (
    BidStrategy,
    BidType,
    ConfiguredStatus,
    GoalType,
    OptimizationGoal,
    Targeting,
)
from reddit_ads_mcp.reddit_api_client.utils import prepare_data


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def get_ad_groups(ad_account_id: str) -> str:
        """Get all ad groups for an ad account.

        Args:
            ad_account_id (str): Reddit ad account ID.

        Returns:
            str: JSON list of ad groups with bidding, budget and schedule fields.
        """
        try:
            data = await make_ads_api_get(f"/ad_accounts/{ad_account_id}/ad_groups")
            ad_groups = parse_records(AdGroup, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching ad groups: {e}") from e

        return json.dumps(dump_records(ad_groups), indent=2)

    @mcp.tool()
    async def create_ad_group(
        ad_account_id: str,
        campaign_id: str,
        name: str,
        configured_status: ConfiguredStatus = DEFAULT_CONFIGURED_STATUS,
        bid_type: Optional[BidType] = None,
        bid_value: Optional[Annotated[int, Field(ge=0)]] = None,
        bid_strategy: Optional[BidStrategy] = None,
        goal_value: Optional[Annotated[int, Field(ge=0)]] = None,
        goal_type: Optional[GoalType] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        optimization_goal: Optional[OptimizationGoal] = None,
        targeting: Optional[Targeting] = None,
        app_id: Optional[str] = None,
    ) -> str:
        """Create a new Reddit ad group with targeting and bidding options.

        Args:
            ad_account_id (str): Reddit ad account ID.
            campaign_id (str): Campaign ID this ad group belongs to.
            name (str): Ad group name.
            configured_status (str): Ad group status. enum{ACTIVE, ARCHIVED,
                DELETED, PAUSED}. Default is ACTIVE.
            bid_type (str): Bidding type. enum{CPC, CPM, CPV, CPV6}.
            bid_value (int): Bid amount in microcurrency per event.
            bid_strategy (str): Bid strategy. enum{BIDLESS, MANUAL_BIDDING,
                MAXIMIZE_VOLUME, TARGET_CPX}.
            goal_value (int): Goal value in microcurrency.
            goal_type (str): Type of goal, DAILY_SPEND or LIFETIME_SPEND.
            start_time (str): ISO 8601 timestamp when the ad group starts
                (e.g., 2025-09-18T22:27:10Z).
            end_time (str): ISO 8601 timestamp when the ad group ends.
            optimization_goal (str): Optimization goal for conversions, e.g.
                PAGE_VISIT, PURCHASE, LEAD, MOBILE_CONVERSION_INSTALL.
            targeting (dict): Targeting options: ``communities`` (subreddit
                names), ``geolocations`` and ``age_targeting`` with
                ``min_age``/``max_age`` between 13 and 65.
            app_id (str): App ID for app install campaigns.

        Returns:
            str: ``Successfully created ad group:`` followed by the created ad
            group as JSON.
        """
        base_data = {
            "campaign_id": campaign_id,
            "name": name,
            "configured_status": configured_status,
        }

        ad_group_data = prepare_data(
            base_data,
            bid_type=bid_type,
            bid_value=bid_value,
            bid_strategy=bid_strategy,
            goal_value=goal_value,
            goal_type=goal_type,
            start_time=start_time,
            end_time=end_time,
            optimization_goal=optimization_goal,
            targeting=targeting,
            app_id=app_id,
        )

        try:
            response = await make_ads_api_post(
                f"/ad_accounts/{ad_account_id}/ad_groups", {"data": ad_group_data}
            )
            created = unwrap_data(response)
            if created is None:
                raise EmptyResponseError("Reddit returned no ad group data")
            ad_group = AdGroup.from_created(created)
        except RedditApiError as e:
            raise ToolError(f"Error creating ad group: {e}") from e

        return (
            "Successfully created ad group: "
            f"{json.dumps(ad_group.to_payload(), indent=2)}"
        )
