import json
from typing import Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from reddit_ads_mcp.config import config
from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get
from reddit_ads_mcp.reddit_api_client.errors import ConfigurationError, RedditApiError
from reddit_ads_mcp.reddit_api_client.models import (
    AdAccount,
    FundingInstrument,
    dump_records,
    parse_records,
)


def _resolve_business_id(business_id: Optional[str]) -> str:
    target_business_id = business_id or config.REDDIT_BUSINESS_ID
    if not target_business_id:
        raise ConfigurationError(
            "Business ID is required. Provide it as parameter or set "
            "REDDIT_BUSINESS_ID environment variable."
        )
    return target_business_id


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def get_ad_accounts(business_id: Optional[str] = None) -> str:
        """Get all available Reddit ad accounts for a business.

        Args:
            business_id (str): Reddit Business ID. Optional if the
                REDDIT_BUSINESS_ID environment variable is set.

        Returns:
            str: JSON list of ad accounts with id, name, status and currency.
        """
        try:
            target_business_id = _resolve_business_id(business_id)
            data = await make_ads_api_get(
                f"/businesses/{target_business_id}/ad_accounts"
            )
            accounts = parse_records(AdAccount, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching ad accounts: {e}") from e

        return json.dumps(dump_records(accounts), indent=2)

    @mcp.tool()
    async def get_funding_instruments(ad_account_id: str) -> str:
        """Get all payment methods/funding instruments for an ad account.

        Args:
            ad_account_id (str): Reddit ad account ID.

        Returns:
            str: JSON list of funding instruments. ``balance`` is only present
            when Reddit reports one.
        """
        try:
            data = await make_ads_api_get(
                f"/ad_accounts/{ad_account_id}/funding_instruments"
            )
            instruments = parse_records(FundingInstrument, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching funding instruments: {e}") from e

        return json.dumps(dump_records(instruments), indent=2)
