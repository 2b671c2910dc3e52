import json

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from reddit_ads_mcp.reddit_api_client.client import make_ads_api_get
from reddit_ads_mcp.reddit_api_client.errors import RedditApiError
from reddit_ads_mcp.reddit_api_client.models import Profile, dump_records, parse_records


def register_tools(mcp: FastMCP):
    @mcp.tool()
    async def get_profiles(ad_account_id: str) -> str:
        """Get all Reddit profiles/accounts available for an ad account.

        Profiles are the Reddit users that posts and ads are published as.

        Args:
            ad_account_id (str): Reddit ad account ID.

        Returns:
            str: JSON list of profiles (id format: t2_xxxxx).
        """
        try:
            data = await make_ads_api_get(f"/ad_accounts/{ad_account_id}/profiles")
            profiles = parse_records(Profile, data)
        except RedditApiError as e:
            raise ToolError(f"Error fetching profiles: {e}") from e

        return json.dumps(dump_records(profiles), indent=2)
