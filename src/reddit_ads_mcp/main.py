import logging

from fastmcp import FastMCP
from fastmcp.server.middleware.error_handling import ErrorHandlingMiddleware

from .config import config
from .tools import accounts as accounts_tools
from .tools import ad_groups as ad_groups_tools
from .tools import ads as ads_tools
from .tools import campaigns as campaigns_tools
from .tools import content as content_tools
from .tools import media as media_tools
from .tools import posts as posts_tools
from .tools import profiles as profiles_tools


def create_server():
    mcp = FastMCP("Reddit Ads MCP Server")

    accounts_tools.register_tools(mcp)
    campaigns_tools.register_tools(mcp)
    ad_groups_tools.register_tools(mcp)
    profiles_tools.register_tools(mcp)
    posts_tools.register_tools(mcp)
    ads_tools.register_tools(mcp)
    media_tools.register_tools(mcp)
    content_tools.register_tools(mcp)

    # Tool failures are already phrased for the caller; keep their text.
    mcp.add_middleware(ErrorHandlingMiddleware(transform_errors=False))

    return mcp


def configure_logging():
    # stdout carries the MCP stdio transport, so logs go to stderr.
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main():
    configure_logging()
    server = create_server()
    server.run()
