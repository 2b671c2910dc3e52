from reddit_ads_mcp.config import config

REDDIT_ADS_API_URL = config.REDDIT_ADS_API_URL.rstrip("/")

# Ads are always created with the generic creative type; the post or
# shopping creative attached to the ad decides how it renders.
DEFAULT_AD_TYPE = "UNSPECIFIED"

DEFAULT_CONFIGURED_STATUS = "ACTIVE"
DEFAULT_AGE_RESTRICTION = "NO_AGE_RESTRICTION"
DEFAULT_POST_STATUS = "published"
