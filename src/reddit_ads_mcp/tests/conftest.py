import os

# Settings are read once at import time; give the required ones test values
# before any reddit_ads_mcp module is collected.
os.environ.setdefault("REDDIT_BEARER_TOKEN", "test-bearer-token")
os.environ.setdefault("REDDIT_BUSINESS_ID", "test-business-id")
os.environ.setdefault("MAX_RETRIES", "3")
