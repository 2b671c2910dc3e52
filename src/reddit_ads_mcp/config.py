from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    REDDIT_BEARER_TOKEN: str
    REDDIT_BUSINESS_ID: Optional[str] = None
    REDDIT_USER_AGENT: str = "mcp-reddit-ads-server:v1.0.0"
    REDDIT_ADS_API_URL: str = "https://ads-api.reddit.com/api/v3"

    # Image generation and hosting
    GOOGLE_GEMINI_API_KEY: Optional[str] = None
    GEMINI_IMAGE_MODEL: str = "gemini-2.5-flash-image-preview"
    IMGBB_API_KEY: Optional[str] = None
    UPLOADCARE_PUB_KEY: str = "demopublickey"

    LOG_LEVEL: str = "INFO"
    MAX_RETRIES: int = 3
    REQUEST_TIMEOUT: float = 30.0
    IMAGE_REQUEST_TIMEOUT: float = 120.0


config = Settings()  # type: ignore
