"""Typed input objects accepted by the create tools.

Tool arguments are validated against these before any request is sent; the
nested models are serialized into the request body as-is, without ``None``
fields.
"""

from typing import Annotated, List, Literal, Optional

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
)

_http_url_adapter = TypeAdapter(AnyHttpUrl)


def _validate_http_url(value: str) -> str:
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError(f"Invalid URL: {value}")
    return value


# Checked as an http(s) URL but passed on exactly as the caller wrote it.
HttpUrlString = Annotated[str, AfterValidator(_validate_http_url)]

CampaignObjective = Literal[
    "APP_INSTALLS",
    "CATALOG_SALES",
    "CLICKS",
    "CONVERSIONS",
    "IMPRESSIONS",
    "LEAD_GENERATION",
    "VIDEO_VIEWABLE_IMPRESSIONS",
]
ConfiguredStatus = Literal["ACTIVE", "ARCHIVED", "DELETED", "PAUSED"]
GoalType = Literal["LIFETIME_SPEND", "DAILY_SPEND"]
AgeRestriction = Literal["ABOVE_18", "ABOVE_21", "NO_AGE_RESTRICTION"]
BidType = Literal["CPC", "CPM", "CPV", "CPV6"]
BidStrategy = Literal["BIDLESS", "MANUAL_BIDDING", "MAXIMIZE_VOLUME", "TARGET_CPX"]
PostType = Literal["CAROUSEL", "IMAGE", "TEXT", "VIDEO"]
OptimizationGoal = Literal[
    "PAGE_VISIT",
    "VIEW_CONTENT",
    "SEARCH",
    "ADD_TO_CART",
    "ADD_TO_WISHLIST",
    "PURCHASE",
    "LEAD",
    "SIGN_UP",
    "CLICKS",
    "MOBILE_CONVERSION_INSTALL",
    "MOBILE_CONVERSION_SIGN_UP",
    "MOBILE_CONVERSION_ADD_PAYMENT_INFO",
    "MOBILE_CONVERSION_ADD_TO_CART",
    "MOBILE_CONVERSION_PURCHASE",
    "MOBILE_CONVERSION_COMPLETED_TUTORIAL",
    "MOBILE_CONVERSION_LEVEL_ACHIEVED",
    "MOBILE_CONVERSION_SPEND_CREDITS",
    "MOBILE_CONVERSION_REINSTALL",
    "MOBILE_CONVERSION_UNLOCK_ACHIEVEMENT",
    "MOBILE_CONVERSION_START_TRIAL",
    "MOBILE_CONVERSION_SUBSCRIBE",
    "MOBILE_CONVERSION_ONBOARD_STARTED",
    "MOBILE_CONVERSION_FIRST_TIME_PURCHASE",
]


class AgeTargeting(BaseModel):
    min_age: Optional[int] = Field(default=None, ge=13, le=65)
    max_age: Optional[int] = Field(default=None, ge=13, le=65)


class Targeting(BaseModel):
    communities: Optional[List[str]] = Field(
        default=None, description="Subreddit names to target"
    )
    geolocations: Optional[List[str]] = Field(
        default=None, description="Geolocation codes to target"
    )
    age_targeting: Optional[AgeTargeting] = None


class PostContent(BaseModel):
    call_to_action: Optional[str] = Field(
        default=None, description="Call to action text (e.g., 'Learn More')"
    )
    destination_url: Optional[HttpUrlString] = Field(
        default=None, description="Destination URL when clicked"
    )
    display_url: Optional[str] = Field(
        default=None, description="Display URL shown to users"
    )
    media_url: Optional[HttpUrlString] = Field(
        default=None, description="Image/video media URL"
    )


class ClickUrlQueryParam(BaseModel):
    name: str = Field(..., description="Query parameter name")
    value: str = Field(..., description="Query parameter value")


class EventTracker(BaseModel):
    type: str = Field(..., description="Event type (e.g., CLICK)")
    url: HttpUrlString = Field(..., description="Tracking URL")


class ShoppingCreative(BaseModel):
    allow_comments: Optional[bool] = None
    call_to_action: Optional[str] = None
    destination_url: Optional[HttpUrlString] = None
    headline: Optional[str] = None
    second_line_cta: Optional[str] = None
    dpa_carousel_mode: Optional[str] = None


class ProductRef(BaseModel):
    product_id: str = Field(..., description="Product ID")
