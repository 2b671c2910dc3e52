"""Domain records for Reddit Ads API objects.

Every record is built from the raw JSON the Ads API returns. Fields the API
leaves out stay ``None`` and are dropped when a record is serialized, so a
tool result only shows what the API actually reported. Numeric identifiers
are accepted and rendered as strings, and counters may be fractional.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from reddit_ads_mcp.reddit_api_client.constants import DEFAULT_POST_STATUS
from reddit_ads_mcp.reddit_api_client.errors import InvalidResponseError

Number = Union[int, float]

RecordT = TypeVar("RecordT", bound="RedditRecord")


class RedditRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @classmethod
    def from_api(cls: Type[RecordT], payload: Dict[str, Any]) -> RecordT:
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidResponseError(
                f"Unexpected {cls.__name__} payload from Reddit: {e}"
            ) from e

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class AdAccount(RedditRecord):
    id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    currency: Optional[str] = None


class FundingInstrument(RedditRecord):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    currency: Optional[str] = None
    balance: Optional[Number] = None


class Campaign(RedditRecord):
    id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    objective: Optional[str] = None
    funding_instrument_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_created(cls, payload: Dict[str, Any]) -> "Campaign":
        """Create responses carry ``configured_status`` instead of ``status``."""
        record = cls.from_api(payload)
        if not record.status:
            record.status = payload.get("configured_status")
        return record


class AdGroup(RedditRecord):
    id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    campaign_id: Optional[str] = None
    bid_strategy: Optional[str] = None
    daily_budget: Optional[Number] = None
    total_budget: Optional[Number] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_created(cls, payload: Dict[str, Any]) -> "AdGroup":
        record = cls.from_api(payload)
        if not record.status:
            record.status = payload.get("configured_status")
        return record


class Profile(RedditRecord):
    id: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    profile_type: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    avatar_url: Optional[str] = None
    description: Optional[str] = None


class Post(RedditRecord):
    id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    text: Optional[str] = None
    subreddit: Optional[str] = None
    post_type: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    permalink: Optional[str] = None
    score: Optional[Number] = None
    num_comments: Optional[Number] = None

    @classmethod
    def from_created(cls, payload: Dict[str, Any]) -> "Post":
        """Build a post from a create response.

        Created posts come back in the request's shape (``headline``,
        ``body``, ``type``, ``post_url``), not in the listing shape.
        """
        return cls.from_api(
            dict(
                id=payload.get("id"),
                title=payload.get("headline") or payload.get("title"),
                url=payload.get("post_url"),
                text=payload.get("body"),
                subreddit=payload.get("subreddit") or "",
                post_type=payload.get("type"),
                status=payload.get("status") or DEFAULT_POST_STATUS,
                created_at=payload.get("created_at"),
                updated_at=payload.get("updated_at") or payload.get("created_at"),
                permalink=payload.get("post_url") or "",
                score=payload.get("score"),
                num_comments=payload.get("num_comments"),
            )
        )


class Ad(RedditRecord):
    id: Optional[str] = None
    name: Optional[str] = None
    campaign_objective_type: Optional[str] = None
    configured_status: Optional[str] = None
    click_url: Optional[str] = None
    post_id: Optional[str] = None
    profile_id: Optional[str] = None
    ad_group_id: Optional[str] = None
    campaign_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def unwrap_data(response: Any) -> Optional[Dict[str, Any]]:
    """Return the ``data`` object of a single-object response, if there is one."""
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    if isinstance(data, dict) and data:
        return data
    return None


def parse_records(model: Type[RecordT], response: Any) -> List[RecordT]:
    """Map the ``data`` list of a listing response onto ``model`` records."""
    if not isinstance(response, dict):
        return []
    items = response.get("data") or []
    if not isinstance(items, list):
        return []
    return [model.from_api(item) for item in items if isinstance(item, dict)]


def dump_records(records: List[RedditRecord]) -> List[Dict[str, Any]]:
    return [record.to_payload() for record in records]
