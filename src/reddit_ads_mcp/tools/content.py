"""Ad copy drafting from subreddit analytics."""

import json
from typing import List, Optional

from fastmcp import FastMCP
from pydantic import BaseModel, Field

from reddit_ads_mcp.reddit_api_client.models import Post

HIGH_ENGAGEMENT_SCORE = 100
MODERATE_ENGAGEMENT_SCORE = 50


class SubredditStats(BaseModel):
    display_name: str = Field(..., description="Subreddit name without the r/ prefix")
    name: Optional[str] = None
    subscribers: Optional[int] = None
    active_user_count: Optional[int] = None
    description: Optional[str] = None
    created_utc: Optional[float] = None
    over18: Optional[bool] = None
    lang: Optional[str] = None
    subreddit_type: Optional[str] = None


class EngagementMetrics(BaseModel):
    avg_score: float = 0
    avg_comments: float = 0
    avg_upvote_ratio: float = 0
    post_frequency: float = 0


class SubredditAnalytics(BaseModel):
    subreddit: SubredditStats
    top_posts: List[Post] = Field(default_factory=list)
    trending_topics: List[str] = Field(default_factory=list)
    engagement_metrics: EngagementMetrics = Field(default_factory=EngagementMetrics)


class AdContent(BaseModel):
    title: str
    body: str
    target_subreddit: str
    suggested_keywords: List[str]
    engagement_prediction: str


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def predict_engagement(avg_score: float) -> str:
    if avg_score > HIGH_ENGAGEMENT_SCORE:
        return "High engagement expected based on community metrics"
    if avg_score > MODERATE_ENGAGEMENT_SCORE:
        return "Moderate engagement expected"
    return "Lower engagement expected - consider refining targeting"


def generate_ad_content(
    analytics: SubredditAnalytics, product: str, target_audience: str
) -> AdContent:
    """Draft a community-style ad for ``product`` in the analysed subreddit."""
    subreddit_name = analytics.subreddit.display_name
    topics = analytics.trending_topics
    metrics = analytics.engagement_metrics
    lead_topic = topics[0] if topics else "community"

    title = f"Discover {product} - Perfect for {target_audience} in r/{subreddit_name}!"

    body = f"""Hey r/{subreddit_name}! 

Based on the trending discussions around {', '.join(topics[:3])}, we thought you'd be interested in {product}.

Why it's perfect for this community:
- Addresses the {lead_topic} discussions we've seen trending
- Built specifically for {target_audience}
- High engagement potential (community avg: {_format_number(metrics.avg_score)} upvotes, {_format_number(metrics.avg_comments)} comments)

What do you think? Would love to hear your thoughts!

[Learn more about {product}]"""

    return AdContent(
        title=title,
        body=body,
        target_subreddit=subreddit_name,
        suggested_keywords=topics[:5],
        engagement_prediction=predict_engagement(metrics.avg_score),
    )


def register_tools(mcp: FastMCP):
    @mcp.tool(name="generate_ad_content")
    async def generate_ad_content_tool(
        analytics: SubredditAnalytics,
        product: str,
        target_audience: str,
    ) -> str:
        """Draft Reddit ad copy tailored to a subreddit's trending topics.

        Args:
            analytics (dict): Subreddit analytics with ``subreddit``
                (at least ``display_name``), ``trending_topics`` and
                ``engagement_metrics`` (``avg_score``, ``avg_comments``,
                ``avg_upvote_ratio``, ``post_frequency``).
            product (str): Product being advertised.
            target_audience (str): Who the product is for.

        Returns:
            str: JSON with title, body, target_subreddit, suggested_keywords
            and engagement_prediction.
        """
        content = generate_ad_content(analytics, product, target_audience)

        return json.dumps(content.model_dump(), indent=2)
