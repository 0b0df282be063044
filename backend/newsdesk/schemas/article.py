"""Article schemas for API request/response validation."""

from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Fixed article taxonomy."""

    TECHNOLOGY = "technology"
    BUSINESS = "business"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    SCIENCE = "science"
    POLITICS = "politics"
    GENERAL = "general"


class Sentiment(str, Enum):
    """Sentiment label attached to an article by an external signal."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SortOrder(str, Enum):
    """Feed ordering."""

    TRENDING = "trending"
    LATEST = "latest"


class ArticleBase(BaseModel):
    """Base article schema with shared fields."""

    title: str = Field(..., min_length=1, max_length=200)
    summary: str = Field(..., max_length=500)
    url: str = Field(..., description="URL to the original article")
    source: str = Field(..., min_length=1)


class ArticleResponse(ArticleBase):
    """Schema for article responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    image_url: str | None = None
    category: Category = Category.GENERAL
    published_at: datetime
    relevance_score: int = Field(default=0, ge=0, le=100)
    tags: list[str] = Field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL


class ArticleDetailResponse(ArticleResponse):
    """Single article including the raw body."""

    content: str | None = None


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int


class ArticleListResponse(BaseModel):
    """Schema for paginated article list response."""

    articles: list[ArticleResponse]
    pagination: Pagination
    category: str
    sort: SortOrder


class InteractionRequest(BaseModel):
    """Reader interaction with an article."""

    action: Literal["view", "click", "share", "like", "bookmark"]


class InteractionResponse(BaseModel):
    status: str
    relevance_score: int


class CategoryStats(BaseModel):
    """Aggregate figures for one category of active articles."""

    category: Category
    count: int
    avg_relevance: float
    latest_published_at: datetime | None = None


class AggregationResponse(BaseModel):
    """Outcome of an on-demand aggregation cycle."""

    status: str
    inserted: int
    titles: list[str] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Articles matching a free-text query."""

    articles: list[ArticleResponse]
    query: str
    category: Category | None = None
    count: int
