"""Article model for the aggregated news corpus."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from newsdesk.schemas.article import Category, Sentiment

MAX_RELEVANCE = 100


class Article(SQLModel, table=True):
    """
    Aggregated article - one row per unique URL.
    Created by an aggregation cycle, removed by the retention sweep.
    """

    __tablename__ = "articles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Article content
    title: str = Field(max_length=200)
    summary: str = Field(max_length=500)
    content: str | None = Field(default=None)
    url: str = Field(max_length=2048, unique=True, index=True)
    image_url: str | None = Field(default=None, max_length=2048)
    source: str = Field(max_length=200, index=True)

    # Classification
    category: Category = Field(default=Category.GENERAL, index=True)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, default=[]))
    sentiment: Sentiment = Field(default=Sentiment.NEUTRAL)
    relevance_score: int = Field(default=0, ge=0, le=MAX_RELEVANCE, index=True)

    # Timestamps
    published_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Status
    is_active: bool = Field(default=True, index=True)

    def increment_relevance(self, points: int = 1) -> int:
        """Raise the relevance score, never past the maximum."""
        self.relevance_score = min(self.relevance_score + points, MAX_RELEVANCE)
        self.updated_at = datetime.now(UTC)
        return self.relevance_score
