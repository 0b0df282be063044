"""Shared fixtures: in-memory store, fake providers and summary backends."""

import asyncio
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from newsdesk.db import create_session_factory, init_db
from newsdesk.models import Article
from newsdesk.providers import GNewsRecord, NewsAPIRecord, NewsDataRecord
from newsdesk.services.article_service import ArticleStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


class FakeProvider:
    """Stands in for a NewsProvider: returns canned records per category."""

    def __init__(
        self,
        name: str,
        records: dict[str, list[BaseModel]] | None = None,
        error: Exception | None = None,
    ):
        self.name = name
        self.records = records or {}
        self.error = error
        self.calls: list[tuple[str, int]] = []

    def supports(self, category: str) -> bool:
        return True

    async def fetch(self, category: str, page_size: int) -> list[BaseModel]:
        self.calls.append((category, page_size))
        if self.error is not None:
            raise self.error
        return list(self.records.get(category, []))


class StaticSummaryClient:
    """Summary backend that always answers with the same text."""

    def __init__(self, text: str = "A short machine summary."):
        self.text = text
        self.calls: list[tuple[str, str]] = []

    async def complete(self, instruction: str, text: str) -> str:
        self.calls.append((instruction, text))
        return self.text


class FailingSummaryClient:
    """Summary backend that is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def complete(self, instruction: str, text: str) -> str:
        self.calls += 1
        raise RuntimeError("summarization service unavailable")


class SlowSummaryClient:
    async def complete(self, instruction: str, text: str) -> str:
        await asyncio.sleep(5)
        return "too late"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine: AsyncEngine) -> ArticleStore:
    return ArticleStore(create_session_factory(engine))


@pytest.fixture
def make_article() -> Callable[..., Article]:
    def factory(**overrides: Any) -> Article:
        fields: dict[str, Any] = {
            "title": "Stored article",
            "summary": "Stored summary",
            "url": "https://example.com/stored",
            "source": "Example",
            "published_at": NOW - timedelta(hours=2),
            "relevance_score": 50,
        }
        fields.update(overrides)
        return Article(**fields)

    return factory


@pytest.fixture
def newsapi_record() -> Callable[..., NewsAPIRecord]:
    def factory(**overrides: Any) -> NewsAPIRecord:
        raw: dict[str, Any] = {
            "source": {"id": "the-verge", "name": "The Verge"},
            "author": "Jane Doe",
            "title": "New smartphone chips promise longer battery life",
            "description": "Chipmakers showed their next generation of mobile processors.",
            "url": "https://example.com/newsapi/chips",
            "urlToImage": "https://example.com/img/chips.jpg",
            "publishedAt": iso(NOW - timedelta(minutes=30)),
            "content": "Chipmakers showed their next generation of mobile processors... [+2310 chars]",
        }
        raw.update(overrides)
        return NewsAPIRecord.model_validate(raw)

    return factory


@pytest.fixture
def gnews_record() -> Callable[..., GNewsRecord]:
    def factory(**overrides: Any) -> GNewsRecord:
        raw: dict[str, Any] = {
            "title": "Quarterly earnings beat expectations",
            "description": "Shares rose after the results.",
            "content": "Shares rose after the results were published on Tuesday morning.",
            "url": "https://example.com/gnews/earnings",
            "image": "https://example.com/img/earnings.jpg",
            "publishedAt": iso(NOW - timedelta(hours=3)),
            "source": {"name": "Reuters", "url": "https://www.reuters.com"},
        }
        raw.update(overrides)
        return GNewsRecord.model_validate(raw)

    return factory


@pytest.fixture
def newsdata_record() -> Callable[..., NewsDataRecord]:
    def factory(**overrides: Any) -> NewsDataRecord:
        raw: dict[str, Any] = {
            "title": "Parliament votes on new budget",
            "link": "https://example.com/newsdata/budget",
            "description": "Lawmakers approved the spending plan late on Monday.",
            "content": "ONLY AVAILABLE IN PAID PLANS",
            "pubDate": (NOW - timedelta(hours=5)).strftime("%Y-%m-%d %H:%M:%S"),
            "image_url": None,
            "source_id": "bbc",
            "source_name": "BBC",
        }
        raw.update(overrides)
        return NewsDataRecord.model_validate(raw)

    return factory
