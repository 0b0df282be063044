"""News aggregation - one fetch/normalize/dedupe/score/summarize/persist/sweep cycle."""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import httpx

from newsdesk.agents import Summarizer
from newsdesk.config import Settings
from newsdesk.models import Article
from newsdesk.providers import PROVIDER_CLASSES, NewsProvider, build_providers
from newsdesk.services.article_service import ArticleStore
from newsdesk.services.categorizer import categorize, extract_tags
from newsdesk.services.normalizer import ArticleCandidate, normalize_all
from newsdesk.services.scoring import score_relevance

logger = logging.getLogger(__name__)

MAX_SUMMARY_CHARS = 500


@dataclass(frozen=True)
class AggregatorConfig:
    """Everything a cycle needs to know, resolved once at startup."""

    provider_keys: dict[str, str] = field(default_factory=dict)
    categories: tuple[str, ...] = ()
    articles_per_category: int = 20
    provider_timeout: float = 10.0
    summary_timeout: float = 15.0
    refresh_interval: timedelta = timedelta(minutes=30)
    retention: timedelta = timedelta(days=7)
    country: str = "us"
    language: str = "en"
    llm_provider: str = "anthropic"
    llm_configured: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "AggregatorConfig":
        llm_key = settings.gemini_api_key if settings.llm_provider == "gemini" else settings.anthropic_api_key
        return cls(
            provider_keys={
                "newsapi": settings.newsapi_api_key,
                "gnews": settings.gnews_api_key,
                "newsdata": settings.newsdata_api_key,
            },
            categories=tuple(settings.aggregation_categories),
            articles_per_category=settings.articles_per_category,
            provider_timeout=settings.provider_timeout_seconds,
            summary_timeout=settings.summary_timeout_seconds,
            refresh_interval=timedelta(minutes=settings.refresh_interval_minutes),
            retention=timedelta(days=settings.retention_days),
            country=settings.news_country,
            language=settings.news_language,
            llm_provider=settings.llm_provider,
            llm_configured=bool(llm_key),
        )

    @property
    def enabled_providers(self) -> list[str]:
        return [name for name in PROVIDER_CLASSES if self.provider_keys.get(name)]

    def warnings(self) -> list[str]:
        """Capabilities that are missing from this configuration."""
        messages = [
            f"No API key for news provider '{name}'; it will not be queried"
            for name in PROVIDER_CLASSES
            if not self.provider_keys.get(name)
        ]
        if not self.enabled_providers:
            messages.append("No news provider is configured; aggregation cycles will fetch nothing")
        if not self.llm_configured:
            messages.append(
                f"No API key for LLM provider '{self.llm_provider}'; summaries fall back to titles"
            )
        return messages


def dedupe_by_url(candidates: Iterable[ArticleCandidate]) -> list[ArticleCandidate]:
    """Drop repeated URLs, keeping the first occurrence in input order."""
    seen: set[str] = set()
    unique = []
    for candidate in candidates:
        if candidate.url in seen:
            continue
        seen.add(candidate.url)
        unique.append(candidate)
    return unique


async def fetch_category(
    providers: Sequence[NewsProvider],
    category: str,
    page_size: int,
) -> list[ArticleCandidate]:
    """Query every provider supporting ``category`` concurrently and normalize the results."""
    active = [p for p in providers if p.supports(category)]
    results = await asyncio.gather(
        *(p.fetch(category, page_size) for p in active),
        return_exceptions=True,
    )

    candidates: list[ArticleCandidate] = []
    for provider, records in zip(active, results):
        if isinstance(records, BaseException):
            logger.error("Provider %s failed for %s: %r", provider.name, category, records)
            continue
        candidates.extend(normalize_all(records))
    return candidates


async def build_article(candidate: ArticleCandidate, summarizer: Summarizer, now: datetime) -> Article:
    """Categorize, summarize and score a candidate into a new Article."""
    summary = await summarizer.summarize(candidate.title, candidate.content)
    return Article(
        title=candidate.title,
        summary=summary[:MAX_SUMMARY_CHARS],
        content=candidate.content or None,
        url=candidate.url,
        image_url=candidate.image_url,
        source=candidate.source,
        category=categorize(candidate.title, candidate.content),
        tags=extract_tags(candidate.title, candidate.content),
        published_at=candidate.published_at,
        relevance_score=score_relevance(
            title=candidate.title,
            content=candidate.content,
            image_url=candidate.image_url,
            published_at=candidate.published_at,
            now=now,
        ),
    )


async def sweep_expired(store: ArticleStore, now: datetime, retention: timedelta) -> int:
    """Delete articles published before the retention window."""
    deleted = await store.delete_published_before(now - retention)
    if deleted:
        logger.info("Retention sweep removed %d article(s) older than %s", deleted, retention)
    return deleted


async def run_aggregation_cycle(
    config: AggregatorConfig,
    store: ArticleStore,
    providers: Sequence[NewsProvider],
    summarizer: Summarizer,
    now: datetime | None = None,
) -> list[Article]:
    """
    Run one aggregation cycle and return the newly stored articles.

    The whole pool is fetched and deduplicated before anything is written.
    Articles already in the store are skipped, never updated. Candidates
    already past the retention window are not stored. A failure on one
    article is logged and the cycle moves on.
    """
    now = now or datetime.now(UTC)
    cutoff = now - config.retention

    pool: list[ArticleCandidate] = []
    for category in config.categories:
        pool.extend(await fetch_category(providers, category, config.articles_per_category))

    unique = dedupe_by_url(pool)
    fresh = [c for c in unique if c.published_at >= cutoff]

    inserted: list[Article] = []
    existing = 0
    failed = 0
    for candidate in fresh:
        try:
            if await store.find_by_url(candidate.url) is not None:
                existing += 1
                continue
            article = await build_article(candidate, summarizer, now)
            stored = await store.insert(article)
        except Exception as e:  # noqa: BLE001 - one bad article must not stop the cycle
            failed += 1
            logger.error("Failed to process article '%s': %r", candidate.title, e)
            continue

        if stored is None:
            existing += 1
        else:
            inserted.append(stored)

    deleted = await sweep_expired(store, now, config.retention)

    logger.info(
        "Aggregation finished: fetched=%d, duplicates=%d, expired=%d, existing=%d, inserted=%d, failed=%d, deleted=%d",
        len(pool),
        len(pool) - len(unique),
        len(unique) - len(fresh),
        existing,
        len(inserted),
        failed,
        deleted,
    )
    return inserted


class NewsAggregator:
    """Binds configuration, store, providers and summarizer to a zero-argument cycle."""

    def __init__(
        self,
        config: AggregatorConfig,
        store: ArticleStore,
        summarizer: Summarizer,
        http_client: httpx.AsyncClient | None = None,
        providers: Sequence[NewsProvider] | None = None,
    ):
        self.config = config
        self.store = store
        self.summarizer = summarizer
        self._owns_http = http_client is None
        self.http = http_client or httpx.AsyncClient(
            timeout=config.provider_timeout,
            follow_redirects=True,
            headers={"User-Agent": "newsdesk/0.1 (+aggregator)"},
        )
        if providers is None:
            providers = build_providers(
                config.provider_keys,
                self.http,
                timeout=config.provider_timeout,
                country=config.country,
                language=config.language,
            )
        self.providers = list(providers)

    async def aggregate(self) -> list[Article]:
        """Run one aggregation cycle now."""
        return await run_aggregation_cycle(self.config, self.store, self.providers, self.summarizer)

    async def close(self) -> None:
        """Close the HTTP client if this aggregator created it."""
        if self._owns_http:
            await self.http.aclose()
