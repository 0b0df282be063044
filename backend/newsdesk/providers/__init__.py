"""Providers package - adapters for external news APIs."""

import httpx

from newsdesk.providers.base import NewsProvider
from newsdesk.providers.gnews import GNewsProvider
from newsdesk.providers.newsapi import NewsAPIProvider
from newsdesk.providers.newsdata import NewsDataProvider
from newsdesk.providers.records import GNewsRecord, NewsAPIRecord, NewsDataRecord, RawRecord

# Iteration order decides which duplicate survives deduplication
PROVIDER_CLASSES: dict[str, type[NewsProvider]] = {
    NewsAPIProvider.name: NewsAPIProvider,
    GNewsProvider.name: GNewsProvider,
    NewsDataProvider.name: NewsDataProvider,
}


def build_providers(
    api_keys: dict[str, str],
    http_client: httpx.AsyncClient,
    *,
    timeout: float = 10.0,
    country: str = "us",
    language: str = "en",
) -> list[NewsProvider]:
    """Instantiate an adapter for every provider that has an API key."""
    return [
        cls(api_keys[name], http_client, timeout=timeout, country=country, language=language)
        for name, cls in PROVIDER_CLASSES.items()
        if api_keys.get(name)
    ]


__all__ = [
    # Adapters
    "NewsProvider",
    "NewsAPIProvider",
    "GNewsProvider",
    "NewsDataProvider",
    "PROVIDER_CLASSES",
    "build_providers",
    # Records
    "RawRecord",
    "NewsAPIRecord",
    "GNewsRecord",
    "NewsDataRecord",
]
