"""NewsAPI.org adapter."""

from typing import Any

from newsdesk.exceptions import ProviderError
from newsdesk.providers.base import NewsProvider
from newsdesk.providers.records import NewsAPIRecord


class NewsAPIProvider(NewsProvider):
    name = "newsapi"
    endpoint = "https://newsapi.org/v2/top-headlines"
    results_field = "articles"
    record_model = NewsAPIRecord
    supported_categories = frozenset(
        {"business", "entertainment", "general", "health", "science", "sports", "technology"}
    )

    def build_params(self, category: str, page_size: int) -> dict[str, Any]:
        return {
            "apiKey": self.api_key,
            "category": category,
            "country": self.country,
            "pageSize": min(page_size, 100),
        }

    def check_payload(self, data: dict[str, Any]) -> None:
        if data.get("status") == "error":
            raise ProviderError(self.name, data.get("message") or data.get("code") or "unknown error")
