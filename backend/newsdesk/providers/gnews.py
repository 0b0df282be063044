"""GNews.io adapter."""

from typing import Any

from newsdesk.exceptions import ProviderError
from newsdesk.providers.base import NewsProvider
from newsdesk.providers.records import GNewsRecord


class GNewsProvider(NewsProvider):
    name = "gnews"
    endpoint = "https://gnews.io/api/v4/top-headlines"
    results_field = "articles"
    record_model = GNewsRecord
    supported_categories = frozenset(
        {"business", "entertainment", "general", "health", "science", "sports", "technology"}
    )

    def build_params(self, category: str, page_size: int) -> dict[str, Any]:
        return {
            "apikey": self.api_key,
            "category": category,
            "lang": self.language,
            "country": self.country,
            "max": min(page_size, 100),
        }

    def check_payload(self, data: dict[str, Any]) -> None:
        errors = data.get("errors")
        if errors:
            message = "; ".join(errors) if isinstance(errors, list) else str(errors)
            raise ProviderError(self.name, message)
