"""NewsData.io adapter."""

from typing import Any

from newsdesk.exceptions import ProviderError
from newsdesk.providers.base import NewsProvider
from newsdesk.providers.records import NewsDataRecord

# NewsData has no "general" category; "top" is its front page
CATEGORY_ALIASES = {"general": "top"}


class NewsDataProvider(NewsProvider):
    name = "newsdata"
    endpoint = "https://newsdata.io/api/1/latest"
    results_field = "results"
    record_model = NewsDataRecord
    supported_categories = frozenset(
        {
            "business",
            "entertainment",
            "general",
            "health",
            "politics",
            "science",
            "sports",
            "technology",
        }
    )

    def build_params(self, category: str, page_size: int) -> dict[str, Any]:
        return {
            "apikey": self.api_key,
            "category": CATEGORY_ALIASES.get(category, category),
            "country": self.country,
            "language": self.language,
            "size": min(page_size, 50),
        }

    def check_payload(self, data: dict[str, Any]) -> None:
        if data.get("status") != "success":
            results = data.get("results")
            message = results.get("message") if isinstance(results, dict) else None
            raise ProviderError(self.name, message or f"status={data.get('status')}")
