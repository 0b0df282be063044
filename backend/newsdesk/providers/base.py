"""Base class for news provider adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
from pydantic import BaseModel, ValidationError

from newsdesk.exceptions import ProviderError

logger = logging.getLogger(__name__)


class NewsProvider(ABC):
    """
    Adapter for one external news API.

    ``fetch`` never raises: any failure is logged and degrades to an empty
    result for that provider and category.
    """

    name: ClassVar[str]
    endpoint: ClassVar[str]
    results_field: ClassVar[str]
    record_model: ClassVar[type[BaseModel]]
    supported_categories: ClassVar[frozenset[str]]

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        *,
        timeout: float = 10.0,
        country: str = "us",
        language: str = "en",
    ):
        self.api_key = api_key
        self.http = http_client
        self.timeout = timeout
        self.country = country
        self.language = language

    def supports(self, category: str) -> bool:
        return category in self.supported_categories

    @abstractmethod
    def build_params(self, category: str, page_size: int) -> dict[str, Any]:
        """Query parameters for a top-headlines request."""

    def check_payload(self, data: dict[str, Any]) -> None:
        """Raise ProviderError when the body reports an API-level error."""

    async def fetch(self, category: str, page_size: int) -> list[BaseModel]:
        """Fetch raw records for a category, or [] on any failure."""
        if not self.supports(category):
            return []

        try:
            items = await self._request(category, page_size)
        except ProviderError as e:
            logger.warning("Provider request failed (%s): %s", category, e)
            return []
        except httpx.HTTPError as e:
            logger.warning("%s request failed for %s: %r", self.name, category, e)
            return []

        records = []
        for item in items:
            try:
                records.append(self.record_model.model_validate(item))
            except ValidationError as e:
                logger.debug("Skipping malformed %s record: %s", self.name, e)

        logger.info("%s returned %d article(s) for %s", self.name, len(records), category)
        return records

    async def _request(self, category: str, page_size: int) -> list[Any]:
        response = await self.http.get(
            self.endpoint,
            params=self.build_params(category, page_size),
            timeout=self.timeout,
        )
        if not response.is_success:
            raise ProviderError(self.name, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, "response is not JSON") from e
        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected response body")

        self.check_payload(data)

        items = data.get(self.results_field) or []
        if not isinstance(items, list):
            raise ProviderError(self.name, f"'{self.results_field}' is not a list")
        return items
