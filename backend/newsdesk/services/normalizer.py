"""Normalizer - maps provider-specific records onto one article shape."""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from pydantic import BaseModel

from newsdesk.providers.records import GNewsRecord, NewsAPIRecord, NewsDataRecord

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200

# NewsAPI cuts content and appends e.g. "... [+2174 chars]"
_TRUNCATION_MARKER = re.compile(r"\s*\[\+\d+ chars\]\s*$")
# Placeholder NewsData.io returns instead of content on free plans
_PAID_PLAN_PLACEHOLDER = "ONLY AVAILABLE IN PAID PLANS"
# NewsAPI keeps taken-down articles in results under these placeholders
_REMOVED_TITLE = "[Removed]"
_REMOVED_URL = "https://removed.com"


@dataclass
class ArticleCandidate:
    """A provider record in canonical form, before it is stored."""

    title: str
    url: str
    source: str
    published_at: datetime
    content: str = ""
    image_url: str | None = None
    provider: str = ""


def parse_published_at(value: str | None) -> datetime | None:
    """Parse a provider timestamp into an aware UTC datetime, or None."""
    if not value or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            # Providers without an offset publish in UTC
            return parsed.replace(tzinfo=UTC)
        # Offsets near datetime.min/max overflow on conversion
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def clean_text(value: str | None) -> str:
    """Strip markup, provider artifacts and redundant whitespace."""
    if not value:
        return ""
    text = value
    if "<" in text and ">" in text:
        text = BeautifulSoup(text, "lxml").get_text(" ", strip=True)
    if _PAID_PLAN_PLACEHOLDER in text:
        return ""
    text = _TRUNCATION_MARKER.sub("", text)
    return " ".join(text.split())


def _body(description: str | None, content: str | None) -> str:
    description = clean_text(description)
    content = clean_text(content)
    return content if len(content) >= len(description) else description


def _candidate(
    *,
    provider: str,
    title: str | None,
    url: str | None,
    source: str | None,
    published_raw: str | None,
    description: str | None,
    content: str | None,
    image_url: str | None,
) -> ArticleCandidate | None:
    title = clean_text(title)[:MAX_TITLE_LENGTH].strip()
    url = (url or "").strip()
    if not title or not url.startswith(("http://", "https://")):
        logger.debug("Dropping %s record without title or URL: %r", provider, url)
        return None
    if title == _REMOVED_TITLE or url == _REMOVED_URL:
        logger.debug("Dropping removed %s article", provider)
        return None

    published_at = parse_published_at(published_raw)
    if published_at is None:
        logger.warning("Excluding '%s' (%s): unparseable publish date %r", title, provider, published_raw)
        return None

    return ArticleCandidate(
        title=title,
        url=url,
        source=(source or "").strip() or provider,
        published_at=published_at,
        content=_body(description, content),
        image_url=(image_url or "").strip() or None,
        provider=provider,
    )


def normalize_newsapi(record: NewsAPIRecord) -> ArticleCandidate | None:
    return _candidate(
        provider=record.provider,
        title=record.title,
        url=record.url,
        source=record.source.name,
        published_raw=record.published_at,
        description=record.description,
        content=record.content,
        image_url=record.url_to_image,
    )


def normalize_gnews(record: GNewsRecord) -> ArticleCandidate | None:
    return _candidate(
        provider=record.provider,
        title=record.title,
        url=record.url,
        source=record.source.name,
        published_raw=record.published_at,
        description=record.description,
        content=record.content,
        image_url=record.image,
    )


def normalize_newsdata(record: NewsDataRecord) -> ArticleCandidate | None:
    return _candidate(
        provider=record.provider,
        title=record.title,
        url=record.link,
        source=record.source_name or record.source_id,
        published_raw=record.pub_date,
        description=record.description,
        content=record.content,
        image_url=record.image_url,
    )


_NORMALIZERS: dict[type[BaseModel], Callable[..., ArticleCandidate | None]] = {
    NewsAPIRecord: normalize_newsapi,
    GNewsRecord: normalize_gnews,
    NewsDataRecord: normalize_newsdata,
}


def normalize(record: BaseModel) -> ArticleCandidate | None:
    """Map any supported provider record to an ArticleCandidate.

    Returns None for records that cannot be used (no title, no URL, or a
    missing/unparseable publish date).
    """
    normalizer = _NORMALIZERS.get(type(record))
    if normalizer is None:
        raise TypeError(f"Unsupported provider record: {type(record).__name__}")
    return normalizer(record)


def normalize_all(records: Iterable[BaseModel]) -> list[ArticleCandidate]:
    """Normalize records, dropping the unusable ones."""
    candidates = []
    for record in records:
        try:
            candidate = normalize(record)
        except Exception as e:  # noqa: BLE001 - one bad record must not drop the batch
            logger.warning("Skipping record '%s': %r", getattr(record, "title", None), e)
            continue
        if candidate is not None:
            candidates.append(candidate)
    return candidates
