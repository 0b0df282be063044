"""Keyword-based article categorizer."""

from newsdesk.constants.taxonomy import CATEGORY_KEYWORDS
from newsdesk.schemas.article import Category


def _text(title: str, content: str | None) -> str:
    return f"{title} {content or ''}".lower()


def categorize(title: str, content: str | None = None) -> Category:
    """
    Return the first category, in CATEGORY_KEYWORDS order, with a keyword
    occurring anywhere in the title or content. Falls back to GENERAL.
    """
    text = _text(title, content)
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return category
    return Category.GENERAL


def extract_tags(title: str, content: str | None = None, limit: int = 5) -> list[str]:
    """Matched keywords in table order, without duplicates."""
    text = _text(title, content)
    tags: list[str] = []
    for keywords in CATEGORY_KEYWORDS.values():
        for keyword in keywords:
            if keyword in text and keyword not in tags:
                tags.append(keyword)
                if len(tags) >= limit:
                    return tags
    return tags
