"""Models package - SQLModel database models."""

from newsdesk.models.article import MAX_RELEVANCE, Article

__all__ = ["Article", "MAX_RELEVANCE"]
