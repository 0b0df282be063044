"""Article store - the persisted corpus behind the aggregator and the API."""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import String, cast, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsdesk.models import Article
from newsdesk.schemas.article import Category, SortOrder

logger = logging.getLogger(__name__)


class ArticleStore:
    """
    Document-store style access to articles.

    Every call uses its own session so a failed write never poisons the
    next one; the unique index on ``url`` is the final guard against
    duplicates.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_by_url(self, url: str) -> Article | None:
        """Get the stored article with this URL, if any."""
        async with self.session_factory() as session:
            result = await session.execute(select(Article).where(Article.url == url))
            return result.scalar_one_or_none()

    async def insert(self, article: Article) -> Article | None:
        """
        Store a new article.

        Returns None when an article with the same URL already exists; the
        existing row is left untouched.
        """
        async with self.session_factory() as session:
            session.add(article)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                logger.info("Article already stored, skipping: %s", article.url)
                return None
            return article

    async def delete_published_before(self, cutoff: datetime) -> int:
        """Hard-delete every article published before ``cutoff``."""
        async with self.session_factory() as session:
            result = await session.execute(delete(Article).where(Article.published_at < cutoff))
            await session.commit()
            return result.rowcount or 0

    async def get_by_id(self, article_id: UUID, active_only: bool = True) -> Article | None:
        async with self.session_factory() as session:
            article = await session.get(Article, article_id)
            if article is None or (active_only and not article.is_active):
                return None
            return article

    async def list_articles(
        self,
        category: Category | None = None,
        sort: SortOrder = SortOrder.TRENDING,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Article]:
        """
        List active articles.

        - trending: highest relevance first, newest first on ties
        - latest: newest first
        """
        query = select(Article).where(Article.is_active == True)  # noqa: E712
        if category is not None:
            query = query.where(Article.category == category)

        if sort == SortOrder.LATEST:
            query = query.order_by(Article.published_at.desc())
        else:
            query = query.order_by(Article.relevance_score.desc(), Article.published_at.desc())

        query = query.offset(offset).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def search(
        self,
        text: str,
        category: Category | None = None,
        limit: int = 10,
    ) -> list[Article]:
        """
        Case-insensitive substring search over title, summary and tags of
        active articles, most relevant and then newest first.
        """
        escaped = text.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        query = select(Article).where(
            Article.is_active == True,  # noqa: E712
            or_(
                Article.title.ilike(pattern, escape="\\"),
                Article.summary.ilike(pattern, escape="\\"),
                cast(Article.tags, String).ilike(pattern, escape="\\"),
            ),
        )
        if category is not None:
            query = query.where(Article.category == category)
        query = query.order_by(Article.relevance_score.desc(), Article.published_at.desc()).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def count(self, category: Category | None = None) -> int:
        """Number of active articles, optionally within one category."""
        query = select(func.count()).select_from(Article).where(Article.is_active == True)  # noqa: E712
        if category is not None:
            query = query.where(Article.category == category)
        async with self.session_factory() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def increment_relevance(self, article_id: UUID, points: int) -> Article | None:
        """Raise an active article's relevance score by ``points`` (capped at 100)."""
        async with self.session_factory() as session:
            article = await session.get(Article, article_id)
            if article is None or not article.is_active:
                return None
            if points > 0:
                article.increment_relevance(points)
                await session.commit()
            return article

    async def category_stats(self) -> list[dict[str, Any]]:
        """Count, average relevance and newest publish date per category."""
        count = func.count(Article.id)
        query = (
            select(
                Article.category,
                count,
                func.avg(Article.relevance_score),
                func.max(Article.published_at),
            )
            .where(Article.is_active == True)  # noqa: E712
            .group_by(Article.category)
            .order_by(count.desc())
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [
                {
                    "category": category,
                    "count": total,
                    "avg_relevance": round(float(avg or 0), 2),
                    "latest_published_at": latest,
                }
                for category, total, avg, latest in result.all()
            ]
