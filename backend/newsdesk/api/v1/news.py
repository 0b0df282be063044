"""News API endpoints - feed, search, article detail, interactions and on-demand aggregation."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from newsdesk.constants.taxonomy import INTERACTION_POINTS, OPEN_ARTICLE_POINTS
from newsdesk.exceptions import AggregationError, AggregationInProgressError
from newsdesk.schemas.article import (
    AggregationResponse,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleResponse,
    Category,
    CategoryStats,
    InteractionRequest,
    InteractionResponse,
    Pagination,
    SearchResponse,
    SortOrder,
)
from newsdesk.services.article_service import ArticleStore
from newsdesk.services.scheduler import AggregationScheduler

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> ArticleStore:
    return request.app.state.store


def get_scheduler(request: Request) -> AggregationScheduler:
    return request.app.state.scheduler


async def _aggregate_now(scheduler: AggregationScheduler) -> list:
    try:
        return await scheduler.run_now()
    except AggregationInProgressError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An aggregation cycle is already running",
        )
    except AggregationError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to aggregate news",
        )


@router.get("", response_model=ArticleListResponse)
async def list_news(
    category: str = Query(default="all", description="Taxonomy category or \"all\""),
    limit: int = Query(default=10, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    sort: SortOrder = SortOrder.TRENDING,
    store: ArticleStore = Depends(get_store),
    scheduler: AggregationScheduler = Depends(get_scheduler),
) -> ArticleListResponse:
    """
    List active articles.

    - category: one of the taxonomy categories, or "all"
    - sort: "trending" (relevance, then recency) or "latest"

    When nothing has been aggregated yet, a cycle runs before answering.
    """
    if category != "all" and category not in {c.value for c in Category}:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown category: {category}",
        )
    selected = None if category == "all" else Category(category)

    if await store.count() == 0 and not scheduler.is_running:
        logger.info("Article store is empty; running aggregation on demand")
        try:
            await scheduler.run_now()
        except AggregationError as e:
            # Still answer with whatever is stored
            logger.warning("On-demand aggregation failed: %s", e)

    articles = await store.list_articles(category=selected, sort=sort, limit=limit, offset=offset)
    total = await store.count(category=selected)

    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(a) for a in articles],
        pagination=Pagination(limit=limit, offset=offset, total=total),
        category=category,
        sort=sort,
    )


@router.get("/search", response_model=SearchResponse)
async def search_news(
    q: str = Query(..., min_length=2, max_length=100, description="Text to look for"),
    category: Category | None = None,
    limit: int = Query(default=10, ge=1, le=50),
    store: ArticleStore = Depends(get_store),
) -> SearchResponse:
    """Search active articles by title, summary and tags."""
    query = q.strip()
    if len(query) < 2:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Search query must be at least 2 characters",
        )

    articles = await store.search(query, category=category, limit=limit)
    return SearchResponse(
        articles=[ArticleResponse.model_validate(a) for a in articles],
        query=query,
        category=category,
        count=len(articles),
    )


@router.get("/categories/stats", response_model=list[CategoryStats])
async def category_stats(store: ArticleStore = Depends(get_store)) -> list[CategoryStats]:
    """Article count, average relevance and latest publish date per category."""
    return [CategoryStats(**row) for row in await store.category_stats()]


@router.post("/aggregate", response_model=AggregationResponse)
async def trigger_aggregation(
    scheduler: AggregationScheduler = Depends(get_scheduler),
) -> AggregationResponse:
    """Run an aggregation cycle now."""
    inserted = await _aggregate_now(scheduler)
    return AggregationResponse(
        status="completed",
        inserted=len(inserted),
        titles=[a.title for a in inserted],
    )


@router.get("/aggregate/status")
async def aggregation_status(
    scheduler: AggregationScheduler = Depends(get_scheduler),
) -> dict[str, Any]:
    """Scheduler state and cycle counters."""
    return scheduler.status()


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: UUID,
    store: ArticleStore = Depends(get_store),
) -> ArticleDetailResponse:
    """Get a specific article; opening it raises its relevance."""
    article = await store.increment_relevance(article_id, OPEN_ARTICLE_POINTS)
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News article not found")
    return ArticleDetailResponse.model_validate(article)


@router.post("/{article_id}/interact", response_model=InteractionResponse)
async def record_interaction(
    article_id: UUID,
    interaction: InteractionRequest,
    store: ArticleStore = Depends(get_store),
) -> InteractionResponse:
    """Record a reader interaction; clicks, shares and likes raise relevance."""
    article = await store.increment_relevance(article_id, INTERACTION_POINTS[interaction.action])
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News article not found")

    return InteractionResponse(status="recorded", relevance_score=article.relevance_score)
