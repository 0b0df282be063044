"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsdesk.agents import Summarizer, get_summary_client
from newsdesk.api.v1.router import api_router
from newsdesk.config import get_settings
from newsdesk.logging_config import configure_logging
from newsdesk.services.aggregator import AggregatorConfig, NewsAggregator
from newsdesk.services.article_service import ArticleStore
from newsdesk.services.scheduler import AggregationScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("Starting %s in %s mode", settings.app_name, settings.environment)

    from newsdesk.db import get_engine, get_session_factory, init_db

    engine = get_engine()
    await init_db(engine)
    logger.info("Database tables initialized")

    config = AggregatorConfig.from_settings(settings)
    for warning in config.warnings():
        logger.warning(warning)

    store = ArticleStore(get_session_factory())
    summarizer = Summarizer(get_summary_client(settings), timeout=config.summary_timeout)
    aggregator = NewsAggregator(config, store, summarizer)
    scheduler = AggregationScheduler(aggregator.aggregate, config.refresh_interval)

    app.state.store = store
    app.state.scheduler = scheduler

    if settings.scheduler_enabled:
        scheduler.start()
    else:
        logger.info("Aggregation scheduler disabled; use POST %s/news/aggregate", settings.api_v1_prefix)

    yield

    # Shutdown
    logger.info("Shutting down...")
    await scheduler.stop()
    await aggregator.close()
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="News aggregation with relevance scoring and AI summaries",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()
