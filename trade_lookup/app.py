"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from trade_lookup.config import Config
from trade_lookup.datasources import HttpTradeSource, TradeSource
from trade_lookup.api import router
from trade_lookup.services import SessionRegistry

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    datasource: TradeSource | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads from environment.
        datasource: Trade Service client. If None, an HTTP client is built
            from config.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()

    if datasource is None:
        datasource = HttpTradeSource(
            api_url=config.trade_service_url,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )

    registry = SessionRegistry(
        datasource,
        page_size=config.page_size,
        idle_timeout=config.session_idle_timeout,
        max_sessions=config.max_sessions,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info("Starting Trade Lookup API")
        logger.info(f"Using Trade Service: {config.trade_service_url}")

        yield

        # Shutdown
        logger.info("Shutting down...")
        await datasource.close()

    app = FastAPI(
        title="Trade Lookup API",
        description="Structured, RSQL and settlement-instruction trade search with paginated results",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.registry = registry

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
