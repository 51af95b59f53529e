"""
Main HTTP server for the Catalog API.

Builds the shared collaborators once (MongoDB client, items repository,
health probes), attaches them to the FastAPI app and serves the item and
health routers.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Iterable, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from pymongo import MongoClient

from . import __version__
from .api import health_router, items_router
from .core.config import AppConfig, MongoDbSettings, get_config
from .health import HealthReporter, ProbeRegistration, mongodb_probe
from .items import InMemoryItemsRepository, ItemsRepository, MongoDbItemsRepository

logger = logging.getLogger(__name__)


def create_mongo_client(settings: MongoDbSettings) -> MongoClient:
    """Create the process-wide MongoDB client; it connects lazily."""
    return MongoClient(
        settings.connection_string,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


def create_app(
    config: Optional[AppConfig] = None,
    repository: Optional[ItemsRepository] = None,
    probes: Optional[Iterable[ProbeRegistration]] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application settings (loaded from the environment if omitted)
        repository: Items repository (chosen by ``config.repository`` if omitted)
        probes: Health probe registrations (a MongoDB readiness probe if omitted)

    Returns:
        Configured FastAPI app
    """
    config = config or get_config()

    client: Optional[MongoClient] = None
    if (repository is None and config.repository == "mongodb") or probes is None:
        client = create_mongo_client(config.mongodb)

    if repository is None:
        if config.repository == "mongodb":
            repository = MongoDbItemsRepository(client, config.mongodb.database_name)
        else:
            repository = InMemoryItemsRepository()

    if probes is None:
        probes = [mongodb_probe(client)]

    reporter = HealthReporter(probes)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Catalog API starting ({config.environment}, "
            f"repository={type(repository).__name__}, "
            f"{len(reporter.registrations)} health probe(s))"
        )
        yield
        if client is not None:
            client.close()
        logger.info("Catalog API stopped")

    docs_enabled = config.is_development
    app = FastAPI(
        title="Catalog API",
        description="Catalog items with liveness and readiness checks",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.state.config = config
    app.state.repository = repository
    app.state.health_reporter = reporter

    if config.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)

    # Include routers
    app.include_router(items_router)
    app.include_router(health_router)

    return app


def main():
    """Main entry point for HTTP server."""
    config = get_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))

    logger.info("=" * 60)
    logger.info("Catalog API Server")
    logger.info("=" * 60)
    logger.info(f"Host: {host}")
    logger.info(f"Port: {port}")
    logger.info(f"Environment: {config.environment}")
    if config.is_development:
        logger.info(f"API Documentation: http://{host}:{port}/docs")
    logger.info("=" * 60)

    uvicorn.run(
        "catalog_api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=os.getenv("API_RELOAD", "false").lower() == "true",
    )


if __name__ == "__main__":
    main()
