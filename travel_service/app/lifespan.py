"""Application lifespan management.

Startup order:
1. Logging
2. Database (connectivity check and table creation)
3. Settings store, published on ``app.state.config_store``

Shutdown runs in reverse.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from travel_service.core.settings import get_app_settings, get_db_settings, get_logging_settings
from travel_service.infra.logging.config import setup_logging
from travel_service.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging before anything else logs."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database(app: FastAPI) -> None:
    """Connect to the database and publish the settings store."""
    from travel_service.features.site_settings import models  # noqa: F401 registers tables
    from travel_service.features.site_settings.store import ConfigStore
    from travel_service.infra.database.session import AsyncSessionLocal, init_database

    db = get_db_settings()
    try:
        await init_database()
    except Exception as e:
        logger.exception(
            "Database unavailable, failing startup",
            extra={"error": str(e), "postgres": db.is_configured},
        )
        raise

    app.state.config_store = ConfigStore(AsyncSessionLocal)
    logger.info(
        "Site settings store ready",
        extra={"backend": "postgresql" if db.is_configured else "sqlite"},
    )


async def _shutdown_database(app: FastAPI) -> None:
    from travel_service.infra.database.session import close_database

    app.state.config_store = None
    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    await _startup_core()
    await _startup_database(app)
    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down")
        await _shutdown_database(app)
        logger.info("Application shutdown complete")
        shutdown_logging()
