"""Database session management.

PostgreSQL through the psycopg3 async driver in production, SQLite through
aiosqlite when ``DB_ENABLED=false``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from travel_service.core.database.base import Base
from travel_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 1.0

db_settings = get_db_settings()
app_settings = get_app_settings()

engine = create_async_engine(
    db_settings.get_sqlalchemy_url(),
    **{**db_settings.sqlalchemy_engine_kwargs(), "echo": db_settings.echo or app_settings.debug},
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


@event.listens_for(engine.sync_engine, "before_cursor_execute")
def _before_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Record query start time before execution."""
    _ = conn, cursor, statement, parameters, executemany
    context._query_start_time = time.perf_counter()


@event.listens_for(engine.sync_engine, "after_cursor_execute")
def _after_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Log queries slower than SLOW_QUERY_SECONDS."""
    _ = conn, cursor, parameters, executemany
    duration = time.perf_counter() - context._query_start_time
    if duration > SLOW_QUERY_SECONDS:
        operation = statement.strip().split(" ", 1)[0].upper() if statement else "UNKNOWN"
        logger.warning(
            "Slow database query",
            extra={"operation": operation, "duration_ms": round(duration * 1000, 2)},
        )


async def ensure_tables(bind: AsyncEngine | None = None) -> None:
    """Create any missing tables registered on ``Base.metadata``.

    Idempotent thanks to ``checkfirst``; there is no migration tooling.
    """
    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(lambda sync_conn: Base.metadata.create_all(sync_conn, checkfirst=True))


async def init_database() -> None:
    """Check connectivity and make sure the schema exists.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
    """
    db_url = make_url(db_settings.get_sqlalchemy_url()).render_as_string(hide_password=True)
    logger.info("Initializing database connection", extra={"url": db_url})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        await ensure_tables()
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": db_url, "error": str(e)},
        )
        raise

    logger.info(
        "Database connection established successfully",
        extra={"url": db_url, "driver": engine.dialect.driver},
    )


async def close_database() -> None:
    """Dispose of the engine's connection pool.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")

    try:
        await engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})
