"""Database infrastructure package.

Example:
    from travel_service.infra.database import AsyncSessionLocal

    store = ConfigStore(AsyncSessionLocal)
"""

from .session import (
    AsyncSessionLocal,
    close_database,
    engine,
    ensure_tables,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "engine",
    "ensure_tables",
    "init_database",
]
