"""Minimal generic repository for SQLAlchemy models.

Provides basic persistence operations with explicit session passing.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    class SiteSettingsRepository(BaseRepository[SiteSettingsRecord]):
        '''Singleton lookups beyond basic CRUD.'''

    repo = SiteSettingsRepository()
    record = await repo.first(session)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select, update
from sqlalchemy import inspect as sa_inspect

from travel_service.core.database.exceptions import StaleVersionError
from travel_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


class BaseRepository[T]:
    """Minimal generic repository.

    Provides:
        - first(session) -> T | None (lowest primary key)
        - count(session) -> int
        - create(session, instance) -> T
        - update_if_version(session, id, expected_version, values) -> int

    Session is always explicit - no hidden state. Transactions are owned by
    the caller; the repository only flushes.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., SiteSettingsRecord)
        """
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def first(self, session: AsyncSession) -> T | None:
        """Get the entity with the lowest primary key, if any."""
        stmt = select(self.model).order_by(self._pk_attr()).limit(1)
        result = await session.execute(stmt)
        instance = result.scalar_one_or_none()
        self._lazy.debug(
            lambda: f"db.first: {self.model.__name__} -> {'found' if instance else 'empty'}"
        )
        return instance

    async def count(self, session: AsyncSession) -> int:
        """Count all rows of the model's table."""
        stmt = select(func.count()).select_from(self.model)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def update_if_version(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        expected_version: int,
        values: dict[str, Any],
    ) -> int:
        """Conditionally update a versioned row and bump its version.

        Issues ``UPDATE ... WHERE id = :id AND version = :expected_version``.
        The model must have an integer ``version`` column.

        Args:
            session: Database session
            id: Primary key value
            expected_version: Version the caller read before modifying
            values: Column values to write

        Returns:
            The new version number.

        Raises:
            StaleVersionError: If no row matched (changed or removed since read).
        """
        version_col = self.model.version  # type: ignore[attr-defined]
        stmt = (
            update(self.model)
            .where(self._pk_attr() == id, version_col == expected_version)
            .values(**values, version=version_col + 1)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount != 1:
            self._logger.warning(
                "Optimistic version check failed",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "expected_version": expected_version,
                    "operation": "db.update_if_version",
                },
            )
            raise StaleVersionError(self.model.__name__, id, expected_version)

        self._lazy.debug(
            lambda: f"db.update_if_version: {self.model.__name__}(id={id}) -> v{expected_version + 1}"
        )
        return expected_version + 1

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Get primary key attribute, falling back to ``id``."""
        mapper = sa_inspect(self.model)
        pk_cols = getattr(mapper, "primary_key", None)
        if pk_cols:
            return getattr(self.model, pk_cols[0].name)
        return getattr(self.model, "id")
