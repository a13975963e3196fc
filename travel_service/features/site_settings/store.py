"""Persistence of the singleton settings document.

``ConfigStore`` is built once during application startup with a session
factory and shared by every request. It keeps no document in memory: every
call opens its own session and re-reads storage.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from travel_service.core.database.exceptions import StaleVersionError

from .exceptions import ConcurrentUpdateError, StorageError
from .repository import SiteSettingsRepository, get_site_settings_repository
from .schema import build_defaults

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from .models import SiteSettingsRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SiteConfiguration:
    """Detached snapshot of the settings row.

    ``document`` is a private copy; mutate it freely and hand the snapshot
    back to ``ConfigStore.save``.
    """

    id: int
    version: int
    document: dict[str, Any]
    created_at: datetime | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None

    @classmethod
    def from_record(cls, record: SiteSettingsRecord) -> SiteConfiguration:
        return cls(
            id=record.id,
            version=record.version,
            document=copy.deepcopy(record.document),
            created_at=record.created_at,
            updated_at=record.updated_at,
            updated_by=record.updated_by,
        )


class ConfigStore:
    """Find-or-create access to the settings document with versioned saves.

    Example:
        store = ConfigStore(AsyncSessionLocal)
        config = await store.get_instance()
        config.document["features"]["booking"]["enabled"] = False
        await store.save(config, updated_by="admin-token")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: SiteSettingsRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repository = repository or get_site_settings_repository()

    async def get_instance(self) -> SiteConfiguration:
        """Return the settings document, creating it with defaults if absent.

        Two concurrent first calls may each insert a row. Readers always pick
        the lowest id, so both converge on the same document.

        Raises:
            StorageError: If the database cannot be read or written.
        """
        try:
            async with self._session_factory() as session:
                record = await self._repository.get_current(session)
                if record is not None:
                    return SiteConfiguration.from_record(record)

                record = await self._repository.create_document(session, build_defaults())
                created = SiteConfiguration.from_record(record)
                await session.commit()
                logger.info(
                    "Created site settings with defaults",
                    extra={"settings_id": created.id},
                )

                current = await self._repository.get_current(session)
                if current is not None and current.id != created.id:
                    logger.warning(
                        "Concurrent site settings creation detected; using the oldest row",
                        extra={"settings_id": current.id, "discarded_id": created.id},
                    )
                    return SiteConfiguration.from_record(current)
                return created
        except SQLAlchemyError as exc:
            logger.error("Failed to load site settings", extra={"error": str(exc)})
            raise StorageError("Failed to load site settings") from exc

    async def save(
        self,
        config: SiteConfiguration,
        *,
        updated_by: str | None = None,
    ) -> SiteConfiguration:
        """Persist ``config.document`` if nobody saved since it was read.

        On success ``config.version``, ``updated_at`` and ``updated_by`` are
        refreshed in place and the same snapshot is returned.

        Raises:
            ConcurrentUpdateError: If the stored version moved on.
            StorageError: If the database write fails.
        """
        now = datetime.now(UTC)
        try:
            async with self._session_factory() as session:
                new_version = await self._repository.save_document(
                    session,
                    config.id,
                    config.version,
                    copy.deepcopy(config.document),
                    updated_by=updated_by,
                    updated_at=now,
                )
                await session.commit()
        except StaleVersionError as exc:
            raise ConcurrentUpdateError(config.version) from exc
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to save site settings",
                extra={"settings_id": config.id, "error": str(exc)},
            )
            raise StorageError("Failed to save site settings") from exc

        logger.info(
            "Saved site settings",
            extra={"settings_id": config.id, "version": new_version, "updated_by": updated_by},
        )
        config.version = new_version
        config.updated_at = now
        config.updated_by = updated_by
        return config
