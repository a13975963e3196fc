"""Site settings repository.

Data access for the singleton settings row, separate from the store's
session and error handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from travel_service.core.database.repository import BaseRepository
from travel_service.infra.logging import get_lazy_logger

from .models import SiteSettingsRecord

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

_lazy = get_lazy_logger(__name__)


class SiteSettingsRepository(BaseRepository[SiteSettingsRecord]):
    """Repository for SiteSettingsRecord rows.

    Example:
        repo = get_site_settings_repository()
        record = await repo.get_current(session)
    """

    def __init__(self) -> None:
        super().__init__(SiteSettingsRecord)

    async def get_current(self, session: AsyncSession) -> SiteSettingsRecord | None:
        """Get the settings row in use (lowest id), if one exists."""
        return await self.first(session)

    async def create_document(
        self,
        session: AsyncSession,
        document: dict[str, Any],
        *,
        created_by: str | None = None,
    ) -> SiteSettingsRecord:
        """Insert a new settings row at version 1."""
        record = SiteSettingsRecord(
            document=document,
            version=1,
            created_by=created_by,
            updated_by=created_by,
        )
        record = await self.create(session, record)
        _lazy.debug(lambda: f"create_document: id={record.id} sections={sorted(document)}")
        return record

    async def save_document(
        self,
        session: AsyncSession,
        record_id: int,
        expected_version: int,
        document: dict[str, Any],
        *,
        updated_by: str | None = None,
        updated_at: datetime | None = None,
    ) -> int:
        """Write ``document`` if the row is still at ``expected_version``.

        Returns:
            The new version.

        Raises:
            StaleVersionError: If the row moved on since it was read.
        """
        values: dict[str, Any] = {"document": document, "updated_by": updated_by}
        if updated_at is not None:
            values["updated_at"] = updated_at
        return await self.update_if_version(session, record_id, expected_version, values)


_site_settings_repository: SiteSettingsRepository | None = None


def get_site_settings_repository() -> SiteSettingsRepository:
    """Get the site settings repository singleton."""
    global _site_settings_repository
    if _site_settings_repository is None:
        _site_settings_repository = SiteSettingsRepository()
    return _site_settings_repository
