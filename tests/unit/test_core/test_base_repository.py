"""Tests for BaseRepository against in-memory SQLite."""

from __future__ import annotations

import pytest

from travel_service.core.database.exceptions import StaleVersionError
from travel_service.features.site_settings.models import SiteSettingsRecord
from travel_service.features.site_settings.repository import (
    SiteSettingsRepository,
    get_site_settings_repository,
)


@pytest.fixture
def repo() -> SiteSettingsRepository:
    return SiteSettingsRepository()


def test_repository_singleton() -> None:
    assert get_site_settings_repository() is get_site_settings_repository()


@pytest.mark.asyncio
async def test_create_and_first(db_session, repo) -> None:
    assert await repo.first(db_session) is None

    created = await repo.create_document(db_session, {"website": {"name": "A"}}, created_by="seed")
    assert created.id is not None
    assert created.version == 1
    assert created.created_by == "seed"

    assert await repo.get_current(db_session) is created
    assert await repo.count(db_session) == 1


@pytest.mark.asyncio
async def test_save_document_checks_version(db_session, repo) -> None:
    record = await repo.create_document(db_session, {"website": {"name": "A"}})

    new_version = await repo.save_document(
        db_session, record.id, 1, {"website": {"name": "B"}}, updated_by="admin"
    )
    assert new_version == 2

    with pytest.raises(StaleVersionError):
        await repo.save_document(db_session, record.id, 1, {"website": {"name": "C"}})

    await db_session.refresh(record)
    reloaded = await repo.get_current(db_session)
    assert isinstance(reloaded, SiteSettingsRecord)
    assert reloaded.version == 2
    assert reloaded.document == {"website": {"name": "B"}}
    assert reloaded.updated_by == "admin"
