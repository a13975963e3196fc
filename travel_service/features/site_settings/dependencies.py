"""Site settings dependencies for FastAPI.

The ``ConfigStore`` is created by the application lifespan and kept on
``app.state``; tests swap it through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from .exceptions import StorageError
from .service import SiteSettingsService
from .store import ConfigStore


def get_config_store(request: Request) -> ConfigStore:
    """Return the process-wide ConfigStore.

    Raises:
        StorageError: If the application started without a store (503).
    """
    store = getattr(request.app.state, "config_store", None)
    if store is None:
        raise StorageError(
            "Settings store is not initialized",
            status_code=503,
            type="storage-unavailable",
        )
    return store


def get_site_settings_service(
    store: Annotated[ConfigStore, Depends(get_config_store)],
) -> SiteSettingsService:
    """Build a SiteSettingsService for the current request."""
    return SiteSettingsService(store)


SiteSettingsServiceDep = Annotated[SiteSettingsService, Depends(get_site_settings_service)]
