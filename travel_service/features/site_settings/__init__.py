"""Site settings and feature toggles.

One mutable settings document drives runtime behaviour of the storefront:
which search modes are shown, which payment providers are active, which
languages and currencies are offered.

Usage:
    from travel_service.features.site_settings import SiteSettingsServiceDep

    @router.get("/flights/search")
    async def search_flights(settings: SiteSettingsServiceDep):
        if not await settings.get_feature_status("features.flightSearch.enabled"):
            ...
"""

from __future__ import annotations

from .dependencies import SiteSettingsServiceDep, get_config_store, get_site_settings_service
from .exceptions import (
    ConcurrentUpdateError,
    PathNotFoundError,
    SectionNotFoundError,
    SettingsValidationError,
    StorageError,
    UnauthorizedError,
)
from .models import SiteSettingsRecord
from .router import admin_router, router
from .service import SiteSettingsService
from .store import ConfigStore, SiteConfiguration

__all__ = [
    "ConcurrentUpdateError",
    "ConfigStore",
    "PathNotFoundError",
    "SectionNotFoundError",
    "SettingsValidationError",
    "SiteConfiguration",
    "SiteSettingsRecord",
    "SiteSettingsService",
    "SiteSettingsServiceDep",
    "StorageError",
    "UnauthorizedError",
    "admin_router",
    "get_config_store",
    "get_site_settings_service",
    "router",
]
