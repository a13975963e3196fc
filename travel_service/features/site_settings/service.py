"""Site settings service.

Reads and administrative writes of the settings document. Every operation
loads the current document from the store; privileged operations check the
caller before any storage access.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from travel_service.infra.logging import get_lazy_logger

from . import projection
from .exceptions import (
    PathNotFoundError,
    SectionNotFoundError,
    SettingsValidationError,
    UnauthorizedError,
)
from .paths import PathLike, join_path, resolve, set_at, split_path
from .schema import (
    RESTRICTED_SECTIONS,
    SECTIONS,
    SETTINGS_SCHEMA,
    Leaf,
    LeafKind,
    node_at,
    validate,
)

if TYPE_CHECKING:
    from travel_service.core.schemas.auth import CallerIdentity

    from .store import ConfigStore

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


class SiteSettingsService:
    """Operations on the site settings document.

    Example:
        service = SiteSettingsService(store)
        if await service.get_feature_status("features.booking.enabled"):
            ...
        await service.set_feature("features.flightSearch.showMultiCity", True, caller)
    """

    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    @staticmethod
    def _require_admin(caller: CallerIdentity, operation: str) -> None:
        if not caller.is_admin:
            logger.warning(
                "Rejected non-admin settings operation",
                extra={"operation": operation, "user_id": caller.user_id},
            )
            raise UnauthorizedError(operation)

    async def _document(self) -> dict[str, Any]:
        config = await self.store.get_instance()
        return config.document

    async def get_all(self, caller: CallerIdentity) -> dict[str, Any]:
        """Full settings document, credentials included. Admins only."""
        self._require_admin(caller, "read all settings")
        return await self._document()

    async def get_section(self, name: str, caller: CallerIdentity) -> Any:
        """One top-level section.

        Raises:
            SectionNotFoundError: If ``name`` is not a section.
            UnauthorizedError: If the section is restricted and the caller is not an admin.
        """
        if name not in SECTIONS:
            raise SectionNotFoundError(name)
        if name in RESTRICTED_SECTIONS:
            self._require_admin(caller, f"read the {name} settings")

        document = await self._document()
        if name not in document:
            raise SectionNotFoundError(name)
        return document[name]

    async def get_feature_status(self, path: PathLike) -> bool:
        """Value of a boolean toggle such as ``features.booking.enabled``.

        Raises:
            PathNotFoundError: If the path is missing or does not end at a boolean.
        """
        segments = split_path(path)
        value = resolve(await self._document(), segments)
        if not isinstance(value, bool):
            dotted = join_path(segments)
            raise PathNotFoundError(dotted, detail=f"Setting path '{dotted}' is not a feature toggle")
        return value

    async def set_feature(
        self,
        path: PathLike,
        enabled: Any,
        caller: CallerIdentity,
    ) -> dict[str, Any]:
        """Set a boolean toggle and save. Admins only.

        Returns:
            The updated settings document.

        Raises:
            UnauthorizedError: If the caller is not an admin.
            SettingsValidationError: If ``enabled`` is not a bool or the path is
                not a boolean setting.
            PathNotFoundError: If the path is not declared.
            ConcurrentUpdateError: If another write landed first.
        """
        self._require_admin(caller, "toggle features")

        segments = split_path(path)
        dotted = join_path(segments)
        if not isinstance(enabled, bool):
            raise SettingsValidationError(dotted, "enabled must be a boolean")

        declared = node_at(SETTINGS_SCHEMA, segments)
        if not (isinstance(declared, Leaf) and declared.kind is LeafKind.BOOLEAN):
            raise SettingsValidationError(dotted, "not a boolean setting")

        config = await self.store.get_instance()
        set_at(config.document, segments, enabled, schema=SETTINGS_SCHEMA)
        await self.store.save(config, updated_by=caller.user_id)

        logger.info(
            "Feature %s %s",
            dotted,
            "enabled" if enabled else "disabled",
            extra={"path": dotted, "enabled": enabled, "version": config.version},
        )
        return config.document

    async def merge_update(
        self,
        section_patches: Mapping[str, Any],
        caller: CallerIdentity,
    ) -> dict[str, Any]:
        """Shallow-merge per-section patches into the document and save. Admins only.

        For each section in ``section_patches`` the patch's direct children
        replace the section's direct children; nested objects are replaced
        wholesale, not merged. ``None`` patches are skipped. All patches are
        validated before any is applied.

        Returns:
            The updated settings document.

        Raises:
            UnauthorizedError: If the caller is not an admin.
            SectionNotFoundError: If a key is not a section.
            SettingsValidationError: If a patch does not match the section shape.
            ConcurrentUpdateError: If another write landed first.
        """
        self._require_admin(caller, "update settings")

        if not isinstance(section_patches, Mapping):
            raise SettingsValidationError("", "expected an object of section patches")

        cleaned: dict[str, dict[str, Any]] = {}
        for section, patch in section_patches.items():
            if patch is None:
                continue
            if section not in SECTIONS:
                raise SectionNotFoundError(section)
            cleaned[section] = validate(SETTINGS_SCHEMA.children[section], patch, section)

        config = await self.store.get_instance()
        if not cleaned:
            return config.document

        for section, patch in cleaned.items():
            current = config.document.get(section)
            merged = dict(current) if isinstance(current, Mapping) else {}
            merged.update(patch)
            config.document[section] = merged

        await self.store.save(config, updated_by=caller.user_id)

        logger.info(
            "Updated settings sections: %s",
            ", ".join(sorted(cleaned)),
            extra={"sections": sorted(cleaned), "version": config.version},
        )
        _lazy.debug("Settings after update: %s", lambda: projection.redact_secrets(config.document))
        return config.document

    async def public_view(self) -> dict[str, Any]:
        """Settings safe for anonymous storefront visitors."""
        return projection.public_view(await self._document())

    async def website_info(self) -> dict[str, Any]:
        """The full website section, favicon included."""
        document = await self._document()
        return dict(document.get("website") or {})

    async def supported_languages(self) -> list[dict[str, Any]]:
        return projection.enabled_entries(await self._document(), "languages")

    async def supported_currencies(self) -> list[dict[str, Any]]:
        return projection.enabled_entries(await self._document(), "currencies")

    async def payment_info(self) -> dict[str, Any]:
        return projection.payment_info(await self._document())

    async def email_info(self, caller: CallerIdentity) -> dict[str, Any]:
        """Email sender settings without SMTP credentials. Admins only."""
        self._require_admin(caller, "read the email settings")
        return projection.email_info(await self._document())

    async def health(self) -> dict[str, Any]:
        """Summary of whether the essential settings are populated.

        Raises:
            StorageError: If the document cannot be loaded.
        """
        document = await self._document()
        website = document.get("website") or {}
        languages = document.get("languages") or {}
        currencies = document.get("currencies") or {}
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "settings": {
                "website": bool(website.get("name")),
                "features": bool(document.get("features")),
                "languages": bool(languages.get("supported")),
                "currencies": bool(currencies.get("supported")),
            },
        }
