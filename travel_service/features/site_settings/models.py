"""Site settings database model.

The whole settings document is stored as one JSON value (JSONB on
PostgreSQL) next to an optimistic version counter.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from travel_service.core.database.base import (
    AuditColumnsMixin,
    Base,
    IntegerPKMixin,
    JSONDocument,
    TimestampMixin,
)


class SiteSettingsRecord(Base, IntegerPKMixin, TimestampMixin, AuditColumnsMixin):
    """Persisted site settings document.

    Only the row with the lowest id is ever read; see ConfigStore.

    Attributes:
        document: The settings tree (website, features, languages, ...).
        version: Incremented on every save; guards against lost updates.
    """

    __tablename__ = "site_settings"

    document: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        comment="Settings document",
    )
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
        comment="Optimistic concurrency counter",
    )

    def __repr__(self) -> str:
        return f"SiteSettingsRecord(id={self.id!r}, version={self.version!r})"


__all__ = ["SiteSettingsRecord"]
