"""Core database package: declarative base, mixins and a thin repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - IntegerPKMixin: Integer auto-increment primary key
    - TimestampMixin: created_at, updated_at tracking
    - AuditColumnsMixin: created_by, updated_by tracking
    - JSONDocument: JSON column type (JSONB on PostgreSQL)

Repository:
    - BaseRepository[T]: Generic persistence helpers with explicit session passing

Exceptions:
    - RepositoryError, StaleVersionError
"""

from travel_service.core.database.base import (
    NAMING_CONVENTION,
    AuditColumnsMixin,
    Base,
    IntegerPKMixin,
    JSONDocument,
    TimestampMixin,
)
from travel_service.core.database.exceptions import (
    RepositoryError,
    StaleVersionError,
)
from travel_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "AuditColumnsMixin",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "JSONDocument",
    "RepositoryError",
    "StaleVersionError",
    "TimestampMixin",
]
