"""Database repository exceptions.

Repository-level errors with better messages and typing than raw
SQLAlchemy exceptions. Feature code translates these into AppException
subclasses before they reach the HTTP layer.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class StaleVersionError(RepositoryError):
    """Optimistic version check failed: the row changed since it was read.

    Attributes:
        model_name: Name of the model class
        entity_id: Primary key of the row
        expected_version: Version the caller read
    """

    def __init__(self, model_name: str, entity_id: Any, expected_version: int):
        self.model_name = model_name
        self.entity_id = entity_id
        self.expected_version = expected_version
        super().__init__(
            f"{model_name} was modified concurrently",
            details={"id": entity_id, "expected_version": expected_version},
        )
