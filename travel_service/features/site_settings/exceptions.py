"""Site settings failures.

Every failure is an ``AppException`` so the global handler renders it as an
RFC 7807 problem response.
"""

from __future__ import annotations

from typing import Any

from travel_service.core.exceptions import (
    AppException,
    BadRequestException,
    ForbiddenException,
    NotFoundException,
)


class PathNotFoundError(NotFoundException):
    """A dotted path does not address a node of the settings document."""

    def __init__(self, path: str, detail: str | None = None) -> None:
        self.path = path
        super().__init__(
            detail=detail or f"Setting path '{path}' does not exist",
            type="path-not-found",
            extra={"path": path},
        )


class SectionNotFoundError(NotFoundException):
    """A top-level section name is not part of the settings document."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(
            detail=f"Settings section '{section}' does not exist",
            type="section-not-found",
            extra={"section": section},
        )


class SettingsValidationError(BadRequestException):
    """A value does not match the declared shape of its settings node."""

    def __init__(self, path: str, message: str, extra: dict[str, Any] | None = None) -> None:
        self.path = path
        self.message = message
        where = path or "<root>"
        super().__init__(
            detail=f"Invalid value at '{where}': {message}",
            type="validation-error",
            extra={"path": path, **(extra or {})},
        )
        self.title = "Validation Error"


class UnauthorizedError(ForbiddenException):
    """The caller lacks the administrator privilege an operation requires."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            detail=f"Administrator privileges are required to {operation}",
            type="unauthorized",
            extra={"operation": operation},
        )


class StorageError(AppException):
    """The settings document could not be read from or written to storage."""

    def __init__(
        self,
        detail: str = "Settings storage is unavailable",
        *,
        status_code: int = 500,
        type: str = "storage-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=status_code,
            detail=detail,
            type=type,
            extra=extra,
        )


class ConcurrentUpdateError(StorageError):
    """The document changed between read and save; the caller should re-read."""

    def __init__(self, expected_version: int) -> None:
        self.expected_version = expected_version
        super().__init__(
            detail="Settings were modified by another request; reload and retry",
            status_code=409,
            type="concurrent-update",
            extra={"expected_version": expected_version},
        )
