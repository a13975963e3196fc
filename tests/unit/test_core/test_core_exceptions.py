"""Tests for core and site settings exceptions."""

from travel_service.core import exceptions as exc
from travel_service.features.site_settings.exceptions import (
    ConcurrentUpdateError,
    PathNotFoundError,
    SettingsValidationError,
    StorageError,
    UnauthorizedError,
)


def test_app_exception_defaults_title() -> None:
    error = exc.AppException(status_code=400, detail="bad")
    assert error.title == "Bad Request"
    assert error.type == "about:blank"
    assert error.extra == {}


def test_unknown_status_gets_generic_title() -> None:
    assert exc.AppException(status_code=418, detail="teapot").title == "Error"


def test_not_found_exception_fields() -> None:
    error = exc.NotFoundException(detail="missing")
    assert error.status_code == 404
    assert error.type == "not-found"
    assert error.title == "Not Found"


def test_unauthenticated_exception_fields() -> None:
    error = exc.UnauthenticatedException(detail="who are you")
    assert error.status_code == 401
    assert error.title == "Unauthorized"


def test_path_not_found_carries_path() -> None:
    error = PathNotFoundError("features.nope.enabled")
    assert isinstance(error, exc.NotFoundException)
    assert error.type == "path-not-found"
    assert error.extra == {"path": "features.nope.enabled"}
    assert "features.nope.enabled" in error.detail


def test_settings_validation_error_merges_extra() -> None:
    error = SettingsValidationError("website", "unknown keys: x", extra={"unknown_keys": ["x"]})
    assert error.status_code == 400
    assert error.title == "Validation Error"
    assert error.extra == {"path": "website", "unknown_keys": ["x"]}


def test_settings_validation_error_root_path() -> None:
    error = SettingsValidationError("", "expected an object")
    assert "<root>" in error.detail


def test_unauthorized_error_is_forbidden() -> None:
    error = UnauthorizedError("toggle features")
    assert isinstance(error, exc.ForbiddenException)
    assert error.status_code == 403
    assert "toggle features" in error.detail


def test_concurrent_update_is_storage_error() -> None:
    error = ConcurrentUpdateError(3)
    assert isinstance(error, StorageError)
    assert error.status_code == 409
    assert error.type == "concurrent-update"
    assert error.extra["expected_version"] == 3
