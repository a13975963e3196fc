"""Tests for dotted-path access into the settings document."""

from __future__ import annotations

import pytest

from travel_service.features.site_settings.exceptions import (
    PathNotFoundError,
    SettingsValidationError,
)
from travel_service.features.site_settings.paths import join_path, resolve, set_at, split_path
from travel_service.features.site_settings.schema import SETTINGS_SCHEMA, build_defaults


@pytest.fixture
def document() -> dict:
    return build_defaults()


def test_split_path_handles_root_and_sequences() -> None:
    assert split_path("") == ()
    assert split_path("features.booking.enabled") == ("features", "booking", "enabled")
    assert split_path(["website", "name"]) == ("website", "name")
    assert join_path(("website", "name")) == "website.name"


@pytest.mark.parametrize("path", ["features..enabled", ".features", "features."])
def test_split_path_rejects_empty_segments(path: str) -> None:
    with pytest.raises(PathNotFoundError) as exc_info:
        split_path(path)
    assert "malformed" in exc_info.value.detail


def test_resolve_returns_nested_value(document: dict) -> None:
    assert resolve(document, "features.booking.enabled") is True
    assert resolve(document, "website.name") == "Travel Agency"
    assert resolve(document, "") is document


def test_resolve_missing_segment_raises_with_full_path(document: dict) -> None:
    with pytest.raises(PathNotFoundError) as exc_info:
        resolve(document, "features.doesNotExist.enabled")
    assert exc_info.value.status_code == 404
    assert exc_info.value.extra["path"] == "features.doesNotExist.enabled"


def test_resolve_through_leaf_raises(document: dict) -> None:
    with pytest.raises(PathNotFoundError):
        resolve(document, "website.name.first")


def test_set_at_assigns_existing_leaf(document: dict) -> None:
    set_at(document, "features.flightSearch.showMultiCity", True)
    assert document["features"]["flightSearch"]["showMultiCity"] is True


def test_set_at_never_creates_intermediate_nodes(document: dict) -> None:
    with pytest.raises(PathNotFoundError):
        set_at(document, "features.cruises.enabled", True)
    assert "cruises" not in document["features"]


def test_set_at_with_schema_rejects_undeclared_leaf(document: dict) -> None:
    with pytest.raises(PathNotFoundError):
        set_at(document, "features.booking.instantConfirm", True, schema=SETTINGS_SCHEMA)
    assert "instantConfirm" not in document["features"]["booking"]


def test_set_at_with_schema_rejects_wrong_type_without_mutating(document: dict) -> None:
    with pytest.raises(SettingsValidationError) as exc_info:
        set_at(document, "features.booking.enabled", "yes", schema=SETTINGS_SCHEMA)
    assert exc_info.value.status_code == 400
    assert exc_info.value.path == "features.booking.enabled"
    assert document["features"]["booking"]["enabled"] is True


def test_set_at_root_replaces_contents(document: dict) -> None:
    replacement = {"website": {"name": "Elsewhere"}}
    set_at(document, "", replacement)
    assert document == {"website": {"name": "Elsewhere"}}

    replacement["website"]["name"] = "Changed"
    assert document["website"]["name"] == "Elsewhere"


def test_set_at_root_requires_mapping(document: dict) -> None:
    with pytest.raises(SettingsValidationError):
        set_at(document, "", ["not", "a", "mapping"])
