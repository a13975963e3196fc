"""Tests for the declared settings shape, defaults and validation."""

from __future__ import annotations

import pytest

from travel_service.features.site_settings.exceptions import (
    PathNotFoundError,
    SettingsValidationError,
)
from travel_service.features.site_settings.schema import (
    RESTRICTED_SECTIONS,
    SECTIONS,
    SETTINGS_SCHEMA,
    Group,
    Leaf,
    LeafKind,
    build_defaults,
    node_at,
    validate,
)


def test_sections_in_document_order() -> None:
    assert SECTIONS == (
        "website",
        "features",
        "languages",
        "currencies",
        "seo",
        "email",
        "payment",
    )
    assert RESTRICTED_SECTIONS == {"seo", "email", "payment"}


def test_build_defaults_matches_documented_values() -> None:
    defaults = build_defaults()

    assert defaults["website"]["name"] == "Travel Agency"
    assert defaults["website"]["socialMedia"]["youtube"] is None
    assert defaults["features"]["flightSearch"] == {
        "enabled": True,
        "showRoundTrip": True,
        "showSingleTrip": True,
        "showMultiCity": False,
    }
    assert defaults["features"]["booking"]["allowPartialPayment"] is False
    assert defaults["languages"] == {
        "default": "en",
        "supported": [{"code": "en", "name": "English", "flag": "🇺🇸", "enabled": True}],
    }
    assert defaults["currencies"]["default"] == "USD"
    assert defaults["currencies"]["supported"][0]["symbol"] == "$"
    assert defaults["seo"]["metaKeywords"] == []
    assert defaults["email"]["smtp"]["port"] is None
    assert defaults["payment"]["stripe"]["enabled"] is False
    assert defaults["payment"]["paypal"]["enabled"] is False


def test_build_defaults_returns_independent_copies() -> None:
    first = build_defaults()
    second = build_defaults()
    first["languages"]["supported"].append({"code": "fr", "enabled": True})
    assert len(second["languages"]["supported"]) == 1


def test_every_feature_leaf_is_boolean() -> None:
    features = SETTINGS_SCHEMA.children["features"]
    assert isinstance(features, Group)
    for group in features.children.values():
        assert isinstance(group, Group)
        for leaf in group.children.values():
            assert isinstance(leaf, Leaf)
            assert leaf.kind is LeafKind.BOOLEAN


def test_node_at_reports_first_undeclared_prefix() -> None:
    with pytest.raises(PathNotFoundError) as exc_info:
        node_at(SETTINGS_SCHEMA, ("features", "cruises", "enabled"))
    assert exc_info.value.path == "features.cruises"


def test_validate_partial_group_accepts_subset() -> None:
    cleaned = validate(
        SETTINGS_SCHEMA.children["features"],
        {"flightSearch": {"showMultiCity": True}},
        "features",
    )
    assert cleaned == {"flightSearch": {"showMultiCity": True}}


def test_validate_full_group_requires_all_keys() -> None:
    with pytest.raises(SettingsValidationError) as exc_info:
        validate(
            SETTINGS_SCHEMA.children["features"],
            {"flightSearch": {"enabled": True}},
            "features",
            partial=False,
        )
    assert "missing keys" in exc_info.value.message


def test_validate_rejects_unknown_keys() -> None:
    with pytest.raises(SettingsValidationError) as exc_info:
        validate(SETTINGS_SCHEMA.children["website"], {"tagline": "Go!"}, "website")
    assert exc_info.value.path == "website"
    assert exc_info.value.extra["unknown_keys"] == ["tagline"]


@pytest.mark.parametrize(
    ("path", "value"),
    [
        (("features", "booking", "enabled"), 1),
        (("website", "name"), 42),
        (("email", "smtp", "port"), True),
        (("email", "smtp", "port"), "587"),
        (("seo", "metaKeywords"), "travel, flights"),
        (("languages", "default"), None),
    ],
)
def test_validate_leaf_type_mismatches(path: tuple[str, ...], value: object) -> None:
    with pytest.raises(SettingsValidationError):
        validate(node_at(SETTINGS_SCHEMA, path), value, ".".join(path))


def test_validate_nullable_leaf_accepts_none() -> None:
    assert validate(node_at(SETTINGS_SCHEMA, ("website", "logo")), None) is None
    assert validate(node_at(SETTINGS_SCHEMA, ("email", "smtp", "port")), 587) == 587


def test_validate_language_entries_fill_defaults() -> None:
    cleaned = validate(
        node_at(SETTINGS_SCHEMA, ("languages", "supported")),
        [{"code": "fr", "name": "Français"}],
        "languages.supported",
    )
    assert cleaned == [{"code": "fr", "name": "Français", "flag": None, "enabled": True}]


def test_validate_currency_entry_error_names_index() -> None:
    with pytest.raises(SettingsValidationError) as exc_info:
        validate(
            node_at(SETTINGS_SCHEMA, ("currencies", "supported")),
            [{"code": "EUR"}, {"code": "GBP", "enabled": "yes"}],
            "currencies.supported",
        )
    assert exc_info.value.path == "currencies.supported[1]"
    assert "enabled" in exc_info.value.message
