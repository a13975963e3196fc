"""Tests for reduced views of the settings document."""

from __future__ import annotations

from travel_service.features.site_settings import projection
from travel_service.features.site_settings.schema import build_defaults


def test_public_view_excludes_restricted_sections_and_favicon() -> None:
    document = build_defaults()
    document["website"]["favicon"] = "/favicon.ico"

    view = projection.public_view(document)

    assert set(view) == {"website", "features", "languages", "currencies"}
    assert "favicon" not in view["website"]
    assert view["website"]["name"] == "Travel Agency"


def test_public_view_does_not_alias_document() -> None:
    document = build_defaults()
    view = projection.public_view(document)

    view["features"]["booking"]["enabled"] = False
    view["website"]["socialMedia"]["facebook"] = "fb"

    assert document["features"]["booking"]["enabled"] is True
    assert document["website"]["socialMedia"]["facebook"] is None


def test_enabled_entries_tolerates_missing_section() -> None:
    assert projection.enabled_entries({}, "languages") == []
    assert projection.enabled_entries({"languages": {"supported": None}}, "languages") == []


def test_payment_info_with_missing_payment_section() -> None:
    assert projection.payment_info({}) == {
        "stripe": {"enabled": False, "publishableKey": None},
        "paypal": {"enabled": False, "clientId": None},
    }


def test_redact_secrets_masks_only_set_credentials() -> None:
    document = build_defaults()
    document["payment"]["stripe"]["secretKey"] = "sk_live"
    document["email"]["smtp"]["pass"] = "hunter2"

    redacted = projection.redact_secrets(document)

    assert redacted["payment"]["stripe"]["secretKey"] == projection.REDACTED
    assert redacted["email"]["smtp"]["pass"] == projection.REDACTED
    assert redacted["payment"]["paypal"]["clientSecret"] is None
    assert document["payment"]["stripe"]["secretKey"] == "sk_live"


def test_redact_secrets_skips_missing_branches() -> None:
    assert projection.redact_secrets({"website": {"name": "x"}}) == {"website": {"name": "x"}}
