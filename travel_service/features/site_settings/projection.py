"""Reduced views of the settings document for unprivileged callers.

Every function returns fresh copies; nothing returned aliases the loaded
document.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .exceptions import PathNotFoundError
from .paths import resolve, split_path
from .schema import SECRET_PATHS

PUBLIC_WEBSITE_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "logo",
    "contactEmail",
    "contactPhone",
    "address",
    "socialMedia",
)

REDACTED = "***"


def _section(document: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = document.get(name)
    return value if isinstance(value, Mapping) else {}


def public_view(document: Mapping[str, Any]) -> dict[str, Any]:
    """Project the document onto what anonymous storefront visitors may see.

    ``seo``, ``email`` and ``payment`` are left out entirely, as is
    ``website.favicon``.
    """
    website = _section(document, "website")
    return {
        "website": {key: copy.deepcopy(website.get(key)) for key in PUBLIC_WEBSITE_FIELDS},
        "features": copy.deepcopy(document.get("features", {})),
        "languages": copy.deepcopy(document.get("languages", {})),
        "currencies": copy.deepcopy(document.get("currencies", {})),
    }


def enabled_entries(document: Mapping[str, Any], section: str) -> list[dict[str, Any]]:
    """Entries of ``<section>.supported`` whose ``enabled`` flag is true, in order."""
    supported = _section(document, section).get("supported") or []
    return [
        copy.deepcopy(dict(entry))
        for entry in supported
        if isinstance(entry, Mapping) and entry.get("enabled") is True
    ]


def payment_info(document: Mapping[str, Any]) -> dict[str, Any]:
    """Provider status plus the client-side key, only for enabled providers."""
    payment = _section(document, "payment")
    stripe = _section(payment, "stripe")
    paypal = _section(payment, "paypal")

    stripe_enabled = stripe.get("enabled") is True
    paypal_enabled = paypal.get("enabled") is True
    return {
        "stripe": {
            "enabled": stripe_enabled,
            "publishableKey": stripe.get("publishableKey") if stripe_enabled else None,
        },
        "paypal": {
            "enabled": paypal_enabled,
            "clientId": paypal.get("clientId") if paypal_enabled else None,
        },
    }


def email_info(document: Mapping[str, Any]) -> dict[str, Any]:
    """Sender identity and SMTP endpoint without credentials."""
    email = _section(document, "email")
    smtp = _section(email, "smtp")
    return {
        "fromEmail": email.get("fromEmail"),
        "fromName": email.get("fromName"),
        "smtp": {
            "host": smtp.get("host"),
            "port": smtp.get("port"),
            "secure": smtp.get("secure"),
        },
    }


def redact_secrets(document: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of the document with every set credential replaced by ``***``.

    Meant for log output; administrators receive the unredacted document.
    """
    redacted = copy.deepcopy(dict(document))
    for path in SECRET_PATHS:
        segments = split_path(path)
        try:
            parent = resolve(redacted, segments[:-1])
        except PathNotFoundError:
            continue
        if isinstance(parent, dict) and parent.get(segments[-1]) is not None:
            parent[segments[-1]] = REDACTED
    return redacted
