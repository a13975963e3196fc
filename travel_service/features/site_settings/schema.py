"""Declared shape of the site settings document.

The document is described once, as a tree of ``Group`` and ``Leaf`` nodes.
Defaults for a freshly created document, write validation and the list of
credential-bearing paths all derive from ``SETTINGS_SCHEMA``.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic import ValidationError as PydanticValidationError

from .exceptions import PathNotFoundError, SettingsValidationError


class LeafKind(StrEnum):
    """Value type of a leaf node."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    STRING_LIST = "string_list"
    LANGUAGE_LIST = "language_list"
    CURRENCY_LIST = "currency_list"


@dataclass(frozen=True, slots=True)
class Leaf:
    """A terminal value of the document."""

    kind: LeafKind
    default: Any = None
    nullable: bool = True


@dataclass(frozen=True, slots=True)
class Group:
    """A mapping node; ``children`` maps document keys to child nodes."""

    children: Mapping[str, Leaf | Group] = field(default_factory=dict)


Node = Leaf | Group


class LanguageEntry(BaseModel):
    """One entry of ``languages.supported``."""

    model_config = ConfigDict(extra="forbid")

    code: StrictStr = Field(min_length=1, max_length=16)
    name: StrictStr | None = None
    flag: StrictStr | None = None
    enabled: StrictBool = True


class CurrencyEntry(BaseModel):
    """One entry of ``currencies.supported``."""

    model_config = ConfigDict(extra="forbid")

    code: StrictStr = Field(min_length=1, max_length=16)
    symbol: StrictStr | None = None
    name: StrictStr | None = None
    enabled: StrictBool = True


_ENTRY_MODELS: dict[LeafKind, type[BaseModel]] = {
    LeafKind.LANGUAGE_LIST: LanguageEntry,
    LeafKind.CURRENCY_LIST: CurrencyEntry,
}


def _text(default: str | None = None, *, nullable: bool = True) -> Leaf:
    return Leaf(LeafKind.STRING, default, nullable)


def _flag(default: bool) -> Leaf:
    return Leaf(LeafKind.BOOLEAN, default, nullable=False)


SETTINGS_SCHEMA = Group(
    {
        "website": Group(
            {
                "name": _text("Travel Agency"),
                "description": _text(),
                "logo": _text(),
                "favicon": _text(),
                "contactEmail": _text(),
                "contactPhone": _text(),
                "address": _text(),
                "socialMedia": Group(
                    {
                        "facebook": _text(),
                        "twitter": _text(),
                        "instagram": _text(),
                        "linkedin": _text(),
                        "youtube": _text(),
                    }
                ),
            }
        ),
        "features": Group(
            {
                "flightSearch": Group(
                    {
                        "enabled": _flag(True),
                        "showRoundTrip": _flag(True),
                        "showSingleTrip": _flag(True),
                        "showMultiCity": _flag(False),
                    }
                ),
                "hotelSearch": Group(
                    {
                        "enabled": _flag(True),
                        "showRoomTypes": _flag(True),
                        "showAmenities": _flag(True),
                    }
                ),
                "destinationSearch": Group(
                    {
                        "enabled": _flag(True),
                        "showLocalDestinations": _flag(True),
                        "showInternationalDestinations": _flag(True),
                    }
                ),
                "packages": Group(
                    {
                        "enabled": _flag(True),
                        "allowCustomPackages": _flag(True),
                        "showFeaturedPackages": _flag(True),
                    }
                ),
                "discounts": Group(
                    {
                        "enabled": _flag(True),
                        "showSlider": _flag(True),
                    }
                ),
                "reviews": Group(
                    {
                        "enabled": _flag(True),
                        "requireApproval": _flag(True),
                    }
                ),
                "booking": Group(
                    {
                        "enabled": _flag(True),
                        "requirePayment": _flag(True),
                        "allowPartialPayment": _flag(False),
                    }
                ),
            }
        ),
        "languages": Group(
            {
                "default": _text("en", nullable=False),
                "supported": Leaf(
                    LeafKind.LANGUAGE_LIST,
                    [{"code": "en", "name": "English", "flag": "🇺🇸", "enabled": True}],
                    nullable=False,
                ),
            }
        ),
        "currencies": Group(
            {
                "default": _text("USD", nullable=False),
                "supported": Leaf(
                    LeafKind.CURRENCY_LIST,
                    [{"code": "USD", "symbol": "$", "name": "US Dollar", "enabled": True}],
                    nullable=False,
                ),
            }
        ),
        "seo": Group(
            {
                "metaTitle": _text(),
                "metaDescription": _text(),
                "metaKeywords": Leaf(LeafKind.STRING_LIST, [], nullable=False),
                "googleAnalytics": _text(),
                "facebookPixel": _text(),
            }
        ),
        "email": Group(
            {
                "smtp": Group(
                    {
                        "host": _text(),
                        "port": Leaf(LeafKind.INTEGER),
                        "secure": Leaf(LeafKind.BOOLEAN),
                        "user": _text(),
                        "pass": _text(),
                    }
                ),
                "fromEmail": _text(),
                "fromName": _text(),
            }
        ),
        "payment": Group(
            {
                "stripe": Group(
                    {
                        "publishableKey": _text(),
                        "secretKey": _text(),
                        "enabled": _flag(False),
                    }
                ),
                "paypal": Group(
                    {
                        "clientId": _text(),
                        "clientSecret": _text(),
                        "enabled": _flag(False),
                    }
                ),
            }
        ),
    }
)

SECTIONS: tuple[str, ...] = tuple(SETTINGS_SCHEMA.children)

# Sections that carry credentials or marketing tokens; administrators only
RESTRICTED_SECTIONS: frozenset[str] = frozenset({"seo", "email", "payment"})

SECRET_PATHS: tuple[str, ...] = (
    "email.smtp.pass",
    "payment.stripe.secretKey",
    "payment.paypal.clientSecret",
)


def build_defaults(node: Node = SETTINGS_SCHEMA) -> Any:
    """Return a fresh default value for ``node`` (a full document by default)."""
    if isinstance(node, Group):
        return {key: build_defaults(child) for key, child in node.children.items()}
    return copy.deepcopy(node.default)


def node_at(root: Node, segments: Sequence[str]) -> Node:
    """Walk the schema along ``segments``.

    Raises:
        PathNotFoundError: If a segment is not declared, or descends below a leaf.
    """
    node = root
    for depth, segment in enumerate(segments):
        if not isinstance(node, Group) or segment not in node.children:
            raise PathNotFoundError(".".join(segments[: depth + 1]))
        node = node.children[segment]
    return node


def validate(node: Node, value: Any, path: str = "", *, partial: bool = True) -> Any:
    """Check ``value`` against ``node`` and return a cleaned copy.

    Groups must be mappings without undeclared keys. With ``partial`` a group
    may omit children; otherwise every declared child must be present.

    Raises:
        SettingsValidationError: If the value does not match the node.
    """
    if isinstance(node, Group):
        return _validate_group(node, value, path, partial=partial)
    return _validate_leaf(node, value, path)


def _validate_group(node: Group, value: Any, path: str, *, partial: bool) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise SettingsValidationError(path, f"expected an object, got {_type_name(value)}")

    unknown = sorted(str(key) for key in value if key not in node.children)
    if unknown:
        raise SettingsValidationError(
            path, f"unknown keys: {', '.join(unknown)}", extra={"unknown_keys": unknown}
        )

    if not partial:
        missing = sorted(key for key in node.children if key not in value)
        if missing:
            raise SettingsValidationError(
                path, f"missing keys: {', '.join(missing)}", extra={"missing_keys": missing}
            )

    return {
        key: validate(node.children[key], child, _join(path, key), partial=partial)
        for key, child in value.items()
    }


def _validate_leaf(node: Leaf, value: Any, path: str) -> Any:
    if value is None:
        if node.nullable:
            return None
        raise SettingsValidationError(path, "value may not be null")

    kind = node.kind
    if kind is LeafKind.BOOLEAN:
        if not isinstance(value, bool):
            raise SettingsValidationError(path, f"expected a boolean, got {_type_name(value)}")
        return value

    if kind is LeafKind.STRING:
        if not isinstance(value, str):
            raise SettingsValidationError(path, f"expected a string, got {_type_name(value)}")
        return value

    if kind is LeafKind.INTEGER:
        # bool is an int subclass and never a valid integer setting
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingsValidationError(path, f"expected an integer, got {_type_name(value)}")
        return value

    if not isinstance(value, list):
        raise SettingsValidationError(path, f"expected a list, got {_type_name(value)}")

    if kind is LeafKind.STRING_LIST:
        for index, item in enumerate(value):
            if not isinstance(item, str):
                raise SettingsValidationError(
                    f"{path}[{index}]", f"expected a string, got {_type_name(item)}"
                )
        return list(value)

    model = _ENTRY_MODELS[kind]
    cleaned: list[dict[str, Any]] = []
    for index, item in enumerate(value):
        try:
            cleaned.append(model.model_validate(item).model_dump())
        except PydanticValidationError as exc:
            raise SettingsValidationError(
                f"{path}[{index}]",
                "; ".join(
                    f"{'.'.join(str(loc) for loc in err['loc']) or 'entry'}: {err['msg']}"
                    for err in exc.errors()
                ),
            ) from exc
    return cleaned


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__
