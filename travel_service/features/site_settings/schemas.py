"""Site settings schemas for API requests and responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from .schema import CurrencyEntry, LanguageEntry


class SettingsUpdateRequest(BaseModel):
    """Per-section patches for ``PUT /admin/settings``.

    Each provided section is shallow-merged: its direct children replace the
    stored ones. Undeclared section names are passed through and rejected by
    the service with 404.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "website": {"name": "Sunny Travels"},
                "features": {"flightSearch": {"enabled": True, "showMultiCity": True}},
            }
        },
    )

    website: dict[str, Any] | None = None
    features: dict[str, Any] | None = None
    languages: dict[str, Any] | None = None
    currencies: dict[str, Any] | None = None
    seo: dict[str, Any] | None = None
    email: dict[str, Any] | None = None
    payment: dict[str, Any] | None = None

    def patches(self) -> dict[str, Any]:
        """Sections actually sent by the client, extras included."""
        return self.model_dump(exclude_unset=True)


class ToggleFeatureRequest(BaseModel):
    """Body of ``POST /admin/toggle-feature``."""

    feature: str = Field(
        min_length=1,
        max_length=200,
        description="Dotted path of a boolean setting",
        examples=["features.flightSearch.showMultiCity"],
    )
    enabled: StrictBool = Field(description="New value")


class SettingsUpdateResponse(BaseModel):
    """Result of an administrative write."""

    message: str
    settings: dict[str, Any]


class FeatureStatusResponse(BaseModel):
    """Value of a single boolean toggle."""

    feature: str
    enabled: bool


class StripeInfo(BaseModel):
    enabled: bool
    publishableKey: str | None = None


class PaypalInfo(BaseModel):
    enabled: bool
    clientId: str | None = None


class PaymentInfoResponse(BaseModel):
    """Payment providers without server-side credentials."""

    stripe: StripeInfo
    paypal: PaypalInfo


class SmtpInfo(BaseModel):
    host: str | None = None
    port: int | None = None
    secure: bool | None = None


class EmailInfoResponse(BaseModel):
    """Email sender settings without SMTP credentials."""

    fromEmail: str | None = None
    fromName: str | None = None
    smtp: SmtpInfo


class HealthSettingsSummary(BaseModel):
    website: bool
    features: bool
    languages: bool
    currencies: bool


class SettingsHealthResponse(BaseModel):
    """Settings health check result."""

    status: Literal["healthy", "unhealthy"]
    timestamp: str
    settings: HealthSettingsSummary | None = None
    error: str | None = None


__all__ = [
    "CurrencyEntry",
    "EmailInfoResponse",
    "FeatureStatusResponse",
    "LanguageEntry",
    "PaymentInfoResponse",
    "SettingsHealthResponse",
    "SettingsUpdateRequest",
    "SettingsUpdateResponse",
    "ToggleFeatureRequest",
]
