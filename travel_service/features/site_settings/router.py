"""Site settings REST API endpoints.

``router`` serves storefront and admin reads under ``/settings``;
``admin_router`` serves administrative writes under ``/admin``.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from travel_service.core.dependencies.auth import CallerDep

from .dependencies import SiteSettingsServiceDep
from .exceptions import StorageError
from .schemas import (
    CurrencyEntry,
    EmailInfoResponse,
    FeatureStatusResponse,
    LanguageEntry,
    PaymentInfoResponse,
    SettingsHealthResponse,
    SettingsUpdateRequest,
    SettingsUpdateResponse,
    ToggleFeatureRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/public",
    summary="Public settings",
    description="Website identity, feature toggles, languages and currencies. No credentials.",
)
async def get_public_settings(service: SiteSettingsServiceDep) -> dict[str, Any]:
    return await service.public_view()


@router.get(
    "",
    summary="All settings",
    description="The complete settings document, credentials included. Administrators only.",
)
async def get_all_settings(
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> dict[str, Any]:
    return await service.get_all(caller)


@router.get(
    "/languages/supported",
    response_model=list[LanguageEntry],
    summary="Enabled languages",
)
async def get_supported_languages(service: SiteSettingsServiceDep) -> list[dict[str, Any]]:
    return await service.supported_languages()


@router.get(
    "/currencies/supported",
    response_model=list[CurrencyEntry],
    summary="Enabled currencies",
)
async def get_supported_currencies(service: SiteSettingsServiceDep) -> list[dict[str, Any]]:
    return await service.supported_currencies()


@router.get(
    "/features/status",
    summary="All feature toggles",
)
async def get_features(
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> Any:
    return await service.get_section("features", caller)


@router.get(
    "/features/{path}/status",
    response_model=FeatureStatusResponse,
    summary="Single feature toggle",
    description="Look up a boolean toggle by dotted path, e.g. `features.booking.enabled`.",
)
async def get_feature_status(path: str, service: SiteSettingsServiceDep) -> FeatureStatusResponse:
    enabled = await service.get_feature_status(path)
    return FeatureStatusResponse(feature=path, enabled=enabled)


@router.get(
    "/website/info",
    summary="Website information",
)
async def get_website_info(service: SiteSettingsServiceDep) -> dict[str, Any]:
    return await service.website_info()


@router.get(
    "/seo/info",
    summary="SEO settings",
    description="Meta tags and tracking ids. Administrators only.",
)
async def get_seo_info(
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> Any:
    return await service.get_section("seo", caller)


@router.get(
    "/payment/info",
    response_model=PaymentInfoResponse,
    summary="Payment providers",
    description="Which providers are enabled, with client-side keys for enabled providers only.",
)
async def get_payment_info(service: SiteSettingsServiceDep) -> dict[str, Any]:
    return await service.payment_info()


@router.get(
    "/email/info",
    response_model=EmailInfoResponse,
    summary="Email sender settings",
    description="Sender identity and SMTP endpoint without credentials. Administrators only.",
)
async def get_email_info(
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> dict[str, Any]:
    return await service.email_info(caller)


@router.get(
    "/health/check",
    response_model=SettingsHealthResponse,
    summary="Settings health check",
    responses={503: {"model": SettingsHealthResponse, "description": "Settings unavailable"}},
)
async def check_settings_health(service: SiteSettingsServiceDep) -> Any:
    try:
        return await service.health()
    except StorageError as exc:
        logger.error("Settings health check failed", extra={"error": exc.detail})
        body = SettingsHealthResponse(
            status="unhealthy",
            timestamp=datetime.now(UTC).isoformat(),
            error=exc.detail,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(exclude_none=True),
        )


@router.get(
    "/{section}",
    summary="Settings section",
    description="One top-level section. `seo`, `email` and `payment` require an administrator.",
)
async def get_settings_section(
    section: str,
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> Any:
    return await service.get_section(section, caller)


@admin_router.put(
    "/settings",
    response_model=SettingsUpdateResponse,
    summary="Update settings",
    description=(
        "Shallow-merge section patches into the settings document. Nested objects "
        "in a patch replace the stored objects wholesale."
    ),
)
async def update_settings(
    data: SettingsUpdateRequest,
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> SettingsUpdateResponse:
    settings = await service.merge_update(data.patches(), caller)
    return SettingsUpdateResponse(message="Settings updated successfully", settings=settings)


@admin_router.post(
    "/toggle-feature",
    response_model=SettingsUpdateResponse,
    summary="Toggle a feature",
)
async def toggle_feature(
    data: ToggleFeatureRequest,
    service: SiteSettingsServiceDep,
    caller: CallerDep,
) -> SettingsUpdateResponse:
    settings = await service.set_feature(data.feature, data.enabled, caller)
    state = "enabled" if data.enabled else "disabled"
    return SettingsUpdateResponse(
        message=f"Feature {data.feature} {state} successfully",
        settings=settings,
    )
