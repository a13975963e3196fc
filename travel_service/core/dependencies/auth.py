"""Caller identity dependencies.

Tokens are opaque bearer strings configured through ``AuthSettings``:

    AUTH_ADMIN_TOKENS='["admin-secret"]'
    AUTH_USER_TOKENS='["user-secret"]'

Usage:
    from travel_service.core.dependencies.auth import CallerDep

    @router.get("/settings")
    async def get_settings(caller: CallerDep):
        if caller.is_admin:
            ...

A missing header yields an anonymous caller; a header carrying an unknown
token is rejected with 401. Outside production, ``AUTH_DEV_PERSONA`` may
stand in for a missing header during local development.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from travel_service.core.exceptions import UnauthenticatedException
from travel_service.core.schemas.auth import CallerIdentity
from travel_service.core.settings import get_app_settings, get_auth_settings
from travel_service.core.settings.app import AppSettings
from travel_service.core.settings.auth import DEFAULT_DEV_PERSONAS, AuthSettings
from travel_service.infra.logging import update_log_context

logger = logging.getLogger(__name__)


def _extract_token(request: Request, auth_settings: AuthSettings) -> str | None:
    """Return the bearer token from the configured header, if any.

    Raises:
        UnauthenticatedException: If the header is present but malformed.
    """
    raw = request.headers.get(auth_settings.token_header)
    if raw is None or not raw.strip():
        return None

    scheme, _, token = raw.strip().partition(" ")
    if scheme.lower() != auth_settings.token_scheme.lower() or not token.strip():
        raise UnauthenticatedException(
            detail=f"Expected '{auth_settings.token_scheme} <token>' credentials",
            instance=str(request.url.path),
        )
    return token.strip()


def _dev_persona(auth_settings: AuthSettings, app_settings: AppSettings) -> CallerIdentity | None:
    persona = auth_settings.dev_persona
    if persona is None or persona == "anonymous" or app_settings.is_production:
        return None
    return CallerIdentity(**DEFAULT_DEV_PERSONAS[persona])


async def get_caller(
    request: Request,
    auth_settings: Annotated[AuthSettings, Depends(get_auth_settings)],
    app_settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> CallerIdentity:
    """Resolve the caller identity for the current request.

    Returns:
        CallerIdentity for the admin/user token, the dev persona, or an
        anonymous caller when no credentials are sent.

    Raises:
        UnauthenticatedException: If credentials are malformed or unknown.
    """
    token = _extract_token(request, auth_settings)

    if token is None:
        caller = _dev_persona(auth_settings, app_settings) or CallerIdentity.anonymous()
    else:
        role = auth_settings.role_for_token(token)
        if role is None:
            logger.warning(
                "Rejected unknown bearer token",
                extra={"path": request.url.path, "method": request.method},
            )
            raise UnauthenticatedException(
                detail="Invalid or expired credentials",
                instance=str(request.url.path),
            )
        # Tokens are shared secrets; the role doubles as the audit user id
        caller = CallerIdentity(user_id=f"{role}-token", roles=[role])

    request.state.caller = caller
    if caller.user_id:
        update_log_context(user_id=caller.user_id)
    return caller


CallerDep = Annotated[CallerIdentity, Depends(get_caller)]
