"""Tests for caller identity resolution."""

from __future__ import annotations

import pytest
from starlette.requests import Request

from travel_service.core.dependencies.auth import get_caller
from travel_service.core.exceptions import UnauthenticatedException
from travel_service.core.settings.app import AppSettings
from travel_service.core.settings.auth import AuthSettings
from travel_service.infra.logging import clear_log_context, get_log_context


def _request(headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/v1/settings",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(admin_tokens=["adm"], user_tokens=["usr"])


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(environment="test")


@pytest.fixture(autouse=True)
def _clean_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.asyncio
async def test_missing_header_is_anonymous(auth_settings, app_settings) -> None:
    caller = await get_caller(_request(), auth_settings, app_settings)
    assert caller.is_anonymous
    assert not caller.is_admin


@pytest.mark.asyncio
async def test_admin_token_resolves_admin(auth_settings, app_settings) -> None:
    request = _request({"Authorization": "Bearer adm"})
    caller = await get_caller(request, auth_settings, app_settings)

    assert caller.is_admin
    assert caller.user_id == "admin-token"
    assert request.state.caller is caller
    assert get_log_context()["user_id"] == "admin-token"


@pytest.mark.asyncio
async def test_user_token_is_not_admin(auth_settings, app_settings) -> None:
    caller = await get_caller(_request({"Authorization": "bearer usr"}), auth_settings, app_settings)
    assert caller.roles == ["user"]
    assert not caller.is_admin


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Bearer wrong", "Basic adm", "Bearer"])
async def test_bad_credentials_raise_401(auth_settings, app_settings, header: str) -> None:
    with pytest.raises(UnauthenticatedException) as exc_info:
        await get_caller(_request({"Authorization": header}), auth_settings, app_settings)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_dev_persona_outside_production(app_settings) -> None:
    auth = AuthSettings(dev_persona="admin")
    caller = await get_caller(_request(), auth, app_settings)
    assert caller.is_admin
    assert caller.user_id == "dev-admin-001"


@pytest.mark.asyncio
async def test_dev_persona_ignored_in_production() -> None:
    auth = AuthSettings(dev_persona="admin")
    production = AppSettings(environment="production", debug=False)
    caller = await get_caller(_request(), auth, production)
    assert caller.is_anonymous
