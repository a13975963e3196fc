"""Tests for the application factory and lifespan."""

from __future__ import annotations

import pytest

from travel_service.app import lifespan as lifespan_module
from travel_service.app.main import create_app
from travel_service.features.site_settings.store import ConfigStore


def test_create_app_registers_settings_routes() -> None:
    app = create_app()
    paths = {route.path for route in app.routes}

    assert "/api/v1/settings" in paths
    assert "/api/v1/settings/public" in paths
    assert "/api/v1/settings/{section}" in paths
    assert "/api/v1/settings/features/{path}/status" in paths
    assert "/api/v1/admin/settings" in paths
    assert "/api/v1/admin/toggle-feature" in paths


def test_specific_settings_routes_precede_section_route() -> None:
    app = create_app()
    paths = [route.path for route in app.routes]
    section_index = paths.index("/api/v1/settings/{section}")

    for specific in ("/api/v1/settings/public", "/api/v1/settings/languages/supported"):
        assert paths.index(specific) < section_index


@pytest.mark.asyncio
async def test_lifespan_publishes_config_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lifespan_module, "setup_logging", lambda **_: None)
    monkeypatch.setattr(lifespan_module, "shutdown_logging", lambda: None)
    app = create_app()

    async with lifespan_module.lifespan(app):
        store = app.state.config_store
        assert isinstance(store, ConfigStore)
        config = await store.get_instance()
        assert config.document["website"]["name"] == "Travel Agency"

    assert app.state.config_store is None
