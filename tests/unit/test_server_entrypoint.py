"""Tests for the uvicorn entry point."""

from __future__ import annotations

import pytest
import uvicorn

from travel_service.core.settings import clear_all_caches
from travel_service.main import run_server


def test_run_server_uses_app_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_HOST", "127.0.0.1")
    monkeypatch.setenv("APP_PORT", "9100")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    clear_all_caches()

    captured: dict = {}

    def fake_run(app: str, **kwargs) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(uvicorn, "run", fake_run)
    try:
        with pytest.raises(SystemExit) as exc_info:
            run_server()
    finally:
        clear_all_caches()

    assert exc_info.value.code == 0
    assert captured["app"] == "travel_service.app.main:app"
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 9100
    assert captured["reload"] is False
    assert captured["log_level"] == "warning"
