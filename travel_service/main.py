"""Command-line entry point that serves the API with uvicorn."""

from __future__ import annotations

import sys
from typing import NoReturn


def run_server() -> NoReturn:
    """Run the FastAPI application server.

    Bind address, reload and log level come from ``APP_`` and ``LOG_`` settings.
    """
    import uvicorn

    from travel_service.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "travel_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
    )
    sys.exit(0)


if __name__ == "__main__":
    run_server()
