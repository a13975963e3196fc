"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from travel_service.core.settings import get_app_settings, get_logging_settings
from travel_service.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI

    from travel_service.core.settings import Settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request state, log context and response.

    The ID is taken from the ``X-Request-ID`` header when the client sends
    one, otherwise a new UUID4 is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_log_context(request_id=request_id, method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        finally:
            clear_log_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Add ``X-Process-Time`` and log requests slower than the threshold."""

    def __init__(self, app, threshold: float = 1.0) -> None:
        super().__init__(app)
        self.threshold = threshold

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        if process_time > self.threshold:
            logger.warning(
                "Slow request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration": round(process_time, 4),
                    "threshold": self.threshold,
                },
            )
        return response


def configure_middleware(app: FastAPI, settings: Settings | None = None) -> None:
    """Configure middleware for the application.

    Middleware added last runs first, so request IDs are assigned before
    timing and CORS handling see the request.
    """
    app_settings = settings.app if settings else get_app_settings()
    log_settings = settings.logging if settings else get_logging_settings()

    cors_origins = app_settings.cors_origins or ["*"]
    logger.debug("Configuring CORS", extra={"origins": cors_origins})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app_settings.cors_max_age,
    )

    if log_settings.log_slow_requests:
        app.add_middleware(TimingMiddleware, threshold=log_settings.slow_request_threshold)

    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)
