"""Logging infrastructure.

Structured logging with:
- JSONL format for log aggregation
- Automatic context injection (request_id, user_id, etc.)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug output
- OpenTelemetry trace correlation

Basic usage:
    from travel_service.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123", user_id="admin-1")
    logger.info("Processing request")  # record includes request_id and user_id
"""

from travel_service.infra.logging.config import (
    complete,
    configure_logging,
    setup_logging,
    shutdown,
)
from travel_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
    update_log_context,
)
from travel_service.infra.logging.formatters import JSONFormatter
from travel_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "lazy",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
    "update_log_context",
]
