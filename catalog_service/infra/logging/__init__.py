"""Structured logging: queue-based handlers, JSON Lines, request context."""

from catalog_service.infra.logging.config import configure_logging, setup_logging, shutdown
from catalog_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from catalog_service.infra.logging.formatters import JSONFormatter
from catalog_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
