"""Request-scoped logging context.

Middleware stores values such as the request id in a ``ContextVar``;
:class:`ContextInjectingFilter` copies them onto every record so formatters
see them without callers passing ``extra`` by hand. Each asyncio task gets
its own copy of the context.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add key-value pairs to the logging context of the current task.

    Example:
        set_log_context(request_id="abc-123")
        logger.info("Listing projects")  # record carries request_id
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    return _log_context.get().copy()


def clear_log_context() -> None:
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the current log context onto records.

    Existing record attributes are never overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
