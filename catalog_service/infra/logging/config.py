"""Logging configuration setup.

- ``dictConfig`` sets root and per-logger levels
- a ``QueueHandler`` on the root logger hands records to a ``QueueListener``
  thread that owns the real console/file handlers, so request handlers never
  block on I/O
- ``ContextInjectingFilter`` adds request context to every record
- JSON Lines output by default, plain text for local development
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from catalog_service.infra.logging.context import ContextInjectingFilter
from catalog_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from catalog_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_LOGGING_INITIALIZED = False


def shutdown() -> None:
    """Stop the queue listener, flushing pending records.

    Registered with ``atexit``; also called before reconfiguring.
    """
    global _listener, _queue_handler

    if _listener is not None:
        _listener.stop()
        _listener = None
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging once across entrypoints (app, CLI, tests).

    Args:
        log_settings: Settings to apply; loaded via ``get_logging_settings()``
            when omitted.
        force: Reconfigure even if logging was already set up.
        **overrides: Explicit ``configure_logging`` keyword overrides.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from catalog_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_context: bool = True,
    capture_warnings: bool = True,
    service_name: str = "catalog-service",
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    Args:
        log_level: Root logger level.
        json_logs: Emit JSON Lines instead of plain text.
        console_enabled: Log to stderr.
        file_path: Rotating log file, or None to disable file logging.
        file_max_bytes: Size at which the log file rotates.
        file_backup_count: Rotated files to keep.
        include_context: Attach ``ContextInjectingFilter`` to the queue handler.
        capture_warnings: Route ``warnings`` through logging.
        service_name: Static ``service`` field of JSON records.
        logger_levels: Per-logger level overrides, e.g.
            ``{"sqlalchemy.engine": "WARNING"}``.
    """
    global _listener, _queue_handler

    shutdown()
    logging.captureWarnings(capture_warnings)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "loggers": {
                name: {"level": level.upper()} for name, level in (logger_levels or {}).items()
            },
            "root": {
                "level": log_level.upper(),
                "handlers": [],
            },
        }
    )

    handlers = _build_handlers(
        json_logs=json_logs,
        console_enabled=console_enabled,
        file_path=Path(file_path) if file_path else None,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
        service_name=service_name,
    )
    if not handlers:
        return

    log_queue: Queue[logging.LogRecord] = Queue()
    _listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _listener.start()
    atexit.register(shutdown)

    _queue_handler = QueueHandler(log_queue)
    if include_context:
        # Must run before the record crosses to the listener thread
        _queue_handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_queue_handler)
    logger.debug(
        "Logging configured",
        extra={"log_level": log_level, "json_logs": json_logs, "handlers": len(handlers)},
    )


def _build_handlers(
    *,
    json_logs: bool,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
    service_name: str,
) -> list[logging.Handler]:
    def formatter() -> logging.Formatter:
        if json_logs:
            return JSONFormatter(static={"service": service_name})
        return logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    handlers: list[logging.Handler] = []

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter())
        handlers.append(console_handler)

    if file_path:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter())
        handlers.append(file_handler)

    return handlers
