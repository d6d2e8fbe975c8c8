"""
Logging setup.

Two channels share one root handler: stdlib loggers from ``get_logger`` for
services, and structlog for the access log written by the middleware.
Both end up as JSON lines (or plain text when ``LOG_FORMAT`` is not
"json") with the current request id attached and secrets masked.
"""

import logging
import logging.handlers
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, MutableMapping, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hostel_manager.config.settings import settings

request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
principal_id: ContextVar[Optional[str]] = ContextVar('principal_id', default=None)

REDACTED = '[REDACTED]'
SENSITIVE_KEYS = (
    'password', 'token', 'secret', 'api_key', 'authorization',
    'cookie', 'phone', 'national_id',
)

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def mask_sensitive(data: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Replace values of credential-like or personal keys, recursing into dicts."""
    for key, value in data.items():
        if any(marker in key.lower() for marker in SENSITIVE_KEYS):
            data[key] = REDACTED
        elif isinstance(value, dict):
            mask_sensitive(value)
    return data


def _bind_request_context(logger, method_name, event_dict):
    req_id = request_id.get()
    if req_id:
        event_dict.setdefault('request_id', req_id)
    pid = principal_id.get()
    if pid:
        event_dict.setdefault('principal_id', pid)
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


def _mask_event(logger, method_name, event_dict):
    return mask_sensitive(event_dict)


class RecordFormatter(jsonlogger.JsonFormatter):
    """JSON lines with source location and request id."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"
        req_id = request_id.get()
        if req_id:
            log_record['request_id'] = req_id
        mask_sensitive(log_record)


def _configure_structlog() -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.processors.KeyValueRenderer(key_order=['event'])
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            _bind_request_context,
            _mask_event,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _build_handlers(level: int) -> list:
    if settings.LOG_FORMAT == "json":
        formatter = RecordFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
    else:
        formatter = logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s')

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        path = Path(settings.LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS,
        ))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _configure_stdlib() -> None:
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in _build_handlers(level):
        root.addHandler(handler)

    # Third-party chatter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or 'hostel_manager')


_configured = False


def setup_logging(force: bool = False) -> None:
    """Install handlers and structlog processors once per process."""
    global _configured
    if _configured and not force:
        return

    _configure_structlog()
    _configure_stdlib()
    _configured = True

    get_logger(__name__).info(
        "Logging initialized",
        extra={'log_level': settings.LOG_LEVEL, 'log_format': settings.LOG_FORMAT},
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'mask_sensitive',
    'request_id',
    'principal_id',
]
