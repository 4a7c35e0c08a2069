"""
Logging for the HR access and leave service.

Two front ends share one pipeline:

* ``get_logger(name)`` returns a stdlib adapter; records are rendered by
  python-json-logger (or a plain text formatter) and carry the current
  request id and caller id.
* ``get_struct_logger(name)`` returns a structlog logger for key/value
  security events (rejected logins, forbidden calls).

Both redact values whose key looks like a credential.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, MutableMapping, Optional, Tuple

import structlog
from pythonjsonlogger import jsonlogger

# Set per request by the HTTP middleware and the authentication dependency.
request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)

SERVICE_NAME = "hr-leave-access"
REDACTED = "[REDACTED]"
SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "cookie")
SECURITY_EVENT_WORDS = ("login", "session", "token", "permission", "forbidden", "access")

_NOISY_LIBRARIES = ("uvicorn.access", "sqlalchemy.engine", "httpx")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(word in lowered for word in SENSITIVE_KEYS)


def _redact(mapping: MutableMapping[str, Any]) -> None:
    for key, value in list(mapping.items()):
        if _is_sensitive(key):
            mapping[key] = REDACTED
        elif isinstance(value, dict):
            _redact(value)


def _request_context() -> dict:
    context = {}
    if request_id.get():
        context["request_id"] = request_id.get()
    if user_id.get():
        context["user_id"] = user_id.get()
    return context


# ---------------------------------------------------------------------------
# stdlib side
# ---------------------------------------------------------------------------

class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, with source location and request context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = SERVICE_NAME
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"
        for key, value in _request_context().items():
            log_record.setdefault(key, value)
        _redact(log_record)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that folds the request context into ``extra``.

    Keys passed explicitly in ``extra`` win over the context.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = {**_request_context(), **(self.extra or {}), **(kwargs.get("extra") or {})}
        kwargs["extra"] = extra
        return msg, kwargs


def _configure_stdlib(level: int, log_format: str) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if log_format == "json":
        handler.setFormatter(ServiceJsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# structlog side
# ---------------------------------------------------------------------------

def add_request_context(logger, method_name, event_dict):
    event_dict.update(_request_context())
    event_dict["service"] = SERVICE_NAME
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def mark_security_events(logger, method_name, event_dict):
    event = str(event_dict.get("event", "")).lower()
    if any(word in event for word in SECURITY_EVENT_WORDS):
        event_dict["security_event"] = True
    _redact(event_dict)
    return event_dict


def _configure_structlog(log_format: str) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.processors.KeyValueRenderer(key_order=["event", "code"])
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            add_request_context,
            mark_security_events,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure both logging front ends; safe to call more than once."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    _configure_stdlib(level, log_format)
    _configure_structlog(log_format)


def get_logger(name: Optional[str] = None) -> ServiceLoggerAdapter:
    return ServiceLoggerAdapter(logging.getLogger(name or SERVICE_NAME), {})


def get_struct_logger(name: Optional[str] = None):
    return structlog.get_logger(name or SERVICE_NAME)
