"""
Logging setup for the iPurpose backend.

Modules log through ``logging.getLogger(__name__)``. The application calls
configure_logging() once at startup to attach a single handler to the
root application loggers: pretty text in development, JSON lines in production.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Top-level packages whose loggers share the application handler
APP_LOGGERS = ("api", "modules", "shared")

SECURITY_LOGGER = "shared.security"


def _format_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including any ``security`` payload."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _format_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        security = getattr(record, "security", None)
        if security:
            payload["security"] = security
        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{_format_timestamp(record)} {record.levelname} [{record.name}] {record.getMessage()}"
        security = getattr(record, "security", None)
        if security:
            fields = " ".join(f"{k}={v}" for k, v in security.items())
            line = f"{line} {fields}"
        return line


def configure_logging(environment: str = "development", level: str = "INFO") -> None:
    """Configure application logging based on environment."""
    formatter: logging.Formatter
    if environment.lower() == "production":
        formatter = JsonFormatter()
    else:
        formatter = PrettyFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level.upper())
        logger.handlers = [handler]
        # Keep propagation so pytest's caplog still sees records
        logger.propagate = True


def log_security_event(event_type: str, **fields: Any) -> None:
    """
    Log a security-relevant event at WARNING.

    Args:
        event_type: One of "auth_failure", "forbidden", "rate_limit"
        **fields: Context such as uid, ip, endpoint, code. Never pass tokens.
    """
    payload = {"type": event_type}
    payload.update({k: v for k, v in fields.items() if v is not None})
    logging.getLogger(SECURITY_LOGGER).warning(
        f"security event: {event_type}",
        extra={"security": payload},
    )
