# 📄 File: contactbook/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a logging system that records what happens in the service in a structured way,
# making it easy to follow a single request through the logs.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting via python-json-logger, request-id context
# propagation through contextvars, and a one-time root logger configuration.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: contactbook.main (setup at startup), request logging middleware,
# storage and email infrastructure (get_logger)

import logging
import sys
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from contactbook.shared.config.settings import Settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

SERVICE_NAME = "contactbook-api"

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """Attach request and user identifiers to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        record.user_id = user_id_var.get("")
        record.service = SERVICE_NAME
        return True


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s %(user_id)s %(service)s",
            rename_fields={"levelname": "level", "name": "logger", "asctime": "timestamp"},
        )
    return logging.Formatter(
        "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"
    )


def setup_logging(settings: Settings, force: bool = False) -> None:
    """
    Configure the root logger once for the whole process.

    Args:
        settings: Application settings (LOG_LEVEL, LOG_FORMAT)
        force: Reconfigure even if logging was already set up
    """
    global _logging_configured
    if _logging_configured and not force:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(settings.LOG_FORMAT))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL)

    # Quiet noisy libraries unless debugging
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("passlib").setLevel(logging.ERROR)

    _logging_configured = True
    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": settings.LOG_LEVEL, "log_format": settings.LOG_FORMAT},
    )


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)


def set_request_context(request_id: str, user_id: Optional[str] = None) -> None:
    request_id_var.set(request_id)
    if user_id is not None:
        user_id_var.set(user_id)


def clear_request_context() -> None:
    request_id_var.set("")
    user_id_var.set("")


def set_user_context(user_id: str) -> None:
    user_id_var.set(user_id)
