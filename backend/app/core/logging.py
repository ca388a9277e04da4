"""Logging configuration for model-viewer.

Every record goes to stdout, either as one JSON object per line or as a
plain text line for local development. Records emitted while serving a
request carry the request id, and once the bearer token has been checked,
the username of the caller.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any, Literal

from pythonjsonlogger.json import JsonFormatter as BaseJsonFormatter

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Set by RequestIdMiddleware
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
# Set by the token guard
request_user_ctx: ContextVar[str | None] = ContextVar("request_user", default=None)

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = (
    "uvicorn.access",
    "sqlalchemy.engine",
    "httpx",
    "httpcore",
    "trimesh",
)

# Uvicorn installs its own handlers unless told otherwise; route them to root
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")

JSON_FORMAT = "%(timestamp)s %(level)s %(module)s %(message)s"
TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class ModelViewerJsonFormatter(BaseJsonFormatter):
    """Renames the standard fields and attaches request context.

    Output keys: timestamp, level, module, message, plus request_id and
    user when set, plus anything passed through ``extra``.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["module"] = record.name
        log_record.pop("levelname", None)
        log_record.pop("name", None)

        for key, ctx in (("request_id", request_id_ctx), ("user", request_user_ctx)):
            value = ctx.get()
            if value:
                log_record[key] = value


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return ModelViewerJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: LogLevel = "INFO", json_format: bool = True) -> None:
    """Configure the root logger with a single stdout handler.

    Safe to call more than once; each call replaces the previous handler.
    """
    numeric_level = logging.getLevelName(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(_build_formatter(json_format))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_request_id(request_id: str | None) -> None:
    request_id_ctx.set(request_id)


def set_request_user(username: str | None) -> None:
    """Tag log records for the rest of the request with ``username``."""
    request_user_ctx.set(username)
