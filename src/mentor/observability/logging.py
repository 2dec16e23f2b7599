"""Structured logging for Mentor Connect.

Every module logs through ``logging.getLogger(__name__)``. The root logger
is configured once at startup with one of two formatters:

- ``JsonFormatter``: one JSON object per line, for log aggregation
- ``ConsoleFormatter``: short human-readable lines, for development

Both attach the request and correlation ids of the current request, and
any fields passed through ``extra`` (for example ``cache_keys`` on a failed
invalidation).
"""

from __future__ import annotations

import contextvars
import logging
import sys
from datetime import datetime, timezone
from typing import Any

import orjson

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

_CONTEXT_VARS: dict[str, contextvars.ContextVar[str]] = {
    "request_id": request_id_var,
    "correlation_id": correlation_id_var,
}

# Present on every LogRecord; anything else arrived through ``extra``
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

# Third-party loggers kept quieter than the application
QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "asyncio": logging.WARNING,
}


def current_context() -> dict[str, str]:
    """Non-empty correlation values of the current request."""
    return {name: value for name, var in _CONTEXT_VARS.items() if (value := var.get())}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    {"timestamp": "2026-01-10T12:34:56.789+00:00", "level": "WARNING",
     "logger": "mentor.services.thread_cache", "message": "...",
     "location": "thread_cache._invalidate:118", "request_id": "...",
     "cache_keys": ["thread:...", "threads:user:..."]}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(current_context())
        entry.update(record_extras(record))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return orjson.dumps(entry, default=str).decode("utf-8")


class ConsoleFormatter(logging.Formatter):
    """Readable single-line output for development.

    12:34:56 | WARNING  | mentor.services.thread_cache | Cache read failed ... [req=abc12345]
    """

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"

        line = f"{datetime.now():%H:%M:%S} | {level} | {record.name} | {record.getMessage()}"

        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        request_id = request_id_var.get()
        if request_id:
            line += f" [req={request_id[:8]}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    json_format: bool = True,
    level: str = "INFO",
    use_colors: bool = True,
) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        json_format: JSON lines (production) instead of console lines
        level: Root log level name
        use_colors: Colorize console output when attached to a terminal
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_format else ConsoleFormatter(use_colors))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


class LogContext:
    """Temporarily bind correlation values outside a request.

    Usage:
        with LogContext(request_id="job-42"):
            logger.info("Warming cache")  # Includes request_id
    """

    def __init__(self, **values: str) -> None:
        unknown = set(values) - set(_CONTEXT_VARS)
        if unknown:
            raise ValueError(f"Unknown log context fields: {sorted(unknown)}")
        self.values = values
        self._tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []

    def __enter__(self) -> LogContext:
        for name, value in self.values.items():
            var = _CONTEXT_VARS[name]
            self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, *args: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)
