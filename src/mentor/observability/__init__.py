"""Observability module for Mentor Connect: structured logging with correlation IDs."""

from mentor.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    correlation_id_var,
    request_id_var,
)

__all__ = [
    "ConsoleFormatter",
    "JsonFormatter",
    "LogContext",
    "configure_logging",
    "correlation_id_var",
    "request_id_var",
]
