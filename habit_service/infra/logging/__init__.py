"""Structured logging infrastructure.

Public API:
    setup_logging / configure_logging: configure the root logger once
    set_log_context / clear_log_context: request-scoped context fields
    get_lazy_logger: logger with lazily evaluated messages
"""

from __future__ import annotations

from habit_service.infra.logging.config import configure_logging, setup_logging, shutdown
from habit_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from habit_service.infra.logging.formatters import JSONFormatter
from habit_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
