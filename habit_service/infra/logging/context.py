"""Context management for structured logging.

Request-scoped fields (request_id, user_id, ...) live in a ContextVar and are
copied onto every LogRecord by ContextInjectingFilter, so call sites never
pass them explicitly. Each asyncio task sees its own copy.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        ```python
        # In middleware
        set_log_context(request_id="abc-123")

        # In the auth dependency
        set_log_context(user_id="u1")

        logger.info("Completion logged")  # carries request_id and user_id
        ```
    """
    current = dict(_log_context.get() or {})
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return dict(_log_context.get() or {})


def clear_log_context() -> None:
    """Clear all logging context for the current task."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    current = dict(_log_context.get() or {})
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the current log context onto records.

    Installed on the root logger by configure_logging so that every
    formatter (JSONFormatter in particular) sees the context fields.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_log_context.get() or {}).items():
            # Explicit `extra=` values win over context
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
]
