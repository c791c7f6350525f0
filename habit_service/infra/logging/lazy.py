"""Lazy evaluation support for logging.

Expensive debug messages are passed as callables and only evaluated when the
level is enabled, so production runs with DEBUG disabled pay nothing for them.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and arguments lazily.

    Example:
        ```python
        logger = get_lazy_logger(__name__)

        logger.debug(lambda: f"Resolved {len(habits)} of {len(ids)} habit ids")
        logger.debug("Chunks: %s", lambda: [len(c) for c in chunks])
        ```
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)


def get_lazy_logger(name: str) -> LazyLoggerAdapter:
    """Return a LazyLoggerAdapter wrapping ``logging.getLogger(name)``."""
    return LazyLoggerAdapter(logging.getLogger(name), {})


__all__ = ["LazyLoggerAdapter", "get_lazy_logger"]
