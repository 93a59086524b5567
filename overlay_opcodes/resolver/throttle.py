"""
Diagnostic Throttle — cap how many error diagnostics ever get logged.

A mapping file that is wrong for the running client makes every lookup
fail. The first few failures are logged so the cause is visible; after
that the throttle goes quiet for the rest of its lifetime.
"""

from __future__ import annotations

import logging
import threading

DEFAULT_CEILING = 3


class DiagnosticThrottle:
    """Emits at most `ceiling` error-level messages, then no-ops."""

    def __init__(self, logger: logging.Logger | None = None, ceiling: int = DEFAULT_CEILING):
        if ceiling < 0:
            raise ValueError(f"ceiling must be >= 0, got {ceiling}")
        self.logger = logger or logging.getLogger("overlay_opcodes")
        self.ceiling = ceiling
        self._remaining = ceiling
        self._lock = threading.Lock()

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    @property
    def emitted(self) -> int:
        return self.ceiling - self.remaining

    def try_emit(self, message: str) -> bool:
        """Log `message` at ERROR if budget remains. Returns True if logged."""
        with self._lock:
            if self._remaining <= 0:
                return False
            self._remaining -= 1
        self.logger.error(message)
        return True

    def __repr__(self) -> str:
        return f"DiagnosticThrottle({self.remaining}/{self.ceiling} left)"
