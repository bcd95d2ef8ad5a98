"""Cancellation context carried through one garbage collection pass."""

from __future__ import annotations
import threading
from typing import Any

from ..exceptions import CleanupCancelledError
from ..models.config import MIN_REMAINING_TIME_MS


class GCContext:
    """
    Cancelable context checked before every AWS call.

    A pass is cancelled when ``cancel()`` was called (or the shared event was
    set), or when the attached Lambda context has less than
    ``min_remaining_ms`` left. Cancellation always surfaces as
    ``CleanupCancelledError``, never as a partial success.
    """

    def __init__(
        self,
        lambda_context: Any = None,
        cancel_event: threading.Event | None = None,
        min_remaining_ms: int = MIN_REMAINING_TIME_MS,
    ):
        self.lambda_context = lambda_context
        self.cancel_event = cancel_event or threading.Event()
        self.min_remaining_ms = min_remaining_ms

    def cancel(self) -> None:
        self.cancel_event.set()

    def remaining_time_ms(self) -> int | None:
        if self.lambda_context is None:
            return None
        return self.lambda_context.get_remaining_time_in_millis()

    @property
    def cancelled(self) -> bool:
        return self._cancel_reason() is not None

    def _cancel_reason(self) -> str | None:
        if self.cancel_event.is_set():
            return "cancelled"
        remaining = self.remaining_time_ms()
        if remaining is not None and remaining < self.min_remaining_ms:
            return f"only {remaining}ms of Lambda time left"
        return None

    def check(self, operation: str) -> None:
        """Raise CleanupCancelledError if the pass must not issue ``operation``."""
        reason = self._cancel_reason()
        if reason is not None:
            raise CleanupCancelledError(operation, reason)
