"""Per-call deadline and cancellation for HRUI requests."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from napalm_hrui.client.errors import HRUICancelledError


@dataclass(frozen=True)
class RequestContext:
    """Caller-supplied deadline and/or cancellation flag.

    Every adapter operation accepts an optional context.  The transport clips
    its request timeout to :meth:`remaining` and checks the context before each
    request and between commit retries.

    Args:
        deadline: Absolute :func:`time.monotonic` value after which requests
            are refused, or ``None`` for no deadline.
        cancel_event: Event that, once set, cancels all further requests.
    """

    deadline: float | None = None
    cancel_event: threading.Event | None = None

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        cancel_event: threading.Event | None = None,
    ) -> RequestContext:
        """Return a context expiring *seconds* from now."""
        return cls(deadline=time.monotonic() + seconds, cancel_event=cancel_event)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise :exc:`HRUICancelledError` if cancelled or past the deadline."""
        if self.cancelled:
            raise HRUICancelledError("Request cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise HRUICancelledError("Request deadline exceeded")

    def sleep(self, seconds: float) -> None:
        """Wait up to *seconds*, returning early (and raising) on cancellation."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        if self.cancel_event is not None:
            self.cancel_event.wait(seconds)
        elif seconds > 0:
            time.sleep(seconds)
        self.check()
