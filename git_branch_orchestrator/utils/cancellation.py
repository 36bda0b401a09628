"""Cancellation token for long-running loops."""

import threading
import time
from typing import Optional


class CancellationToken:
    """Thread-safe cancel flag with an optional deadline.

    A token is cancelled once ``cancel()`` has been called or its deadline
    (a ``time.monotonic()`` value) has passed. ``wait()`` sleeps until then
    or until the timeout elapses, whichever comes first.
    """

    def __init__(self, deadline: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that cancels itself after ``seconds``."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self) -> None:
        self._event.set()

    @property
    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.deadline_exceeded

    @property
    def reason(self) -> Optional[str]:
        """Why the token is cancelled, or None while it is still live."""
        if self._event.is_set():
            return "cancelled"
        if self.deadline_exceeded:
            return "deadline exceeded"
        return None

    def wait(self, timeout: float) -> bool:
        """Block for up to ``timeout`` seconds; return True if cancelled."""
        if self._deadline is not None:
            timeout = min(timeout, max(0.0, self._deadline - time.monotonic()))
        self._event.wait(timeout)
        return self.cancelled
