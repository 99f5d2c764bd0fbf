"""Cancellation and deadline signal for a single logical call.

A RequestContext is handed down from the caller through the repository to
the transport. It bounds the per-attempt timeout, interrupts the backoff
sleep between retries and abandons an attempt still waiting on the network,
so a caller can give up on a call without waiting for the retry budget to
run out.
"""

import threading
import time
from typing import Callable, List, Optional


class RequestContext:
    """Caller-owned cancellation/deadline signal.

    Contexts are safe to cancel from another thread; nothing else about them
    is shared between calls.
    """

    CANCELED = "context canceled"
    DEADLINE_EXCEEDED = "context deadline exceeded"

    def __init__(self, timeout: Optional[float] = None):
        """Initialize the context.

        Args:
            timeout: Seconds until the context expires (None = never)
        """
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._cancel_callbacks: List[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "RequestContext":
        """Return a context that never expires and is never cancelled."""
        return cls()

    def cancel(self) -> None:
        """Cancel the context, aborting any in-flight wait."""
        with self._lock:
            self._cancelled.set()
            callbacks, self._cancel_callbacks = self._cancel_callbacks, []
        for callback in callbacks:
            callback()

    def add_cancel_callback(self, callback: Callable[[], None]) -> None:
        """Register a callable to run once when the context is cancelled.

        The callback runs on the cancelling thread. If the context is already
        cancelled it runs at once, on the registering thread.
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._cancel_callbacks.append(callback)
                return
        callback()

    def remove_cancel_callback(self, callback: Callable[[], None]) -> None:
        """Unregister a callback added with add_cancel_callback."""
        with self._lock:
            if callback in self._cancel_callbacks:
                self._cancel_callbacks.remove(callback)

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        """Whether the context has been cancelled or has expired."""
        return self.error() is not None

    def error(self) -> Optional[str]:
        """Reason the context is done, or None while it is still live."""
        if self._cancelled.is_set():
            return self.CANCELED
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return self.DEADLINE_EXCEEDED
        return None

    def sleep(self, seconds: float) -> bool:
        """Block the calling thread for up to ``seconds``.

        Args:
            seconds: Time to wait

        Returns:
            True if the full wait elapsed, False if the context was cancelled
            or expired first
        """
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._cancelled.wait(remaining)
            return False
        return not self._cancelled.wait(seconds)
