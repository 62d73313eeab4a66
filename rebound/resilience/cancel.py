"""Cancellation tokens for backoff waits.

A token is fired explicitly with ``cancel()`` or implicitly when its deadline
passes. Deadlines are evaluated lazily against the monotonic clock, so a
token never owns a timer thread.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from ..core.exceptions import Cancelled, DeadlineExceeded
from ..core.types import Duration

logger = logging.getLogger(__name__)


class CancelToken:
    """Signals a retry loop to stop waiting.

    Example:
        ```python
        token = CancelToken.with_timeout(30)
        result = retry(fetch, exp(0.1, 2), token=token)
        ```
    """

    def __init__(self, deadline: Optional[float] = None):
        """Initialize token.

        Args:
            deadline: ``time.monotonic()`` instant after which the token
                reports ``DeadlineExceeded``, or None for no deadline
        """
        self.deadline = deadline
        self._event = threading.Event()
        self._reason: Optional[Cancelled] = None
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    @classmethod
    def with_timeout(cls, seconds: Duration) -> "CancelToken":
        """Create a token that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self, reason: Optional[Cancelled] = None) -> None:
        """Fire the token. Only the first call has any effect.

        A callback that raises is logged and does not stop the others.
        """
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason if reason is not None else Cancelled()
            callbacks, self._callbacks = self._callbacks, []
            self._event.set()

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Cancel callback {callback!r} failed: {type(e).__name__}: {e}")

    @property
    def cancelled(self) -> bool:
        """Whether the token has fired or its deadline has passed."""
        return self.reason is not None

    @property
    def reason(self) -> Optional[Cancelled]:
        """Why the token fired, or None while it is live."""
        if self._reason is None and self.remaining() == 0.0:
            self.cancel(DeadlineExceeded())
        return self._reason

    def remaining(self) -> Optional[Duration]:
        """Seconds until the deadline (never negative), or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def wait(self, timeout: Duration) -> bool:
        """Block for up to ``timeout`` seconds.

        Returns:
            True if the token fired before the timeout elapsed
        """
        end = time.monotonic() + timeout
        while not self.cancelled:
            left = end - time.monotonic()
            if left <= 0:
                return False
            remaining = self.remaining()
            if remaining is not None:
                left = min(left, remaining)
            self._event.wait(left)
        return True

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` when the token is cancelled explicitly.

        Runs immediately if the token has already fired. Deadline expiry
        only triggers callbacks once it is observed.

        Returns:
            A function that unregisters the callback
        """
        with self._lock:
            fired = self._reason is not None
            if not fired:
                self._callbacks.append(callback)
        if fired:
            callback()

        def remove() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return remove
