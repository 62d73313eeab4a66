"""Stateful retrier driven by an interval strategy.

The retrier runs on the same backoff loop as ``retry``; its pause sequence is
computed one attempt at a time from the strategy, so the operation can
inspect the retrier (attempt number, upcoming interval, status line) and
steer it (break, override the next interval) while it runs.
"""

import inspect
import logging
from typing import Awaitable, Callable, Iterator, Optional, TypeVar, Union

from ..core.config import get_config
from ..core.exceptions import ConfigurationError
from ..core.types import JITTER_INTERVAL, Duration
from ..sequences.combinators import interval_jitter
from .backoff import AsyncBackoff, AsyncSleepFunc, Backoff, SleepFunc
from .cancel import CancelToken
from .retry import is_unrecoverable
from .status import render_status
from .strategies import Constant, Strategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Retrier:
    """Retry an operation a fixed number of times, or forever.

    Example:
        ```python
        retrier = Retrier(strategy=Exponential(2), max_attempts=5)

        def connect(r: Retrier) -> Connection:
            print(r)  # "Attempt 1/5 Retrying in 1s"
            return dial(host)

        conn = retrier.do(connect)
        ```
    """

    def __init__(
        self,
        *,
        strategy: Optional[Strategy] = None,
        max_attempts: Optional[int] = None,
        forever: bool = False,
        jitter: bool = False,
        sleep: Optional[Union[SleepFunc, AsyncSleepFunc]] = None,
    ):
        """Initialize retrier.

        Args:
            strategy: Interval strategy, or a constant ``config.retry_interval``
            max_attempts: Attempt limit, or ``config.retry_max_attempts``
            forever: Ignore the attempt limit
            jitter: Spread each interval uniformly over +/- ``JITTER_INTERVAL``
            sleep: Replacement for the real wait (mainly for tests)

        Raises:
            ConfigurationError: If the attempt limit is below one
        """
        config = get_config()
        self.strategy = strategy or Constant(config.retry_interval)
        self.forever = forever
        self.max_attempts = 0 if forever else (
            config.retry_max_attempts if max_attempts is None else max_attempts
        )
        if not forever and self.max_attempts < 1:
            raise ConfigurationError(
                f"Retrier needs max_attempts >= 1 or forever=True, got {self.max_attempts}"
            )
        self.jitter = jitter
        self.sleep = sleep

        self._attempt = 1
        self._next_interval: Duration = 0.0
        self._manual_interval: Optional[Duration] = None
        self._break = False

    @property
    def attempt_count(self) -> int:
        """Number of the current attempt, starting at 1."""
        return self._attempt

    @property
    def next_interval(self) -> Duration:
        """Pause that will follow the current attempt."""
        return self._next_interval

    def should_give_up(self) -> bool:
        """Whether the current attempt is the last one allowed."""
        if self.forever:
            return False
        return self._attempt >= self.max_attempts

    def break_(self) -> None:
        """Stop after the current attempt, whatever its outcome."""
        self._break = True

    def set_next_interval(self, interval: Duration) -> None:
        """Use ``interval`` the next time an interval is computed.

        Intervals are computed before each attempt runs, so an override made
        during attempt ``n`` governs the pause after attempt ``n + 1``. The
        strategy is consulted again afterwards.
        """
        self._manual_interval = interval

    def do(
        self,
        operation: Callable[["Retrier"], T],
        token: Optional[CancelToken] = None,
    ) -> T:
        """Call ``operation(retrier)`` until it returns or the retrier gives up.

        Starts a fresh run: the attempt count, break flag and pending interval
        overrides are reset.

        Returns:
            Result from the first attempt that returns

        Raises:
            The last exception when the retrier breaks, gives up, or the
            operation raises an unrecoverable error; the token's reason if it
            fires during a pause
        """
        self._reset()
        steps = Backoff(self._intervals(), token=token, sleep=self.sleep)
        last_exception: Optional[Exception] = None

        for _ in steps:
            try:
                return operation(self)
            except Exception as e:
                if self._stops_after(e):
                    raise
                last_exception = e

        return self._finish(steps.cancelled, steps.token, last_exception)

    async def do_async(
        self,
        operation: Callable[["Retrier"], Union[T, Awaitable[T]]],
        token: Optional[CancelToken] = None,
    ) -> T:
        """Asynchronous ``do``; ``operation`` and ``sleep`` may be coroutines."""
        self._reset()
        steps = AsyncBackoff(self._intervals(), token=token, sleep=self.sleep)
        last_exception: Optional[Exception] = None

        async for _ in steps:
            try:
                result = operation(self)
                if inspect.isawaitable(result):
                    result = await result
                return result
            except Exception as e:
                if self._stops_after(e):
                    raise
                last_exception = e

        return self._finish(steps.cancelled, steps.token, last_exception)

    def __str__(self) -> str:
        return render_status(self)

    def _reset(self) -> None:
        self._attempt = 1
        self._next_interval = 0.0
        self._manual_interval = None
        self._break = False
        # Strategies holding per-retrier state expose reset(retrier)
        reset = getattr(self.strategy, "reset", None)
        if reset is not None:
            reset(self)

    def _intervals(self) -> Iterator[Duration]:
        # Resumed by the backoff loop only after the previous pause
        while True:
            self._next_interval = self._calculate_next_interval()
            yield self._next_interval
            self._attempt += 1

    def _calculate_next_interval(self) -> Duration:
        if self._manual_interval is not None:
            interval, self._manual_interval = self._manual_interval, None
            return interval

        interval = self.strategy(self)
        if self.jitter:
            return next(interval_jitter(-JITTER_INTERVAL, JITTER_INTERVAL, [interval]))
        return interval

    def _stops_after(self, e: Exception) -> bool:
        if self._break or self.should_give_up() or is_unrecoverable(e):
            logger.info(f"Giving up after attempt {self._attempt}: {type(e).__name__}: {e}")
            return True
        logger.debug(f"{self}: {type(e).__name__}: {e}")
        return False

    def _finish(
        self,
        cancelled: bool,
        token: CancelToken,
        last_exception: Optional[Exception],
    ):
        if cancelled:
            logger.info(f"Retrier cancelled after attempt {self._attempt}: {token.reason}")
            raise token.reason
        if last_exception is not None:
            # A negative interval ended the loop
            raise last_exception
        raise RuntimeError("Retry loop completed without returning or raising")
