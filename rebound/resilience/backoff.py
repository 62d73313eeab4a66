"""Backoff iteration over a pause sequence.

A backoff loop always yields immediately, then (unless the step's pause is
negative) waits for that pause before yielding again. Once the sequence runs
out, one final step carrying ``SENTINEL_DURATION`` is yielded with no wait
after it, so a sequence of ``n`` pauses gives ``n + 1`` steps.

Each step hands the consumer a ``NextWait`` handle. The handle is read after
the consumer finishes the step, so overwriting it changes the wait that
follows the current step.
"""

import asyncio
import inspect
import logging
from typing import AsyncIterator, Awaitable, Callable, Iterable, Iterator, Optional, Tuple, Union

from ..core.types import SENTINEL_DURATION, Duration
from .cancel import CancelToken

logger = logging.getLogger(__name__)

SleepFunc = Callable[[Duration], None]
AsyncSleepFunc = Callable[[Duration], Union[None, Awaitable[None]]]


class NextWait:
    """Mutable handle on the pause that follows the current attempt."""

    __slots__ = ("value",)

    def __init__(self, value: Duration):
        self.value = value

    def stop(self) -> None:
        """Make the current attempt the last one."""
        self.value = SENTINEL_DURATION

    @property
    def is_final(self) -> bool:
        return self.value < 0

    def __repr__(self) -> str:
        return f"NextWait({self.value!r})"


def _with_sentinel(pauses: Iterable[Duration]) -> Iterator[Duration]:
    yield from pauses
    yield SENTINEL_DURATION


class Backoff:
    """Iterate ``(attempt_index, NextWait)`` pairs, pausing between them.

    Example:
        ```python
        for i, wait in Backoff(limit(5, exp(0.001, 1.1))):
            if wait.is_final:
                print("Last try!")
            else:
                print(f"Iteration {i}: next wait {wait.value}")
        ```

    A Backoff consumes its pause sequence and is meant to be iterated once.
    """

    def __init__(
        self,
        pauses: Iterable[Duration],
        token: Optional[CancelToken] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """Initialize backoff.

        Args:
            pauses: Pause sequence in seconds
            token: Cancel token checked around every wait, or a fresh one
            sleep: Replacement for the real wait; called with each pause.
                The token is checked before and after it.
        """
        self.pauses = pauses
        self.token = token or CancelToken()
        self.sleep = sleep
        self.cancelled = False

    def __iter__(self) -> Iterator[Tuple[int, NextWait]]:
        for i, pause in enumerate(_with_sentinel(self.pauses)):
            wait = NextWait(pause)
            yield i, wait

            if wait.is_final:
                logger.debug(f"Backoff finished after iteration {i}")
                return
            if self._interrupted(wait.value):
                logger.debug(f"Backoff cancelled after iteration {i}")
                self.cancelled = True
                return

    def _interrupted(self, pause: Duration) -> bool:
        if self.token.cancelled:
            return True
        if self.sleep is None:
            return self.token.wait(pause)
        self.sleep(pause)
        return self.token.cancelled


async def wait_async(token: CancelToken, timeout: Duration) -> bool:
    """Asynchronous counterpart of ``CancelToken.wait``.

    Returns:
        True if the token fired before the timeout elapsed
    """
    loop = asyncio.get_running_loop()
    fired = loop.create_future()

    def _resolve() -> None:
        if not fired.done():
            fired.set_result(None)

    remove = token.add_callback(lambda: loop.call_soon_threadsafe(_resolve))
    try:
        end = loop.time() + timeout
        while not token.cancelled:
            left = end - loop.time()
            if left <= 0:
                return False
            remaining = token.remaining()
            if remaining is not None:
                left = min(left, remaining)
            try:
                await asyncio.wait_for(asyncio.shield(fired), left)
            except asyncio.TimeoutError:
                pass
        return True
    finally:
        remove()


class AsyncBackoff:
    """``async for`` counterpart of ``Backoff``.

    ``sleep`` may be a plain function or a coroutine function.
    """

    def __init__(
        self,
        pauses: Iterable[Duration],
        token: Optional[CancelToken] = None,
        sleep: Optional[AsyncSleepFunc] = None,
    ):
        self.pauses = pauses
        self.token = token or CancelToken()
        self.sleep = sleep
        self.cancelled = False

    async def __aiter__(self) -> AsyncIterator[Tuple[int, NextWait]]:
        for i, pause in enumerate(_with_sentinel(self.pauses)):
            wait = NextWait(pause)
            yield i, wait

            if wait.is_final:
                logger.debug(f"Backoff finished after iteration {i}")
                return
            if await self._interrupted(wait.value):
                logger.debug(f"Backoff cancelled after iteration {i}")
                self.cancelled = True
                return

    async def _interrupted(self, pause: Duration) -> bool:
        if self.token.cancelled:
            return True
        if self.sleep is None:
            return await wait_async(self.token, pause)
        result = self.sleep(pause)
        if inspect.isawaitable(result):
            await result
        return self.token.cancelled
