"""Retry an operation with pauses taken from a pause sequence.

The operation receives the attempt index and the ``NextWait`` handle for the
pause after it. It can end the loop early in two ways:
- raise ``UnrecoverableError`` (or an exception chained to one), or
- call ``wait.stop()`` (any negative ``wait.value``) and then return or raise.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, Optional, Set, TypeVar, Union

from ..core.exceptions import UnrecoverableError
from ..core.types import Duration
from .backoff import AsyncBackoff, AsyncSleepFunc, Backoff, NextWait, SleepFunc
from .cancel import CancelToken

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_unrecoverable(exc: BaseException) -> bool:
    """Whether ``exc`` is, or is chained to, an ``UnrecoverableError``.

    Follows ``__cause__`` first, then ``__context__`` unless the chain was
    cut with ``raise ... from None``.
    """
    seen: Set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, UnrecoverableError):
            return True
        seen.add(id(current))
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return False


def retry(
    operation: Callable[[int, NextWait], T],
    pauses: Iterable[Duration],
    token: Optional[CancelToken] = None,
    sleep: Optional[SleepFunc] = None,
) -> T:
    """Call ``operation`` until it returns, pausing between failed attempts.

    Args:
        operation: Called as ``operation(attempt_index, wait)``
        pauses: Pause sequence in seconds
        token: Cancel token observed during pauses
        sleep: Replacement for the real wait (mainly for tests)

    Returns:
        Result from the first attempt that returns

    Raises:
        The unrecoverable exception as soon as one is raised; the token's
        reason if it fired during a pause; otherwise the last exception once
        the sequence is exhausted
    """
    steps = Backoff(pauses, token=token, sleep=sleep)
    last_exception: Optional[Exception] = None

    for i, wait in steps:
        try:
            return operation(i, wait)
        except Exception as e:
            if is_unrecoverable(e):
                logger.debug(f"Attempt {i} failed unrecoverably: {type(e).__name__}: {e}")
                raise
            last_exception = e
            logger.debug(
                f"Attempt {i} failed: {type(e).__name__}: {e} (next wait {_pause_label(wait.value)})"
            )

    return _finish(steps.cancelled, steps.token, last_exception)


async def retry_async(
    operation: Callable[[int, NextWait], Union[T, Awaitable[T]]],
    pauses: Iterable[Duration],
    token: Optional[CancelToken] = None,
    sleep: Optional[AsyncSleepFunc] = None,
) -> T:
    """Asynchronous ``retry``.

    ``operation`` may be a plain function or a coroutine function; ``sleep``
    likewise. Without ``sleep`` the pauses are awaited on the running loop.
    """
    steps = AsyncBackoff(pauses, token=token, sleep=sleep)
    last_exception: Optional[Exception] = None

    async for i, wait in steps:
        try:
            result = operation(i, wait)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            if is_unrecoverable(e):
                logger.debug(f"Attempt {i} failed unrecoverably: {type(e).__name__}: {e}")
                raise
            last_exception = e
            logger.debug(
                f"Attempt {i} failed: {type(e).__name__}: {e} (next wait {_pause_label(wait.value)})"
            )

    return _finish(steps.cancelled, steps.token, last_exception)


def _finish(cancelled: bool, token: CancelToken, last_exception: Optional[Exception]) -> Any:
    if cancelled:
        logger.info(f"Retry cancelled: {token.reason}")
        raise token.reason
    if last_exception is not None:
        raise last_exception

    # Backoff always yields at least once, so this is unreachable
    raise RuntimeError("Retry loop completed without returning or raising")


def _pause_label(d: Duration) -> str:
    return "none" if d < 0 else f"{d}s"
