"""Pause-sequence generators.

Each constructor returns a fresh generator, so every retry loop consumes its
own state:
- const: the same pause forever
- exp: geometric growth (or decay) from an initial pause
- exp_subsecond: exponential growth calibrated on a millisecond seed
- linear_exp: ``base ** k`` seconds plus a fixed adjustment

All values lie on a nanosecond grid.
"""

import math
from typing import Iterator

from ..core.types import Duration, from_ns, to_ns


def const(d: Duration) -> Iterator[Duration]:
    """Yield ``d`` indefinitely."""
    while True:
        yield d


def exp(initial: Duration, factor: float) -> Iterator[Duration]:
    """Yield a geometric sequence of pauses.

    ``{initial, initial*factor, initial*factor**2, ...}``

    Each step is computed in floating point and truncated back to whole
    nanoseconds; the truncated value is the base of the next step.
    """
    cur = to_ns(initial)
    while True:
        yield from_ns(cur)
        cur = int(cur * factor)


def subsecond_pause(seed: Duration, k: int) -> Duration:
    """The ``k``-th pause (zero-based) of an exponential-subsecond schedule.

    With ``m`` the seed in whole milliseconds, pause ``k`` is
    ``floor(m ** (1 + k/16))`` milliseconds, so pause 8 is ``m ** 1.5``:
    100ms grows to 1s, 1s to ~31.6s, 5s to ~353s.
    """
    ms = to_ns(seed) // 1_000_000
    if ms <= 0:
        return 0.0
    return math.floor(ms ** (1 + k / 16)) / 1000


def exp_subsecond(seed: Duration) -> Iterator[Duration]:
    """Yield an exponential schedule whose growth rate depends on ``seed``."""
    k = 0
    while True:
        yield subsecond_pause(seed, k)
        k += 1


def linear_exp_pause(base: Duration, adjustment: Duration, k: int) -> Duration:
    """The ``k``-th pause (zero-based) of a linear-adjusted exponential."""
    return from_ns(to_ns(base**k + adjustment))


def linear_exp(base: Duration, adjustment: Duration = 0.0) -> Iterator[Duration]:
    """Yield ``base ** k + adjustment`` seconds for ``k = 0, 1, 2, ...``.

    ``linear_exp(2, 0)`` gives ``{1, 2, 4, 8, ...}`` and
    ``linear_exp(2, 3)`` gives ``{4, 5, 7, 11, 19, ...}``.
    """
    k = 0
    while True:
        yield linear_exp_pause(base, adjustment, k)
        k += 1
