"""Interval strategies for the stateful ``Retrier``.

A strategy is a callable that computes the pause following the retrier's
current attempt. Strategies read the attempt number from the retrier
instead of keeping their own counters, so one instance can be shared by any
number of retriers.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from weakref import WeakKeyDictionary

from ..core.types import Duration, StrategyKind
from ..sequences.generators import linear_exp_pause, subsecond_pause

if TYPE_CHECKING:
    from .retrier import Retrier


class Strategy(Protocol):
    """Protocol for retrier interval calculation."""

    @property
    def name(self) -> str: ...

    def __call__(self, retrier: "Retrier") -> Duration:
        """Pause in seconds after the retrier's current attempt."""
        ...


@dataclass(frozen=True)
class Constant:
    """The same interval after every attempt."""

    interval: Duration

    @property
    def name(self) -> str:
        return StrategyKind.CONSTANT.value

    def __call__(self, retrier: "Retrier") -> Duration:
        return self.interval


@dataclass(frozen=True)
class Exponential:
    """``base ** n + adjustment`` seconds, ``n`` counting attempts from zero.

    ``Exponential(2)`` waits 1s, 2s, 4s, 8s, ...;
    ``Exponential(2, 3)`` waits 4s, 5s, 7s, 11s, ...
    """

    base: Duration
    adjustment: Duration = 0.0

    @property
    def name(self) -> str:
        return StrategyKind.EXPONENTIAL.value

    def __call__(self, retrier: "Retrier") -> Duration:
        return linear_exp_pause(self.base, self.adjustment, retrier.attempt_count - 1)


@dataclass(frozen=True)
class ExponentialSubsecond:
    """Exponential growth calibrated on a millisecond seed.

    Handles sub-second seeds: from 100ms the ninth wait is 1s.
    """

    initial: Duration

    @property
    def name(self) -> str:
        return StrategyKind.EXPONENTIAL_SUBSECOND.value

    def __call__(self, retrier: "Retrier") -> Duration:
        return subsecond_pause(self.initial, retrier.attempt_count - 1)


class Manual:
    """Wraps a strategy so callers can dictate individual intervals.

    ``set_next_interval(retrier, d)`` replaces the next interval the wrapped
    strategy would compute for that retrier, once. Overrides still pending
    when the retrier starts a new run are discarded.
    """

    def __init__(self, default: Strategy):
        self.default = default
        self._pending: "WeakKeyDictionary[Retrier, Duration]" = WeakKeyDictionary()

    @property
    def name(self) -> str:
        return f"{StrategyKind.MANUAL.value}(default:{self.default.name})"

    def set_next_interval(self, retrier: "Retrier", interval: Duration) -> None:
        self._pending[retrier] = interval

    def reset(self, retrier: "Retrier") -> None:
        """Drop any pending override for ``retrier``."""
        self._pending.pop(retrier, None)

    def __call__(self, retrier: "Retrier") -> Duration:
        if retrier in self._pending:
            return self._pending.pop(retrier)
        return self.default(retrier)
