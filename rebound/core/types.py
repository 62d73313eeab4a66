"""Core type definitions and constants for Rebound."""

from enum import Enum

Duration = float
"""A pause length in seconds, the unit ``time.sleep`` and ``asyncio.sleep`` take."""

NANOSECOND: Duration = 1e-9

SENTINEL_DURATION: Duration = -NANOSECOND
"""Marks the final iteration of a backoff loop.

Any negative duration terminates a loop, not only this particular value.
"""

JITTER_INTERVAL: Duration = 1.0
"""Amplitude of the retrier's jitter: waits land within +/- this of nominal."""


def to_ns(d: Duration) -> int:
    """Convert seconds to whole nanoseconds."""
    return round(d * 1_000_000_000)


def from_ns(ns: int) -> Duration:
    """Convert whole nanoseconds to seconds."""
    return ns / 1_000_000_000


class StrategyKind(str, Enum):
    """Retrier strategy families."""

    CONSTANT = "constant"
    EXPONENTIAL = "exponential"
    EXPONENTIAL_SUBSECOND = "exponential-subsecond"
    MANUAL = "manual"
