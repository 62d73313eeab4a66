"""Human-readable progress lines for retriers."""

from typing import TYPE_CHECKING

from ..core.types import Duration, to_ns

if TYPE_CHECKING:
    from .retrier import Retrier

_MICROSECOND = 1_000
_MILLISECOND = 1_000_000
_SECOND = 1_000_000_000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def _decimal(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(d: Duration) -> str:
    """Render a duration in short form.

    Examples: ``0s``, ``1ns``, ``1.5µs``, ``1.1ms``, ``4s``, ``1m30s``,
    ``2h0m0s``, ``-1ns``.
    """
    ns = to_ns(d)
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < _MICROSECOND:
        return f"{sign}{ns}ns"
    if ns < _MILLISECOND:
        return f"{sign}{_decimal(ns, _MICROSECOND)}µs"
    if ns < _SECOND:
        return f"{sign}{_decimal(ns, _MILLISECOND)}ms"

    hours, rest = divmod(ns, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    seconds = _decimal(rest, _SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def render_status(retrier: "Retrier") -> str:
    """Describe the retrier's current attempt.

    ``Attempt 2/5 Retrying in 4s``, ``Attempt 3/∞ Retrying immediately``,
    or just ``Attempt 5/5`` on the final attempt.
    """
    total = "∞" if retrier.forever else str(retrier.max_attempts)
    status = f"Attempt {retrier.attempt_count}/{total}"

    if retrier.should_give_up():
        return status
    if retrier.next_interval <= 0:
        return f"{status} Retrying immediately"
    return f"{status} Retrying in {format_duration(retrier.next_interval)}"
