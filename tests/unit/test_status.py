"""Unit tests for status lines and duration formatting."""

import pytest

from rebound.core.types import SENTINEL_DURATION
from rebound.resilience.retrier import Retrier
from rebound.resilience.status import format_duration, render_status
from rebound.resilience.strategies import Constant, Exponential


def collect_status(retrier, stop_after=None):
    """Run the retrier with an always-failing operation, recording str(retrier)."""
    lines = []

    def op(r):
        if stop_after is not None and r.attempt_count > stop_after:
            r.break_()
            return None
        lines.append(str(r))
        raise RuntimeError("this makes it retry")

    try:
        retrier.do(op)
    except RuntimeError:
        pass
    return lines


class TestFormatDuration:
    """Test short-form duration rendering."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0s"),
            (1e-9, "1ns"),
            (1.5e-6, "1.5µs"),
            (0.001, "1ms"),
            (0.0011, "1.1ms"),
            (0.0014641, "1.4641ms"),
            (1, "1s"),
            (1.5, "1.5s"),
            (4, "4s"),
            (10, "10s"),
            (60, "1m0s"),
            (90, "1m30s"),
            (7200, "2h0m0s"),
            (SENTINEL_DURATION, "-1ns"),
            (-2.5, "-2.5s"),
        ],
    )
    def test_format(self, seconds, expected):
        """Durations render like 1.1ms, 4s and 1m30s."""
        assert format_duration(seconds) == expected


class TestRenderStatus:
    """Test retrier status lines."""

    def test_finite_attempts(self, insomniac):
        """The final attempt has no trailing phrase."""
        retrier = Retrier(strategy=Constant(1.0), max_attempts=5, sleep=insomniac.sleep)

        assert collect_status(retrier) == [
            "Attempt 1/5 Retrying in 1s",
            "Attempt 2/5 Retrying in 1s",
            "Attempt 3/5 Retrying in 1s",
            "Attempt 4/5 Retrying in 1s",
            "Attempt 5/5",
        ]

    def test_exponential_strategy(self, insomniac):
        """Status lines show each upcoming exponential wait."""
        retrier = Retrier(strategy=Exponential(2.0), max_attempts=5, sleep=insomniac.sleep)

        assert collect_status(retrier) == [
            "Attempt 1/5 Retrying in 1s",
            "Attempt 2/5 Retrying in 2s",
            "Attempt 3/5 Retrying in 4s",
            "Attempt 4/5 Retrying in 8s",
            "Attempt 5/5",
        ]

    def test_try_forever(self, insomniac):
        """Forever mode uses the infinity glyph."""
        retrier = Retrier(strategy=Constant(1.0), forever=True, sleep=insomniac.sleep)

        assert collect_status(retrier, stop_after=5) == [
            "Attempt 1/∞ Retrying in 1s",
            "Attempt 2/∞ Retrying in 1s",
            "Attempt 3/∞ Retrying in 1s",
            "Attempt 4/∞ Retrying in 1s",
            "Attempt 5/∞ Retrying in 1s",
        ]

    def test_no_delay(self, insomniac):
        """A zero interval reads as retrying immediately."""
        retrier = Retrier(strategy=Constant(0.0), max_attempts=5, sleep=insomniac.sleep)

        assert collect_status(retrier) == [
            "Attempt 1/5 Retrying immediately",
            "Attempt 2/5 Retrying immediately",
            "Attempt 3/5 Retrying immediately",
            "Attempt 4/5 Retrying immediately",
            "Attempt 5/5",
        ]

    def test_override_shows_on_following_attempt(self, insomniac):
        """set_next_interval does not change the current status line."""
        lines = []

        def op(r):
            if r.attempt_count == 1:
                r.set_next_interval(0.0)
            lines.append(render_status(r))
            raise RuntimeError("fails")

        retrier = Retrier(strategy=Constant(10.0), max_attempts=3, sleep=insomniac.sleep)
        with pytest.raises(RuntimeError):
            retrier.do(op)

        assert lines == [
            "Attempt 1/3 Retrying in 10s",
            "Attempt 2/3 Retrying immediately",
            "Attempt 3/3",
        ]

    def test_subsecond_interval(self, insomniac):
        """Sub-second intervals keep their unit."""
        retrier = Retrier(strategy=Constant(0.0011), max_attempts=2, sleep=insomniac.sleep)

        assert collect_status(retrier)[0] == "Attempt 1/2 Retrying in 1.1ms"
