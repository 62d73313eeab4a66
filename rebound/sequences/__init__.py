"""Lazy, composable pause sequences for Rebound backoff loops."""

from .combinators import cap, concat, factor_jitter, interval_jitter, jitter, limit
from .generators import const, exp, exp_subsecond, linear_exp

__all__ = [
    "const",
    "exp",
    "exp_subsecond",
    "linear_exp",
    "limit",
    "concat",
    "cap",
    "jitter",
    "interval_jitter",
    "factor_jitter",
]
