"""Sequence combinators.

Every combinator forwards one element per input element and stops exactly
when its input stops (or, for ``limit``, when the count runs out).
"""

import itertools
import random
from typing import Iterable, Iterator

from ..core.exceptions import ConfigurationError
from ..core.types import Duration, from_ns, to_ns


def limit(n: int, seq: Iterable[Duration]) -> Iterator[Duration]:
    """Yield at most the first ``n`` pauses of ``seq``.

    ``n <= 0`` yields nothing and never pulls from ``seq``.
    """
    return itertools.islice(seq, max(n, 0))


def concat(*seqs: Iterable[Duration]) -> Iterator[Duration]:
    """Yield every pause of each sequence in turn."""
    return itertools.chain(*seqs)


def cap(max_delay: Duration, seq: Iterable[Duration]) -> Iterator[Duration]:
    """Clamp each pause to at most ``max_delay``."""
    for d in seq:
        yield min(d, max_delay)


def jitter(seq: Iterable[Duration]) -> Iterator[Duration]:
    """Replace each pause ``d`` with a uniform sample from ``[0, d]``."""
    for d in seq:
        ns = to_ns(d)
        yield from_ns(random.randint(0, ns)) if ns > 0 else 0.0


def interval_jitter(lo: Duration, hi: Duration, seq: Iterable[Duration]) -> Iterator[Duration]:
    """Add a uniform sample from ``[lo, hi]`` to each pause, clamped at zero.

    Raises:
        ConfigurationError: If ``lo > hi``
    """
    lo_ns, hi_ns = to_ns(lo), to_ns(hi)
    if lo_ns > hi_ns:
        raise ConfigurationError(f"interval_jitter bounds inverted: lo={lo} > hi={hi}")

    def _generate() -> Iterator[Duration]:
        for d in seq:
            ns = to_ns(d) + random.randint(lo_ns, hi_ns)
            yield from_ns(max(ns, 0))

    return _generate()


def factor_jitter(lo: float, hi: float, seq: Iterable[Duration]) -> Iterator[Duration]:
    """Multiply each pause by a uniform sample from ``[lo, hi]``, clamped at zero.

    Raises:
        ConfigurationError: If ``lo > hi``
    """
    if lo > hi:
        raise ConfigurationError(f"factor_jitter bounds inverted: lo={lo} > hi={hi}")

    def _generate() -> Iterator[Duration]:
        for d in seq:
            ns = int(to_ns(d) * random.uniform(lo, hi))
            yield from_ns(max(ns, 0))

    return _generate()
