from __future__ import annotations

import random
import time
from collections.abc import Iterable, Iterator
from typing import Protocol

"""Clock and randomness used to synthesize unique placeholder values.

Phone and email synthesis read the current timestamp and a random suffix.
Both are reached through a UniqueSuffixSource so tests can supply fixed
sequences instead of the real clock.
"""

__all__ = [
    "UniqueSuffixSource",
    "SystemSuffixSource",
    "SequenceSuffixSource",
]


class UniqueSuffixSource(Protocol):
    def timestamp_ms(self) -> int:
        """Milliseconds since the epoch."""
        ...

    def random_digits(self, count: int) -> str:
        """``count`` random decimal digits (zero padded)."""
        ...


class SystemSuffixSource:
    """Real clock + ``random`` module."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def timestamp_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def random_digits(self, count: int) -> str:
        return str(self._rng.randrange(10**count)).zfill(count)


class SequenceSuffixSource:
    """Deterministic source replaying fixed timestamps and random draws.

    When a sequence runs out its last value keeps being returned, so a
    source built from one timestamp behaves like a frozen clock.
    """

    def __init__(self, timestamps: Iterable[int], randoms: Iterable[int] = (0,)) -> None:
        self._timestamps = _repeat_last(timestamps)
        self._randoms = _repeat_last(randoms)

    def timestamp_ms(self) -> int:
        return next(self._timestamps)

    def random_digits(self, count: int) -> str:
        return str(next(self._randoms) % 10**count).zfill(count)


def _repeat_last(values: Iterable[int]) -> Iterator[int]:
    last = None
    for last in values:
        yield last
    if last is None:
        raise ValueError("sequence source needs at least one value")
    while True:
        yield last
