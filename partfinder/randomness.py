"""Process-wide random source used by the offer and request simulators.

Everything that draws random numbers accepts an optional ``rng`` argument so
tests can pass a seeded :class:`random.Random` or a scripted fake instead of
the shared default.
"""
from __future__ import annotations

import random
from typing import MutableSequence, Protocol


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def shuffle(self, x: MutableSequence) -> None: ...


_default_rng: RandomSource = random.Random()


def get_rng(rng: RandomSource | None = None) -> RandomSource:
    """Return ``rng`` when given, otherwise the shared process-wide source."""
    return rng if rng is not None else _default_rng
