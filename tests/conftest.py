"""Shared pytest fixtures for the part finder tests."""

import os

# Settings are read at import time, so these must be set before any partfinder import.
os.environ.setdefault("SIMULATE_DELAY", "false")
os.environ.setdefault("USE_REDIS", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402


class ScriptedRandom:
    """Random source that replays fixed values instead of drawing them."""

    def __init__(self, randoms=(), randints=(), reverse_on_shuffle=False):
        self._randoms = list(randoms)
        self._randints = list(randints)
        self._reverse = reverse_on_shuffle

    def random(self):
        return self._randoms.pop(0)

    def randint(self, a, b):
        value = self._randints.pop(0)
        assert a <= value <= b, f"scripted randint {value} outside [{a}, {b}]"
        return value

    def shuffle(self, x):
        if self._reverse:
            x.reverse()


@pytest.fixture
def scripted_rng():
    """Factory for :class:`ScriptedRandom` instances."""
    return ScriptedRandom
