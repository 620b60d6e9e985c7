"""
Shared fixtures.

SequenceRandom replaces the secure RNG so tests can force exact rolls.
"""

import pytest

from rollbox.dice.rng import RandomSource


class SequenceRandom(RandomSource):
    """Hands out a fixed list of values, in order, and records every request."""

    def __init__(self, values):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def uniform_int(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if not self.values:
            raise AssertionError(f"SequenceRandom exhausted (asked for [{low}, {high}])")
        value = self.values.pop(0)
        if not low <= value <= high:
            raise AssertionError(f"forced roll {value} outside [{low}, {high}]")
        return value


@pytest.fixture
def rolls():
    """Factory: rolls(2, 3, 4) -> SequenceRandom yielding 2, 3, 4."""
    return lambda *values: SequenceRandom(values)
