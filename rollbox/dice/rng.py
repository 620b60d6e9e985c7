"""
Random sources for the dice engine.

The engine never imports a generator directly; it is handed a RandomSource.
SecureRandom is the default and draws from the OS CSPRNG via `secrets`,
so outcomes cannot be reproduced by seeding a weak generator.
"""

from __future__ import annotations

import abc
import secrets


class RandomSource(abc.ABC):
    """Supplies uniformly distributed integers."""

    @abc.abstractmethod
    def uniform_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both ends inclusive."""
        ...


class SecureRandom(RandomSource):
    """CSPRNG-backed source. Safe to share across threads."""

    def uniform_int(self, low: int, high: int) -> int:
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return low + secrets.randbelow(high - low + 1)


_default: SecureRandom = SecureRandom()


def default_source() -> RandomSource:
    """Return the process-wide secure source."""
    return _default
