"""
Roll memory — remembers which expression produced a posted roll.

A posted roll can be re-executed by anyone who has its id, so the
expression is kept here until the roll is forgotten (message deleted)
or pushed out by newer rolls.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredRoll:
    expression: str
    user: str = ""
    created_at: float = field(default_factory=time.time)


class RollMemory:
    """Thread-safe roll_id -> StoredRoll map with oldest-first eviction."""

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max(1, max_entries)
        self._map: OrderedDict[str, StoredRoll] = OrderedDict()
        self._lock = threading.Lock()

    def store(self, roll_id: str, roll: StoredRoll):
        with self._lock:
            self._map[roll_id] = roll
            self._map.move_to_end(roll_id)
            while len(self._map) > self.max_entries:
                evicted, _ = self._map.popitem(last=False)
                logger.debug("RollMemory evicted %s", evicted)

    def get(self, roll_id: str) -> StoredRoll | None:
        with self._lock:
            return self._map.get(roll_id)

    def remove(self, roll_id: str) -> bool:
        with self._lock:
            return self._map.pop(roll_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._map)
