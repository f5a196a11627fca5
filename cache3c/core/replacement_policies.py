"""Replacement sets for the cache model.

A replacement set is a capacity-bounded collection of keys kept in
oldest -> newest order. The same structure backs both a single cache set
(keys are tags, capacity is the associativity) and the fully-associative
shadow cache (keys are block ids, capacity is the total block count).

API (methods):
- contains(key): membership test, O(1)
- touch(key): mark `key` as used; only LRU reorders
- insert(key): add `key` as newest, evicting the oldest entry when full
- evict(): remove and return the oldest entry
- peek(): current keys, oldest first
- reset(): clear state

Eviction always removes the front of the queue for both policies. The only
difference between LRU and FIFO is whether a hit moves the key to the back.
"""

from collections import OrderedDict
from typing import Any, List, Optional

from .errors import ConfigurationError


class ReplacementSet:
    """Ordered set of resident keys backed by an OrderedDict.

    The first item is the oldest (next victim), the last is the newest.
    """

    policy = ""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ConfigurationError("replacement set capacity must be >= 1")
        self.capacity = int(capacity)
        self._od = OrderedDict()

    def __len__(self) -> int:
        return len(self._od)

    def __contains__(self, key: Any) -> bool:
        return key in self._od

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, keys={self.peek()})"

    def contains(self, key: Any) -> bool:
        return key in self._od

    def is_full(self) -> bool:
        return len(self._od) >= self.capacity

    def touch(self, key: Any) -> None:
        raise NotImplementedError

    def insert(self, key: Any) -> Optional[Any]:
        """Insert `key` as the newest entry and return the evicted key, if any.

        A key that is already resident is only touched; nothing is evicted
        and the set size does not change.
        """
        if key in self._od:
            self.touch(key)
            return None
        evicted = self.evict() if self.is_full() else None
        self._od[key] = True
        return evicted

    def evict(self) -> Optional[Any]:
        """Evict the oldest item and return its key, or None if empty."""
        if not self._od:
            return None
        key, _ = self._od.popitem(last=False)
        return key

    def peek(self) -> List[Any]:
        """Return keys from oldest to newest as list."""
        return list(self._od.keys())

    def reset(self) -> None:
        self._od.clear()


class LRUReplacement(ReplacementSet):
    """Least-Recently-Used: a hit moves the key to the newest position."""

    policy = "LRU"

    def touch(self, key: Any) -> None:
        if key in self._od:
            self._od.move_to_end(key)

    def access(self, key: Any) -> bool:
        """Look up and update in one call: True on hit, False on miss (inserted)."""
        if key in self._od:
            self._od.move_to_end(key)
            return True
        self.insert(key)
        return False


class FIFOReplacement(ReplacementSet):
    """First-In-First-Out: order is fixed at insertion time."""

    policy = "FIFO"

    def touch(self, key: Any) -> None:
        # hits never reorder a FIFO queue
        return None


_POLICIES = {
    "LRU": LRUReplacement,
    "FIFO": FIFOReplacement,
}


def make_replacement_set(policy: str, capacity: int) -> ReplacementSet:
    try:
        cls = _POLICIES[str(policy).upper()]
    except KeyError:
        raise ConfigurationError(f"unsupported replacement policy '{policy}'") from None
    return cls(capacity)


__all__ = ["ReplacementSet", "LRUReplacement", "FIFOReplacement", "make_replacement_set"]
