"""Thread-safe bounded LRU cache."""

from collections import OrderedDict
import threading
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Fixed-capacity mapping that evicts the least-recently-used entry.

    Every operation holds the instance lock, so the map and its recency
    order change together and the size never exceeds ``capacity``.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the cached value and mark it most recently used."""
        with self._lock:
            try:
                value = self._entries[key]
            except KeyError:
                return default
            self._entries.move_to_end(key)
            return value

    def put(self, key: K, value: V) -> None:
        """Insert or update ``key``, evicting the oldest entry when full."""
        with self._lock:
            if key in self._entries:
                self._entries[key] = value
                self._entries.move_to_end(key)
                return
            if len(self._entries) >= self._capacity:
                self._entries.popitem(last=False)
            self._entries[key] = value

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        """Return the cached value, computing and storing it on a miss.

        ``factory`` runs outside the lock; concurrent misses on the same key
        may both compute, and the later ``put`` wins.
        """
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]
        value = factory(key)
        self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> list[K]:
        """Snapshot of keys, least recently used first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        # Membership checks do not count as an access.
        with self._lock:
            return key in self._entries
