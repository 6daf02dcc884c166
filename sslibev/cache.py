"""A least-recently-used cache with timestamps, used by the UDP relay."""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

FreeCallback = Callable[[Hashable, Any], None]


class LruCache:
    """Maps keys to values, evicting the least recently used entry.

    An insertion that brings the count up to ``capacity`` evicts the oldest
    entry. Whenever an entry is dropped and its value is not ``None``,
    ``free_cb(key, value)`` is called if one was given.
    """

    def __init__(
        self,
        capacity: int,
        free_cb: FreeCallback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.free_cb = free_cb
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[Any, float]] = OrderedDict()

    def _release(self, key: Hashable, value: Any) -> None:
        if value is not None and self.free_cb is not None:
            self.free_cb(key, value)

    def _touch(self, key: Hashable) -> Any:
        value, _ = self._entries.pop(key)
        self._entries[key] = (value, self._clock())
        return value

    def insert(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key`` as the most recently used entry."""
        old = self._entries.pop(key, None)
        if old is not None and old[0] is not value:
            self._release(key, old[0])
        self._entries[key] = (value, self._clock())
        if len(self._entries) >= self.capacity:
            oldest_key, (oldest_value, _) = self._entries.popitem(last=False)
            self._release(oldest_key, oldest_value)

    def lookup(self, key: Hashable) -> Any:
        """Return the value for ``key`` and refresh it, or ``None`` if absent."""
        if key not in self._entries:
            return None
        return self._touch(key)

    def contains(self, key: Hashable) -> bool:
        """Return whether ``key`` is cached, refreshing it if so."""
        if key not in self._entries:
            return False
        self._touch(key)
        return True

    def remove(self, key: Hashable) -> None:
        """Drop ``key`` if present."""
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._release(key, entry[0])

    def clear(self, age: float) -> None:
        """Drop every entry last used more than ``age`` seconds ago."""
        now = self._clock()
        stale = [key for key, (_, ts) in self._entries.items() if now - ts > age]
        for key in stale:
            value, _ = self._entries.pop(key)
            self._release(key, value)

    def close(self, keep_data: bool) -> None:
        """Empty the cache; unless ``keep_data``, release every value."""
        entries = list(self._entries.items())
        self._entries.clear()
        if not keep_data:
            for key, (value, _) in entries:
                self._release(key, value)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[Hashable]:
        """Return the keys from least to most recently used."""
        return list(self._entries)