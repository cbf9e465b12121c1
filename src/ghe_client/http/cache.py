"""Concurrency-safe memoization cache.

Readers never block: lookups go against an immutable snapshot of the whole
map. A miss computes the value outside any lock, builds a new map containing
it, and publishes that map with a compare-and-swap of the map reference. A
caller that loses the race drops its own value and returns the stored one.

Guarantee: at-most-one-stored, possibly-multiple-computed. Two callers racing
on the same key may both run their factory, but every caller receives the
single value that ended up in the map, and later callers receive it too until
clear() or invalidate().

CPython has no atomic compare-and-exchange on object references, so the swap
step holds a short lock that covers only the identity check and assignment.
Factories never run under it.
"""

import logging
import threading
from collections.abc import Callable, Hashable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

from .. import metrics
from ..validation import ensure_positive

logger = logging.getLogger("ghe_client.cache")

__all__ = ["MemoCache"]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MemoCache(Generic[K, V]):
    """Lock-free-read memoization map with copy-on-write updates.

    Attributes:
        max_entries: Optional bound. When an insert would exceed it, the oldest
            25% of entries (insertion order) are evicted first. None keeps every
            entry for the lifetime of the cache.

    Example:
        >>> cache: MemoCache[type, TypeAdapter] = MemoCache()
        >>> adapter = cache.get_or_compute(PreReceiveHook, lambda: TypeAdapter(PreReceiveHook))
    """

    def __init__(self, max_entries: int | None = None) -> None:
        ensure_positive(max_entries, "max_entries")
        self.max_entries = max_entries
        self._entries: Mapping[K, V] = MappingProxyType({})
        self._swap_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the cached value for key without computing.

        A stored None and a missing key both yield None unless a distinct
        default is passed, as with dict.get.
        """
        return self._entries.get(key, default)

    def get_or_compute(self, key: K, factory: Callable[[], V]) -> V:
        """Return the value stored for key, computing and storing it on a miss.

        Args:
            key: Hashable cache key
            factory: Zero-argument callable producing the value. May run more
                than once per key under contention; exceptions propagate and
                nothing is stored.

        Returns:
            The single stored value for key
        """
        new_value: V | None = None
        computed = False

        while True:
            snapshot = self._entries
            if key in snapshot:
                if computed:
                    metrics.cache_lookups_total.labels(result="race_lost").inc()
                    logger.debug("cache_race_lost", extra={"cache_key": repr(key)})
                else:
                    metrics.cache_lookups_total.labels(result="hit").inc()
                return snapshot[key]

            if not computed:
                new_value = factory()
                computed = True
                metrics.cache_lookups_total.labels(result="miss").inc()

            updated = dict(snapshot)
            self._evict_for_insert(updated)
            updated[key] = new_value

            if self._compare_and_swap(snapshot, MappingProxyType(updated)):
                return new_value  # type: ignore[return-value]

            # Another writer published first; re-read and retry

    def invalidate(self, key: K) -> bool:
        """Remove a single entry.

        Returns:
            True if the key was present
        """
        while True:
            snapshot = self._entries
            if key not in snapshot:
                return False
            updated = {k: v for k, v in snapshot.items() if k != key}
            if self._compare_and_swap(snapshot, MappingProxyType(updated)):
                return True

    def clear(self) -> None:
        """Drop every entry.

        A get_or_compute already past its lookup may still publish afterwards.
        """
        with self._swap_lock:
            self._entries = MappingProxyType({})
        logger.debug("cache_cleared")

    def _compare_and_swap(self, expected: Mapping[K, V], new: Mapping[K, V]) -> bool:
        with self._swap_lock:
            if self._entries is not expected:
                return False
            self._entries = new
            return True

    def _evict_for_insert(self, entries: dict[K, V]) -> None:
        if self.max_entries is None or len(entries) < self.max_entries:
            return
        # Dicts preserve insertion order, so the first keys are the oldest
        evict_count = max(1, self.max_entries // 4)
        for key in list(entries)[:evict_count]:
            del entries[key]
        logger.debug(
            "cache_evicted",
            extra={"evicted": evict_count, "max_entries": self.max_entries},
        )
