# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Fixed-capacity key/value cache with insertion-order (FIFO) eviction.

Eviction is strictly by insertion order: reads never refresh an entry and
overwriting an existing key keeps its original position (not LRU).
"""

import logging
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..exceptions import CacheConfigError
from ..observability.constants import (
    CACHE_EVICTIONS_TOTAL,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
)
from ..observability.protocols import MetricsCollectorProtocol

logger = logging.getLogger(__name__)  # lending_core.cache.bounded

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheMetrics:
    """Cache hit/miss/eviction counters."""

    cache_hits: int = 0
    cache_misses: int = 0
    cache_evictions: int = 0

    @property
    def hit_ratio(self) -> float:
        total = self.cache_hits + self.cache_misses
        return self.cache_hits / total if total > 0 else 0.0


class BoundedCache(Generic[K, V]):
    """
    Bounded cache that evicts the oldest-inserted entry when full.

    Thread Safety Note:
        The cache holds no lock. Callers sharing an instance across threads
        must serialize access themselves (ReservationService does this with
        its search lock).

    Example:
        >>> cache: BoundedCache[str, int] = BoundedCache(capacity=2)
        >>> cache.put("a", 1)
        >>> cache.put("b", 2)
        >>> cache.put("c", 3)  # evicts "a"
        >>> cache.keys()
        ['b', 'c']
    """

    def __init__(
        self,
        capacity: int,
        metrics_collector: MetricsCollectorProtocol | None = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            capacity: Maximum number of entries, must be positive
            metrics_collector: Optional collector receiving hit/miss/eviction counts

        Raises:
            CacheConfigError: If capacity is not positive
        """
        if capacity <= 0:
            raise CacheConfigError(capacity)

        self._capacity = capacity
        # Assigning to an existing key leaves its position untouched
        self._entries: OrderedDict[K, V] = OrderedDict()

        self.metrics = CacheMetrics()
        self._metrics_collector = metrics_collector

        logger.debug(f"BoundedCache initialized with capacity {capacity}")

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> V | None:
        """Return the cached value or None. Never changes eviction order."""
        if key in self._entries:
            self.metrics.cache_hits += 1
            if self._metrics_collector:
                self._metrics_collector.inc_counter(CACHE_HITS_TOTAL)
            return self._entries[key]

        self.metrics.cache_misses += 1
        if self._metrics_collector:
            self._metrics_collector.inc_counter(CACHE_MISSES_TOTAL)
        return None

    def put(self, key: K, value: V) -> None:
        """
        Store a value.

        An existing key is overwritten in place and keeps its eviction
        position. A new key arriving at a full cache first evicts the single
        oldest-inserted entry.
        """
        if key in self._entries:
            self._entries[key] = value
            return

        if len(self._entries) >= self._capacity:
            self._evict_oldest()

        self._entries[key] = value

    def contains(self, key: K) -> bool:
        return key in self._entries

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[K]:
        """Snapshot of resident keys, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        """Remove every entry unconditionally."""
        self._entries.clear()
        logger.debug("BoundedCache cleared")

    def _evict_oldest(self) -> None:
        evicted_key, _ = self._entries.popitem(last=False)
        self.metrics.cache_evictions += 1
        if self._metrics_collector:
            self._metrics_collector.inc_counter(CACHE_EVICTIONS_TOTAL)
        logger.debug(f"Evicted oldest cache entry: {evicted_key!r}")


__all__ = ["BoundedCache", "CacheMetrics"]
