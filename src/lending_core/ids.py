# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Monotonic id allocation owned by catalogs, registries and ledgers."""

import threading


class IdAllocator:
    """
    Hands out increasing integer ids, starting at ``start``.

    Each owner (catalog, holder registry, reservation ledger) creates its own
    allocator, so two catalogs never share a counter.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def observe(self, used_id: int) -> None:
        """Advance past an id that was assigned outside this allocator."""
        with self._lock:
            if used_id >= self._next:
                self._next = used_id + 1

    @property
    def peek(self) -> int:
        """The id the next call to next_id() will return."""
        return self._next


__all__ = ["IdAllocator"]
