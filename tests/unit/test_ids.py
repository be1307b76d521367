"""Unit tests for IdAllocator."""

import threading

from lending_core.ids import IdAllocator


class TestIdAllocator:
    def test_starts_at_one(self):
        ids = IdAllocator()
        assert ids.next_id() == 1
        assert ids.next_id() == 2
        assert ids.peek == 3

    def test_custom_start(self):
        assert IdAllocator(start=100).next_id() == 100

    def test_observe_skips_past_used_id(self):
        ids = IdAllocator()
        ids.observe(10)
        assert ids.next_id() == 11

    def test_observe_lower_id_is_ignored(self):
        ids = IdAllocator()
        ids.next_id()
        ids.next_id()
        ids.observe(1)
        assert ids.next_id() == 3

    def test_concurrent_allocation_is_unique(self):
        ids = IdAllocator()
        allocated: list[int] = []
        lock = threading.Lock()

        def worker():
            local = [ids.next_id() for _ in range(200)]
            with lock:
                allocated.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(allocated) == list(range(1, 1001))
