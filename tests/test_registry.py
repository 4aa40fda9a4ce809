"""Unit tests for ShareRegistry and its reader/writer lock."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from webshare.services.registry import ReadWriteLock, ShareEntry, ShareRegistry


def _entry(code, path="/tmp/x", filename="x.txt"):
    return ShareEntry(code=code, path=path, filename=filename)


class TestShareRegistry:

    def test_empty_registry(self, registry):
        assert len(registry) == 0
        assert registry.get("a1b2c3") is None
        assert "a1b2c3" not in registry

    def test_put_then_get(self, registry):
        entry = _entry("a1b2c3", filename="test.txt")
        registry.put("a1b2c3", entry)

        assert registry.get("a1b2c3") == entry
        assert "a1b2c3" in registry
        assert len(registry) == 1

    def test_put_overwrites(self, registry):
        registry.put("a1b2c3", _entry("a1b2c3", path="/first"))
        registry.put("a1b2c3", _entry("a1b2c3", path="/second"))

        assert registry.get("a1b2c3").path == "/second"
        assert len(registry) == 1

    def test_put_if_absent_refuses_existing_code(self, registry):
        assert registry.put_if_absent("a1b2c3", _entry("a1b2c3", path="/first"))
        assert not registry.put_if_absent("a1b2c3", _entry("a1b2c3", path="/second"))

        assert registry.get("a1b2c3").path == "/first"

    def test_get_is_repeatable(self, registry):
        registry.put("abcdef", _entry("abcdef"))
        assert registry.get("abcdef") is registry.get("abcdef")

    def test_registries_are_independent(self):
        a, b = ShareRegistry(), ShareRegistry()
        a.put("abcdef", _entry("abcdef"))

        assert b.get("abcdef") is None

    def test_concurrent_writers_and_readers(self, registry):
        codes = [f"{i:06x}" for i in range(500)]

        def write(code):
            registry.put(code, _entry(code, path=f"/p/{code}"))
            return registry.get(code)

        with ThreadPoolExecutor(max_workers=32) as pool:
            results = list(pool.map(write, codes))

        assert len(registry) == len(codes)
        for code, entry in zip(codes, results):
            assert entry.path == f"/p/{code}"

    def test_concurrent_put_if_absent_single_winner(self, registry):
        barrier = threading.Barrier(16)

        def claim(i):
            barrier.wait()
            return registry.put_if_absent("ffffff", _entry("ffffff", path=f"/p/{i}"))

        with ThreadPoolExecutor(max_workers=16) as pool:
            wins = list(pool.map(claim, range(16)))

        assert wins.count(True) == 1


class TestReadWriteLock:

    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=2)

        def reader():
            with lock.read():
                # both readers must be inside at once to pass the barrier
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not inside.broken

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []

        lock.acquire_write()

        def reader():
            with lock.read():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        events.append("write-done")
        lock.release_write()
        t.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        events = []

        lock.acquire_read()

        def writer():
            with lock.write():
                events.append("write")

        t = threading.Thread(target=writer)
        t.start()
        time.sleep(0.05)
        events.append("read-done")
        lock.release_read()
        t.join(timeout=5)

        assert events == ["read-done", "write"]
