"""
test_cache.py - CompiledCache / GuardedWriter 테스트
"""

import io
import threading

import pytest

from src.domain.errors import ErrorCodes, WriterError
from src.render.base import CompiledCache, GuardedWriter


class BrokenWriter:
    """N번째 write부터 실패하는 writer."""

    def __init__(self, fail_after: int = 0):
        self.fail_after = fail_after
        self.calls = 0

    def write(self, s: str) -> None:
        self.calls += 1
        if self.calls > self.fail_after:
            raise BrokenPipeError("client went away")


# =============================================================================
# CompiledCache
# =============================================================================


class TestCompiledCache:
    """이름 → 컴파일 결과 캐시."""

    def test_get_or_compile_once(self):
        cache: CompiledCache[object] = CompiledCache()
        calls = []

        def compile_fn():
            calls.append(1)
            return object()

        first = cache.get_or_compile("home", compile_fn)
        second = cache.get_or_compile("home", compile_fn)

        assert first is second
        assert len(calls) == 1
        assert "home" in cache
        assert len(cache) == 1

    def test_failure_not_published(self):
        cache: CompiledCache[object] = CompiledCache()

        def compile_fn():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            cache.get_or_compile("home", compile_fn)

        assert "home" not in cache
        assert cache.get("home") is None

    def test_publish_last_writer_wins(self):
        cache: CompiledCache[str] = CompiledCache()

        cache.publish("home", "first")
        cache.publish("home", "second")

        assert cache.get("home") == "second"

    def test_clear(self):
        cache: CompiledCache[str] = CompiledCache()
        cache.publish("a", "1")
        cache.publish("b", "2")

        cache.clear()

        assert len(cache) == 0

    def test_concurrent_readers_see_complete_values(self):
        """동시 컴파일: 모두 완성된 값을 받고, 캐시에는 그 중 하나가 남음."""
        cache: CompiledCache[tuple] = CompiledCache()
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def compile_fn():
            return ("compiled", threading.get_ident())

        def worker():
            barrier.wait()
            value = cache.get_or_compile("home", compile_fn)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(value[0] == "compiled" for value in results)
        assert cache.get("home") in results
        assert len(cache) == 1


# =============================================================================
# GuardedWriter
# =============================================================================


class TestGuardedWriter:
    """writer 실패 → WriterError."""

    def test_passthrough(self):
        target = io.StringIO()
        writer = GuardedWriter(target)

        writer.write("abc")
        writer.write("")
        writer.write("de")

        assert target.getvalue() == "abcde"
        assert writer.written == 5

    def test_empty_chunk_skips_write(self):
        target = BrokenWriter(fail_after=0)

        GuardedWriter(target).write("")

        assert target.calls == 0

    def test_failure_wrapped(self):
        writer = GuardedWriter(BrokenWriter(fail_after=1))
        writer.write("ok")

        with pytest.raises(WriterError) as exc_info:
            writer.write("more")

        err = exc_info.value
        assert err.code == ErrorCodes.WRITER_FAILED
        assert err.context["written"] == 2
        assert isinstance(err.__cause__, BrokenPipeError)
