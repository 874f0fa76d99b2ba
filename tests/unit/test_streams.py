"""Tests for stream capability checks and draining."""

from __future__ import annotations

import asyncio
import io
import time

import pytest

from virtfs.core.streams import is_stream, is_stream_factory, read_chunks


class AsyncReader:
    """Object with a coroutine ``read(n)`` method."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    async def read(self, n: int) -> bytes:
        chunk, self._data = self._data[:n], self._data[n:]
        return chunk


class TestCapabilities:
    @pytest.mark.parametrize(
        "obj", [io.BytesIO(b""), [b"a"], iter([b"a"]), AsyncReader(b"")]
    )
    def test_streams(self, obj):
        assert is_stream(obj) is True
        assert is_stream_factory(obj) is False

    @pytest.mark.parametrize("obj", [b"bytes", "text", bytearray(b"x"), 42, None])
    def test_not_streams(self, obj):
        assert is_stream(obj) is False

    def test_callable_is_factory(self):
        assert is_stream_factory(lambda: io.BytesIO(b"")) is True

    def test_async_generator_function_is_factory(self):
        async def chunks():
            yield b"x"

        assert is_stream_factory(chunks) is True
        assert is_stream(chunks()) is True


class TestReadChunks:
    def test_file_like_uses_chunk_size(self):
        assert asyncio.run(read_chunks(io.BytesIO(b"abcdefg"), 3)) == [b"abc", b"def", b"g"]

    def test_async_read(self):
        assert asyncio.run(read_chunks(AsyncReader(b"abcde"), 2)) == [b"ab", b"cd", b"e"]

    def test_sync_iterable(self):
        assert asyncio.run(read_chunks([b"a", bytearray(b"b"), memoryview(b"c")])) == [
            b"a",
            b"b",
            b"c",
        ]

    def test_async_iterable(self):
        async def chunks():
            yield b"x"
            yield b"y"

        assert asyncio.run(read_chunks(chunks())) == [b"x", b"y"]

    def test_stream_reader(self):
        async def scenario():
            reader = asyncio.StreamReader()
            reader.feed_data(b"line one\nline two")
            reader.feed_eof()
            return b"".join(await read_chunks(reader))

        assert asyncio.run(scenario()) == b"line one\nline two"

    def test_empty_stream(self):
        assert asyncio.run(read_chunks(io.BytesIO(b""))) == []

    def test_text_chunks_rejected(self):
        with pytest.raises(TypeError, match="must yield bytes"):
            asyncio.run(read_chunks(["text"]))

    def test_non_stream_rejected(self):
        with pytest.raises(TypeError, match="not a readable stream"):
            asyncio.run(read_chunks(42))

    def test_stream_errors_propagate(self):
        def broken():
            yield b"ok"
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            asyncio.run(read_chunks(broken()))


class SlowReader:
    """File-like object whose ``read(n)`` blocks the calling thread."""

    def __init__(self, chunks: int, delay: float) -> None:
        self._remaining = chunks
        self._delay = delay

    def read(self, n: int) -> bytes:
        if not self._remaining:
            return b""
        time.sleep(self._delay)
        self._remaining -= 1
        return b"x" * n


def _slow_chunks(count: int, delay: float):
    for _ in range(count):
        time.sleep(delay)
        yield b"y"


async def _drain_with_heartbeat(stream, chunk_size=4):
    ticks = 0

    async def heartbeat():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.005)
            ticks += 1

    beat = asyncio.ensure_future(heartbeat())
    try:
        chunks = await read_chunks(stream, chunk_size)
    finally:
        beat.cancel()
    return chunks, ticks


class TestBlockingStreams:
    def test_loop_keeps_running_during_blocking_read(self):
        chunks, ticks = asyncio.run(_drain_with_heartbeat(SlowReader(5, 0.02), 2))
        assert chunks == [b"xx"] * 5
        assert ticks > 0

    def test_loop_keeps_running_during_blocking_iteration(self):
        chunks, ticks = asyncio.run(_drain_with_heartbeat(_slow_chunks(5, 0.02)))
        assert chunks == [b"y"] * 5
        assert ticks > 0

    def test_resource_materialization_does_not_block(self, make_resource):
        resource = make_resource(stream=SlowReader(3, 0.02))
        ticks = 0

        async def scenario():
            nonlocal ticks

            async def heartbeat():
                nonlocal ticks
                while True:
                    await asyncio.sleep(0.005)
                    ticks += 1

            beat = asyncio.ensure_future(heartbeat())
            try:
                return await resource.get_buffer()
            finally:
                beat.cancel()

        assert asyncio.run(scenario()) == b"xxxx" * 3
        assert ticks > 0
