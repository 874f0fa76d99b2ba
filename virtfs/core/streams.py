"""Readable-stream capability checks and asynchronous draining.

A content stream is any of:

- an async iterable of bytes chunks,
- an object with a ``read(n)`` method, plain or coroutine
  (``io.BytesIO``, binary files, ``asyncio.StreamReader``),
- a plain iterable of bytes chunks (list, generator).

Everything else callable is treated as a stream factory by Resource.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Iterable
from typing import Any

_EXHAUSTED = object()


def is_stream(obj: Any) -> bool:
    """Return True if *obj* can be drained by :func:`read_chunks`."""
    if isinstance(obj, (bytes, bytearray, memoryview, str)):
        return False
    return (
        hasattr(obj, "__aiter__")
        or callable(getattr(obj, "read", None))
        or isinstance(obj, Iterable)
    )


def is_stream_factory(obj: Any) -> bool:
    """Return True if *obj* is a callable that is not itself a stream."""
    return callable(obj) and not is_stream(obj)


def _as_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, bytes):
        return chunk
    if isinstance(chunk, (bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(
        f"Content streams must yield bytes, got {type(chunk).__name__}"
    )


async def read_chunks(stream: Any, chunk_size: int = 65536) -> list[bytes]:
    """Pull every chunk from *stream* until it is exhausted.

    Synchronous reads and iteration happen in a worker thread, so the
    event loop keeps running while a file or generator is drained. Errors
    raised by the stream propagate unchanged.
    """
    chunks: list[bytes] = []

    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            chunks.append(_as_bytes(chunk))
        return chunks

    read = getattr(stream, "read", None)
    if callable(read):
        while True:
            if inspect.iscoroutinefunction(read):
                chunk = await read(chunk_size)
            else:
                chunk = await asyncio.to_thread(read, chunk_size)
                if inspect.isawaitable(chunk):
                    chunk = await chunk
            if not chunk:
                break
            chunks.append(_as_bytes(chunk))
        return chunks

    if isinstance(stream, Iterable) and not isinstance(stream, (bytes, str)):
        iterator = iter(stream)
        while True:
            chunk = await asyncio.to_thread(next, iterator, _EXHAUSTED)
            if chunk is _EXHAUSTED:
                return chunks
            chunks.append(_as_bytes(chunk))

    raise TypeError(f"Object of type {type(stream).__name__} is not a readable stream")
