"""Shared test fixtures for virtfs."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from virtfs.config import VirtfsSettings
from virtfs.core.resource import Resource
from virtfs.models.project import ProjectRef
from virtfs.models.source import SourceHandle


class CountingStream:
    """Async-iterable stream that records how often it was iterated."""

    def __init__(self, chunks: list[bytes], *, fail_after: int | None = None) -> None:
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.iterations = 0

    def __aiter__(self):
        self.iterations += 1
        return self._generate()

    async def _generate(self):
        for index, chunk in enumerate(self._chunks):
            if self._fail_after is not None and index >= self._fail_after:
                raise OSError("stream broke")
            # Yield control so concurrent readers interleave
            await asyncio.sleep(0)
            yield chunk


@pytest.fixture
def settings() -> VirtfsSettings:
    """Provide settings independent of the developer's environment."""
    return VirtfsSettings(_env_file=None, stream_chunk_size=4)


@pytest.fixture
def source() -> SourceHandle:
    """Provide a fresh, unmodified source handle."""
    return SourceHandle(adapter="test")


@pytest.fixture
def project() -> ProjectRef:
    return ProjectRef(name="my.app", version="1.0.0")


@pytest.fixture
def make_resource(settings: VirtfsSettings) -> Callable[..., Resource]:
    """Factory fixture: build a Resource with test settings."""

    def _factory(path: str = "/a.js", **kwargs: Any) -> Resource:
        kwargs.setdefault("settings", settings)
        return Resource(path, **kwargs)

    return _factory


@pytest.fixture
def make_counting_stream() -> Callable[..., CountingStream]:
    """Factory fixture: build a CountingStream."""

    def _factory(
        chunks: list[bytes] | None = None, fail_after: int | None = None
    ) -> CountingStream:
        return CountingStream(chunks or [b"hello ", b"world"], fail_after=fail_after)

    return _factory


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Provide a small file on disk."""
    path = tmp_path / "src" / "hello.txt"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"hello")
    return path
