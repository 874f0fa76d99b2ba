"""Tagged content variants — exactly one backs a Resource at any time."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict


class ContentKind(str, Enum):
    """Which representation currently backs a resource's bytes."""

    NONE = "none"
    BUFFER = "buffer"
    STREAM = "stream"
    STREAM_FACTORY = "stream_factory"


class BufferContent(BaseModel):
    """In-memory bytes. Buffers are never drained."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ContentKind.BUFFER] = ContentKind.BUFFER
    data: bytes


class StreamContent(BaseModel):
    """A single readable stream instance that can be pulled from once."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[ContentKind.STREAM] = ContentKind.STREAM
    stream: Any


class StreamFactoryContent(BaseModel):
    """A callable returning a new, independently consumable stream per call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[ContentKind.STREAM_FACTORY] = ContentKind.STREAM_FACTORY
    factory: Callable[[], Any]


Content = Union[BufferContent, StreamContent, StreamFactoryContent]
