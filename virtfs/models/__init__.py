"""virtfs data models — Pydantic v2."""

from virtfs.models.content import (
    BufferContent,
    Content,
    ContentKind,
    StreamContent,
    StreamFactoryContent,
)
from virtfs.models.project import ProjectLike, ProjectRef
from virtfs.models.source import SourceHandle, SourceLike
from virtfs.models.stat_info import FileKind, StatInfo

__all__ = [
    # content
    "ContentKind",
    "Content",
    "BufferContent",
    "StreamContent",
    "StreamFactoryContent",
    # stat info
    "FileKind",
    "StatInfo",
    # collaborators
    "SourceHandle",
    "SourceLike",
    "ProjectLike",
    "ProjectRef",
]
