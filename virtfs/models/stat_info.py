"""Default stat record for resources that were not read from disk."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class FileKind(str, Enum):
    """File type reported by a stat record."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMBOLIC_LINK = "symbolic_link"
    BLOCK_DEVICE = "block_device"
    CHARACTER_DEVICE = "character_device"
    FIFO = "fifo"
    SOCKET = "socket"


def _now_ms() -> float:
    return datetime.now(timezone.utc).timestamp() * 1000


def _from_ms(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


class StatInfo(BaseModel):
    """Stat-like record with predicate methods and four timestamp pairs.

    A Resource treats its stat info as opaque and never updates it when
    content changes. Any object (``os.stat_result`` included) may be used
    in its place; this model is only the default.
    """

    kind: FileKind = FileKind.FILE
    size: int = 0
    atime_ms: float = Field(default_factory=_now_ms)
    mtime_ms: float = Field(default_factory=_now_ms)
    ctime_ms: float = Field(default_factory=_now_ms)
    birthtime_ms: float = Field(default_factory=_now_ms)

    @classmethod
    def now(cls) -> StatInfo:
        """A regular file with every timestamp set to the current time."""
        ms = _now_ms()
        return cls(atime_ms=ms, mtime_ms=ms, ctime_ms=ms, birthtime_ms=ms)

    @classmethod
    def from_os_stat(cls, st: os.stat_result) -> StatInfo:
        """Build a StatInfo from an ``os.stat``/``os.lstat`` result."""
        mode = st.st_mode
        if stat.S_ISDIR(mode):
            kind = FileKind.DIRECTORY
        elif stat.S_ISLNK(mode):
            kind = FileKind.SYMBOLIC_LINK
        elif stat.S_ISBLK(mode):
            kind = FileKind.BLOCK_DEVICE
        elif stat.S_ISCHR(mode):
            kind = FileKind.CHARACTER_DEVICE
        elif stat.S_ISFIFO(mode):
            kind = FileKind.FIFO
        elif stat.S_ISSOCK(mode):
            kind = FileKind.SOCKET
        else:
            kind = FileKind.FILE
        # st_birthtime only exists on some platforms
        birthtime = getattr(st, "st_birthtime", st.st_ctime)
        return cls(
            kind=kind,
            size=st.st_size,
            atime_ms=st.st_atime * 1000,
            mtime_ms=st.st_mtime * 1000,
            ctime_ms=st.st_ctime * 1000,
            birthtime_ms=birthtime * 1000,
        )

    # ------------------------------------------------------------------
    # Type predicates
    # ------------------------------------------------------------------

    def is_file(self) -> bool:
        return self.kind == FileKind.FILE

    def is_directory(self) -> bool:
        return self.kind == FileKind.DIRECTORY

    def is_symbolic_link(self) -> bool:
        return self.kind == FileKind.SYMBOLIC_LINK

    def is_block_device(self) -> bool:
        return self.kind == FileKind.BLOCK_DEVICE

    def is_character_device(self) -> bool:
        return self.kind == FileKind.CHARACTER_DEVICE

    def is_fifo(self) -> bool:
        return self.kind == FileKind.FIFO

    def is_socket(self) -> bool:
        return self.kind == FileKind.SOCKET

    # ------------------------------------------------------------------
    # Structured timestamps
    # ------------------------------------------------------------------

    @property
    def atime(self) -> datetime:
        return _from_ms(self.atime_ms)

    @property
    def mtime(self) -> datetime:
        return _from_ms(self.mtime_ms)

    @property
    def ctime(self) -> datetime:
        return _from_ms(self.ctime_ms)

    @property
    def birthtime(self) -> datetime:
        return _from_ms(self.birthtime_ms)
