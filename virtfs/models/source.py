"""Change-tracking handle shared between a resource and the adapter that made it."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class SourceLike(Protocol):
    """Anything exposing a writable ``modified`` flag."""

    modified: bool


class SourceHandle(BaseModel):
    """Mutable record an adapter hands to a Resource.

    The resource flips ``modified`` when its content is explicitly replaced.
    Read-triggered materialization leaves the flag untouched, so an adapter
    persisting changes back to disk can tell edited resources from ones
    that were merely read.
    """

    modified: bool = False
    adapter: str = ""
    fs_path: str = ""
