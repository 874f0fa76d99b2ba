"""Project references — a Resource only ever reads a project's name."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class ProjectLike(Protocol):
    """Minimal capability a project must offer to be attached to a Resource."""

    @property
    def name(self) -> str: ...


class ProjectRef(BaseModel):
    """Lightweight, immutable project identity."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = ""

    def __str__(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name
