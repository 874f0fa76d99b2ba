"""Local-disk adapter — Resources backed by files on the host filesystem.

Content is never read eagerly: each resource gets a stream factory that
opens the file on demand. Writing back goes through the resource's buffer.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from virtfs.config import settings
from virtfs.core.resource import Resource
from virtfs.models.project import ProjectLike
from virtfs.models.source import SourceHandle
from virtfs.models.stat_info import StatInfo

logger = logging.getLogger(__name__)

ADAPTER_NAME = "local"


def stat_info_from_path(fs_path: Path) -> StatInfo:
    """Stat *fs_path*, following symlinks."""
    return StatInfo.from_os_stat(os.stat(fs_path))


def resource_from_file(
    fs_path: Path,
    virtual_path: str | None = None,
    *,
    project: ProjectLike | None = None,
) -> Resource:
    """Create a Resource for a file on disk.

    Parameters
    ----------
    fs_path:
        File to expose.
    virtual_path:
        Path the resource appears under. Defaults to ``/<file name>``.
    project:
        Optional owning project.
    """
    fs_path = Path(fs_path)
    if not fs_path.is_file():
        raise FileNotFoundError(f"Not a file: {fs_path}")

    def read_file():
        # Generator so the handle is closed once the stream is exhausted
        with fs_path.open("rb") as fh:
            while True:
                chunk = fh.read(settings.stream_chunk_size)
                if not chunk:
                    return
                yield chunk

    source = SourceHandle(adapter=ADAPTER_NAME, fs_path=str(fs_path))
    resource = Resource(
        virtual_path or f"/{fs_path.name}",
        stat_info=stat_info_from_path(fs_path),
        create_stream=read_file,
        project=project,
        source=source,
    )
    logger.debug("Created resource %s from %s", resource.path, fs_path)
    return resource


async def write_resource(
    resource: Resource,
    fs_path: Path,
    *,
    only_modified: bool = False,
) -> bool:
    """Write the resource's content to *fs_path*.

    With ``only_modified`` the write is skipped unless the resource's
    source handle reports a modification. Returns whether a file was written.
    """
    if only_modified:
        source = resource.source
        if source is None or not source.modified:
            logger.debug("Skipping unmodified resource %s", resource.path)
            return False

    data = await resource.get_buffer()
    fs_path = Path(fs_path)
    fs_path.parent.mkdir(parents=True, exist_ok=True)
    fs_path.write_bytes(data)
    logger.info("Wrote %d bytes for %s to %s", len(data), resource.path, fs_path)
    return True
