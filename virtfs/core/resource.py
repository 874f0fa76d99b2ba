"""Virtual file-like resource and its content lifecycle.

A Resource is backed by at most one content representation at a time:
an in-memory buffer, a single-use stream, or a stream factory. Streams are
materialized into a buffer lazily, at most once, with concurrent readers
sharing the same pending drain.

Once a stream view has been handed out through ``get_stream()`` the content
is flagged as drained, even if the view was built from a buffer, and every
further read fails until new content is set.
"""

from __future__ import annotations

import asyncio
import copy
import io
import logging
from pathlib import PurePosixPath
from typing import Any, Callable

from virtfs.config import VirtfsSettings
from virtfs.config import settings as default_settings
from virtfs.core.errors import (
    ConflictingContentError,
    ContentDrainedError,
    MissingPathError,
    NoContentError,
    ProjectAlreadyAssignedError,
    StreamDrainedError,
)
from virtfs.core.streams import is_stream, is_stream_factory, read_chunks
from virtfs.models.content import (
    BufferContent,
    Content,
    ContentKind,
    StreamContent,
    StreamFactoryContent,
)
from virtfs.models.project import ProjectLike
from virtfs.models.source import SourceLike
from virtfs.models.stat_info import StatInfo

logger = logging.getLogger(__name__)


def _project_name(project: Any) -> str:
    return getattr(project, "name", None) or str(project)


def _retrieve_exception(task: asyncio.Future) -> None:
    if not task.cancelled():
        task.exception()


class Resource:
    """A named virtual file with metadata and lazily converted content.

    Parameters
    ----------
    path:
        Virtual path. Required and non-empty.
    stat_info:
        Opaque stat record, ``os.stat_result`` or similar. Defaults to
        :meth:`StatInfo.now`.
    buffer, string, stream, create_stream:
        Initial content. At most one may be given. ``create_stream`` is a
        callable returning a fresh readable stream on every call.
    project:
        Project this resource belongs to. Can only be set once.
    source:
        Change-tracking handle whose ``modified`` flag is raised when
        content is explicitly replaced.
    settings:
        Overrides the module-level :data:`virtfs.config.settings`.
    """

    def __init__(
        self,
        path: str,
        *,
        stat_info: Any = None,
        buffer: bytes | None = None,
        string: str | None = None,
        stream: Any = None,
        create_stream: Callable[[], Any] | None = None,
        project: ProjectLike | None = None,
        source: SourceLike | None = None,
        settings: VirtfsSettings | None = None,
    ) -> None:
        if not path:
            raise MissingPathError("Cannot create Resource: path parameter missing")
        supplied = [p for p in (buffer, string, stream, create_stream) if p is not None]
        if len(supplied) > 1:
            raise ConflictingContentError(
                "Cannot create Resource: Please set only one content parameter. "
                "buffer, string, stream or create_stream"
            )

        self._settings = settings or default_settings
        self._path = path
        self._name = self._name_from_path(path)
        self._source = source
        self._project = project
        self._stat_info = stat_info if stat_info is not None else StatInfo.now()

        self._content: Content | None = None
        self._content_drained = False
        self._stream_drained = False
        self._buffering: asyncio.Future[bytes] | None = None

        # Provenance: collection names that located this resource
        self._collections: list[str] = []

        # Initial content does not count as a modification of the source
        if create_stream is not None:
            if not callable(create_stream):
                raise TypeError("create_stream must be callable")
            self._install(StreamFactoryContent(factory=create_stream))
        elif stream is not None:
            if not is_stream(stream):
                raise TypeError(
                    f"stream must be a readable stream, got {type(stream).__name__}"
                )
            self._install(StreamContent(stream=stream))
        elif buffer is not None:
            self._install(BufferContent(data=bytes(buffer)))
        elif string is not None:
            self._install(BufferContent(data=string.encode(self._settings.encoding)))

    @staticmethod
    def _name_from_path(path: str) -> str:
        return PurePosixPath(path).name

    def __repr__(self) -> str:
        return f"Resource(path={self._path!r}, content={self.content_kind.value})"

    # ------------------------------------------------------------------
    # Path, name and metadata
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Virtual path of the resource."""
        return self._path

    @path.setter
    def path(self, path: str) -> None:
        self.set_path(path)

    def set_path(self, path: str) -> None:
        """Change the virtual path. Content and drain state are untouched."""
        self._path = path
        self._name = self._name_from_path(path)

    @property
    def name(self) -> str:
        """Last segment of the path."""
        return self._name

    @property
    def stat_info(self) -> Any:
        """Stat record supplied at construction.

        Not updated when the content changes.
        """
        return self._stat_info

    @property
    def source(self) -> SourceLike | None:
        """Change-tracking handle shared with the adapter, ``None`` if none is attached."""
        return self._source

    @property
    def content_kind(self) -> ContentKind:
        """Which representation currently backs the content."""
        if self._content is None:
            return ContentKind.NONE
        return self._content.kind

    @property
    def content_drained(self) -> bool:
        return self._content_drained

    # ------------------------------------------------------------------
    # Content access
    # ------------------------------------------------------------------

    async def get_buffer(self) -> bytes:
        """Return the content as bytes, materializing a stream if needed.

        Raises
        ------
        ContentDrainedError
            A stream view was handed out and no new content was set since.
        NoContentError
            No content was ever set.
        """
        self._check_not_drained()
        content = self._content
        if isinstance(content, BufferContent):
            return content.data
        if content is None:
            raise NoContentError(f"Resource {self._path} has no content")
        return await asyncio.shield(self._get_buffer_from_stream())

    async def get_string(self) -> str:
        """Return the content decoded with the configured encoding."""
        self._check_not_drained()
        buffer = await self.get_buffer()
        return buffer.decode(self._settings.encoding, errors="replace")

    def get_stream(self) -> Any:
        """Return a readable stream over the content.

        Buffer content yields a fresh ``io.BytesIO``; stream content yields
        the stream itself; a factory is invoked. Afterwards the content is
        flagged as drained in every case, so callers may treat the returned
        stream as theirs to consume. Set new content to read again.
        """
        self._check_not_drained()
        content = self._content
        if isinstance(content, BufferContent):
            content_stream: Any = io.BytesIO(content.data)
        elif content is not None:
            content_stream = self._get_stream()
        else:
            raise NoContentError(f"Resource {self._path} has no content")
        self._content_drained = True
        return content_stream

    async def get_size(self) -> int:
        """Size of the content in bytes, ``0`` if there is no content yet.

        Materializes stream content as a side effect.
        """
        if self._content is None:
            return 0
        buffer = await self.get_buffer()
        return len(buffer)

    # ------------------------------------------------------------------
    # Content mutation
    # ------------------------------------------------------------------

    def set_buffer(self, buffer: bytes) -> None:
        """Replace the content with *buffer*."""
        self._mark_modified()
        self._install(BufferContent(data=bytes(buffer)))

    def set_string(self, string: str) -> None:
        """Replace the content with *string*, encoded with the configured encoding."""
        self.set_buffer(string.encode(self._settings.encoding))

    def set_stream(self, stream: Any) -> None:
        """Replace the content with a readable stream or a stream factory.

        A callable that is not itself a stream is treated as a factory.
        """
        if is_stream_factory(stream):
            content: Content = StreamFactoryContent(factory=stream)
        elif is_stream(stream):
            content = StreamContent(stream=stream)
        else:
            raise TypeError(
                f"Expected a readable stream or stream factory, got {type(stream).__name__}"
            )
        self._mark_modified()
        self._install(content)

    def _install(self, content: Content) -> None:
        self._content = content
        self._content_drained = False
        self._stream_drained = False
        # A pending drain of replaced content must not install its result
        self._buffering = None
        logger.debug("Resource %s now backed by %s", self._path, content.kind.value)

    def _mark_modified(self) -> None:
        if self._source is not None and not self._source.modified:
            self._source.modified = True

    # ------------------------------------------------------------------
    # Stream handling
    # ------------------------------------------------------------------

    def _check_not_drained(self) -> None:
        if self._content_drained:
            raise ContentDrainedError(
                f"Content of Resource {self._path} has been drained. "
                "This might be caused by requesting resource content after a content stream "
                "has been requested and no new content (e.g. a new stream) has been set."
            )

    def _get_stream(self) -> Any:
        content = self._content
        if isinstance(content, StreamFactoryContent):
            return content.factory()
        if self._stream_drained:
            raise StreamDrainedError(
                f"Content stream of Resource {self._path} is flagged as drained."
            )
        self._stream_drained = True
        assert isinstance(content, StreamContent)
        return content.stream

    def _get_buffer_from_stream(self) -> asyncio.Future[bytes]:
        """Start draining the content stream, or join the drain in flight."""
        if self._buffering is not None:
            return self._buffering
        content = self._content
        content_stream = self._get_stream()
        task = asyncio.ensure_future(self._buffer_stream(content, content_stream))
        # Waiters are shielded; a failure must count as retrieved even if all of them left
        task.add_done_callback(_retrieve_exception)
        self._buffering = task
        return task

    async def _buffer_stream(self, content: Content | None, content_stream: Any) -> bytes:
        logger.debug("Buffering content stream of resource %s", self._path)
        try:
            chunks = await read_chunks(content_stream, self._settings.stream_chunk_size)
        except (Exception, asyncio.CancelledError) as exc:
            logger.warning(
                "Failed to read content stream of resource %s: %s", self._path, exc
            )
            if self._content is content:
                self._buffering = None
            raise

        buffer = b"".join(chunks)
        if self._content is not content:
            logger.debug(
                "Content of resource %s was replaced while buffering; result discarded",
                self._path,
            )
            return buffer

        # Reading is not a modification: restore the flag set_buffer raises
        modified = self._source.modified if self._source is not None else None
        self.set_buffer(buffer)
        if self._source is not None:
            self._source.modified = modified
        logger.debug("Buffered %d bytes for resource %s", len(buffer), self._path)
        return buffer

    # ------------------------------------------------------------------
    # Cloning
    # ------------------------------------------------------------------

    async def clone(self) -> Resource:
        """Return an independent copy of this resource.

        Stream content is materialized first since a stream cannot be read
        twice. The clone shares the source handle but not the project or the
        provenance trail.
        """
        options = await self._get_clone_options()
        logger.debug("Cloning resource %s", self._path)
        return Resource(**options)

    async def _get_clone_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "path": self._path,
            "stat_info": copy.deepcopy(self._stat_info),
            "source": self._source,
            "settings": self._settings,
        }
        content = self._content
        if isinstance(content, StreamContent):
            options["buffer"] = await asyncio.shield(self._get_buffer_from_stream())
        elif isinstance(content, StreamFactoryContent):
            options["create_stream"] = content.factory
        elif isinstance(content, BufferContent):
            options["buffer"] = content.data
        return options

    # ------------------------------------------------------------------
    # Project association
    # ------------------------------------------------------------------

    @property
    def project(self) -> ProjectLike | None:
        return self._project

    def get_project(self) -> ProjectLike | None:
        """Return the project this resource is associated with, if any."""
        return self._project

    def set_project(self, project: ProjectLike) -> None:
        """Associate a project. Fails if one is already assigned."""
        if self._project is not None:
            raise ProjectAlreadyAssignedError(
                f"Unable to assign project {_project_name(project)} to resource {self._path}: "
                f"Resource is already associated to project {_project_name(self._project)}"
            )
        self._project = project
        logger.info(
            "Assigned project %s to resource %s", _project_name(project), self._path
        )

    def has_project(self) -> bool:
        return self._project is not None

    # ------------------------------------------------------------------
    # Provenance
    # ------------------------------------------------------------------

    def push_collection(self, name: str) -> None:
        """Record a resource collection that was involved in locating this resource."""
        self._collections.append(name)

    @property
    def collections(self) -> list[str]:
        """Provenance trail, earliest first."""
        return list(self._collections)

    def get_path_tree(self) -> dict[str, dict]:
        """Nested mapping of path -> latest collection -> ... -> earliest collection."""
        tree: dict[str, dict] = {}
        pointer = tree[self._path] = {}
        for collection in reversed(self._collections):
            pointer[collection] = {}
            pointer = pointer[collection]
        return tree
