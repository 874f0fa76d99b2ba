"""virtfs: virtual file-like resources for build and packaging tooling.

A Resource carries a virtual path, stat metadata and content backed by a
buffer, a single-use stream or a stream factory, converting between them
lazily and guarding one-shot streams against double draining.
"""

__version__ = "0.1.0"
__description__ = "Virtual file-like resources with a lazy content lifecycle"

from virtfs.core.errors import (
    ConflictingContentError,
    ContentDrainedError,
    MissingPathError,
    NoContentError,
    ProjectAlreadyAssignedError,
    ResourceError,
    StreamDrainedError,
)
from virtfs.core.resource import Resource
from virtfs.models.source import SourceHandle
from virtfs.models.stat_info import StatInfo

__all__ = [
    "Resource",
    "StatInfo",
    "SourceHandle",
    "ResourceError",
    "MissingPathError",
    "ConflictingContentError",
    "NoContentError",
    "ContentDrainedError",
    "StreamDrainedError",
    "ProjectAlreadyAssignedError",
    "__version__",
]
