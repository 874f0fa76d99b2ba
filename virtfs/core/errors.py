"""Error taxonomy for resource content access and bookkeeping.

All errors are programming errors surfaced immediately; none of them are
transient and nothing retries them.
"""

from __future__ import annotations


class ResourceError(RuntimeError):
    """Base class for every error raised by a Resource."""


class MissingPathError(ResourceError):
    """Raised when a Resource is constructed without a path."""


class ConflictingContentError(ResourceError):
    """Raised when more than one content parameter is supplied."""


class NoContentError(ResourceError):
    """Raised when content is requested but none was ever set."""


class ContentDrainedError(ResourceError):
    """Raised when content is requested after a stream view was handed out."""


class StreamDrainedError(ContentDrainedError):
    """Raised when a single-use content stream has already been pulled from.

    Stream factories never raise this: every invocation yields a fresh stream.
    """


class ProjectAlreadyAssignedError(ResourceError):
    """Raised when a second project is assigned to a Resource."""
