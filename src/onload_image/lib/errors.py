"""Error types raised by onload-image.

Every error is fatal to the current invocation. The CLI logs the message
and exits with ``exit_code``.
"""

from __future__ import annotations


class ImageToolError(Exception):
    """Base class for all known error conditions."""
    exit_code = 1


class UsageError(ImageToolError):
    """Raised for unknown, duplicated or malformed command line flags."""
    exit_code = 2


class CatalogError(ImageToolError):
    """Raised when a catalog file cannot be read or fails validation."""
    pass


class UnknownVersionError(ImageToolError):
    """Raised when the requested Onload version is not in the catalog."""
    pass


class UnknownFlavorError(ImageToolError):
    """Raised when the requested flavor is not in the catalog."""
    pass


class MissingFlavorError(ImageToolError):
    """Raised when an action needs a flavor and none was given."""
    pass


class ConflictingTagSpecError(ImageToolError):
    """Raised when both an explicit tag and an autotag are requested."""
    pass


class MissingTagSpecError(ImageToolError):
    """Raised when a tag is requested but nothing can produce one."""
    pass


class PushPreconditionError(ImageToolError):
    """Raised when --push is used without --execute or without a tag."""
    pass


class NoActionError(ImageToolError):
    """Raised when no action flag was given."""
    pass


class ExternalCommandError(ImageToolError):
    """Raised when docker build or docker push fails."""
    pass
