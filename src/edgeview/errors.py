"""Exception hierarchy shared by the engine and its collaborators."""

from __future__ import annotations


class EdgeViewError(Exception):
    """Base class for every error raised by :mod:`edgeview`."""


class InvalidGeometryError(EdgeViewError, ValueError):
    """Raised when a pixel buffer does not match its declared dimensions."""


class UnsupportedFilterKindError(EdgeViewError, ValueError):
    """Raised when a filter selector is not part of :class:`FilterKind`."""


class BackendUnavailableError(EdgeViewError):
    """Raised when an explicitly requested executor backend cannot run."""


class ImageLoadError(EdgeViewError):
    """Raised when a source image cannot be opened or decoded."""


class ImageExportError(EdgeViewError):
    """Raised when a filtered image cannot be encoded or written."""
