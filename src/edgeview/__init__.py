"""edgeview: RGBA image filters with a uniform, timed entry point."""

from __future__ import annotations

from .config import EngineSettings
from .core import (
    FILTERS,
    FilterEngine,
    FilterInfo,
    FilterKind,
    FilterResult,
    PixelBuffer,
    ProcessingStats,
    apply_filter,
    export_filename,
)
from .errors import (
    BackendUnavailableError,
    EdgeViewError,
    ImageExportError,
    ImageLoadError,
    InvalidGeometryError,
    UnsupportedFilterKindError,
)

__version__ = "0.1.0"

__all__ = [
    "BackendUnavailableError",
    "EdgeViewError",
    "EngineSettings",
    "FILTERS",
    "FilterEngine",
    "FilterInfo",
    "FilterKind",
    "FilterResult",
    "ImageExportError",
    "ImageLoadError",
    "InvalidGeometryError",
    "PixelBuffer",
    "ProcessingStats",
    "UnsupportedFilterKindError",
    "apply_filter",
    "export_filename",
]
