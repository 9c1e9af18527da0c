"""Pixel-transform engine: data model, filter catalogue and executors."""

from __future__ import annotations

from .catalog import FILTERS, FilterInfo, export_filename, filter_info
from .engine import FilterEngine, apply_filter
from .filter_kind import FilterKind
from .pixel_buffer import FilterResult, PixelBuffer, ProcessingStats, validate_geometry

__all__ = [
    "FILTERS",
    "FilterEngine",
    "FilterInfo",
    "FilterKind",
    "FilterResult",
    "PixelBuffer",
    "ProcessingStats",
    "apply_filter",
    "export_filename",
    "filter_info",
    "validate_geometry",
]
