"""Display metadata for the filter picker and export naming."""

from __future__ import annotations

from dataclasses import dataclass

from .filter_kind import FilterKind


@dataclass(frozen=True)
class FilterInfo:
    """Label and one-line description shown next to a filter button."""

    kind: FilterKind
    label: str
    description: str


# Panel order, not enum order.
FILTERS: tuple[FilterInfo, ...] = (
    FilterInfo(FilterKind.IDENTITY, "Original", "Raw camera feed"),
    FilterInfo(FilterKind.GRAYSCALE, "Grayscale", "Luminance conversion"),
    FilterInfo(FilterKind.EDGE_DETECTION, "Edge Detect", "Sobel operator"),
    FilterInfo(FilterKind.THRESHOLD, "Threshold", "Binary black & white"),
    FilterInfo(FilterKind.INVERT, "Invert", "Negative colors"),
    FilterInfo(FilterKind.SEPIA, "Sepia", "Vintage color scale"),
    FilterInfo(FilterKind.WARM, "Warm Scale", "Red/Yellow color boost"),
    FilterInfo(FilterKind.COOL, "Cool Scale", "Blue/Cyan color boost"),
)


def filter_info(kind: FilterKind | str) -> FilterInfo:
    """Return the catalogue entry for *kind*."""

    resolved = FilterKind.parse(kind)
    for info in FILTERS:
        if info.kind is resolved:
            return info
    raise LookupError(resolved)  # pragma: no cover - every member is listed


def export_filename(kind: FilterKind | str) -> str:
    """Return the download name used for a result, e.g. ``processed_sepia.png``."""

    return f"processed_{FilterKind.parse(kind).slug}.png"
