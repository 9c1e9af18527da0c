"""Pillow-based executor using lookup tables (LUT).

Invert, Warm and Cool map every channel independently, so they reduce to a
256-entry table per band that Pillow's ``Image.point`` applies in native
code.  Filters that mix channels or read neighbours are delegated to the
NumPy executor.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image

from ..filter_kind import FilterKind
from .base import FilterExecutor
from .constants import COOL_SHIFT, WARM_SHIFT
from .numpy_executor import filter_function

_IDENTITY_TABLE: list[int] = list(range(256))


def _shift_table(delta: int) -> list[int]:
    return [max(0, min(255, value + delta)) for value in range(256)]


def build_lut(kind: FilterKind) -> list[int] | None:
    """Return the 1024-entry RGBA table for *kind*, or ``None`` if it has none."""

    if kind is FilterKind.INVERT:
        channel = [255 - value for value in range(256)]
        return channel * 3 + _IDENTITY_TABLE
    if kind is FilterKind.WARM:
        deltas: Sequence[int] = WARM_SHIFT
    elif kind is FilterKind.COOL:
        deltas = COOL_SHIFT
    else:
        return None
    table: list[int] = []
    for delta in deltas:
        table.extend(_shift_table(delta))
    # Alpha keeps an identity table so transparency is untouched.
    return table + _IDENTITY_TABLE


def apply_with_lut(pixels: np.ndarray, lut: Sequence[int]) -> np.ndarray:
    """Run *lut* over *pixels* through Pillow and return a new array."""

    height, width = pixels.shape[:2]
    image = Image.frombuffer(
        "RGBA",
        (width, height),
        np.ascontiguousarray(pixels).tobytes(),
        "raw",
        "RGBA",
        0,
        1,
    )
    mapped = image.point(list(lut))
    return np.frombuffer(mapped.tobytes(), dtype=np.uint8).reshape(pixels.shape).copy()


class PillowExecutor(FilterExecutor):
    """LUT executor for per-channel filters, NumPy for everything else."""

    name = "pillow"

    def apply(self, pixels: np.ndarray, kind: FilterKind) -> np.ndarray:
        lut = build_lut(kind)
        if lut is None:
            return filter_function(kind)(pixels)
        return apply_with_lut(pixels, lut)
