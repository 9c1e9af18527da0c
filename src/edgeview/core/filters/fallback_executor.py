"""Pure-Python executor walking the buffer one pixel at a time.

This is the slowest path but mirrors the reference formulas line for line.
It calls the shared kernels in :mod:`.algorithms` from the interpreter, so it
doubles as the oracle the faster executors are checked against.
"""

from __future__ import annotations

import numpy as np

from ...errors import UnsupportedFilterKindError
from ..filter_kind import FilterKind
from .algorithms import (
    _clamp_shift,
    _float_to_uint8,
    _gray_level,
    _sepia_channels,
    _sobel_value,
    _threshold_value,
)
from .base import FilterExecutor
from .constants import COOL_SHIFT, WARM_SHIFT


def _map_pixels(data: bytearray, kind: FilterKind) -> None:
    """Rewrite the RGB samples of *data* in place; alpha is left untouched."""

    for offset in range(0, len(data), 4):
        r = data[offset]
        g = data[offset + 1]
        b = data[offset + 2]

        if kind is FilterKind.GRAYSCALE:
            value = _float_to_uint8(_gray_level(float(r), float(g), float(b)))
            rgb = (value, value, value)
        elif kind is FilterKind.SEPIA:
            rgb = _sepia_channels(float(r), float(g), float(b))
        elif kind is FilterKind.INVERT:
            rgb = (255 - r, 255 - g, 255 - b)
        elif kind is FilterKind.THRESHOLD:
            value = _threshold_value(float(r), float(g), float(b))
            rgb = (value, value, value)
        else:
            dr, dg, db = WARM_SHIFT if kind is FilterKind.WARM else COOL_SHIFT
            rgb = (_clamp_shift(r, dr), _clamp_shift(g, dg), _clamp_shift(b, db))

        data[offset : offset + 3] = bytes(int(channel) for channel in rgb)


def _sobel(data: bytes, width: int, height: int) -> bytearray:
    gray = [
        int(min(255.0, _gray_level(float(data[o]), float(data[o + 1]), float(data[o + 2]))))
        for o in range(0, len(data), 4)
    ]
    output = bytearray(b"\x00\x00\x00\xff" * (width * height))
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            i = y * width + x
            value = _sobel_value(
                gray[i - width - 1],
                gray[i - width],
                gray[i - width + 1],
                gray[i - 1],
                gray[i + 1],
                gray[i + width - 1],
                gray[i + width],
                gray[i + width + 1],
            )
            offset = i * 4
            output[offset : offset + 3] = bytes((value, value, value))
    return output


class FallbackExecutor(FilterExecutor):
    """Interpreter-only executor over a ``bytearray`` copy of the pixels."""

    name = "fallback"

    def apply(self, pixels: np.ndarray, kind: FilterKind) -> np.ndarray:
        height, width = pixels.shape[:2]
        data = bytearray(np.ascontiguousarray(pixels).tobytes())

        if kind is FilterKind.EDGE_DETECTION:
            data = _sobel(bytes(data), width, height)
        elif kind in (
            FilterKind.GRAYSCALE,
            FilterKind.SEPIA,
            FilterKind.INVERT,
            FilterKind.THRESHOLD,
            FilterKind.WARM,
            FilterKind.COOL,
        ):
            _map_pixels(data, kind)
        elif kind is not FilterKind.IDENTITY:
            raise UnsupportedFilterKindError(f"Unsupported filter kind: {kind!r}")

        return np.frombuffer(bytes(data), dtype=np.uint8).reshape(pixels.shape).copy()
