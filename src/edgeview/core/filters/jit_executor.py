"""JIT-accelerated executor using Numba.

The kernels walk the flat RGBA buffer directly, reusing the scalar helpers
from :mod:`.algorithms` so the maths is shared with the fallback executor.
The first call per kernel pays the compilation cost; ``cache=True`` persists
the machine code between processes.
"""

from __future__ import annotations

import numpy as np
from numba import jit

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

# Integer opcodes understood by ``_apply_point_filter``.
_OP_GRAYSCALE = 1
_OP_SEPIA = 2
_OP_INVERT = 3
_OP_THRESHOLD = 4
_OP_SHIFT = 5

_POINT_OPS = {
    FilterKind.GRAYSCALE: _OP_GRAYSCALE,
    FilterKind.SEPIA: _OP_SEPIA,
    FilterKind.INVERT: _OP_INVERT,
    FilterKind.THRESHOLD: _OP_THRESHOLD,
    FilterKind.WARM: _OP_SHIFT,
    FilterKind.COOL: _OP_SHIFT,
}

_SHIFTS = {
    FilterKind.WARM: WARM_SHIFT,
    FilterKind.COOL: COOL_SHIFT,
}


@jit(nopython=True, cache=True)
def _apply_point_filter(
    source: np.ndarray,
    target: np.ndarray,
    pixel_count: int,
    op: int,
    shift_r: int,
    shift_g: int,
    shift_b: int,
) -> None:
    """Per-pixel kernel for every filter that does not look at neighbours."""

    for index in range(pixel_count):
        offset = index * 4
        r = source[offset]
        g = source[offset + 1]
        b = source[offset + 2]
        fr = float(r)
        fg = float(g)
        fb = float(b)

        if op == _OP_GRAYSCALE:
            value = _float_to_uint8(_gray_level(fr, fg, fb))
            out_r = value
            out_g = value
            out_b = value
        elif op == _OP_SEPIA:
            out_r, out_g, out_b = _sepia_channels(fr, fg, fb)
        elif op == _OP_INVERT:
            out_r = 255 - int(r)
            out_g = 255 - int(g)
            out_b = 255 - int(b)
        elif op == _OP_THRESHOLD:
            value = _threshold_value(fr, fg, fb)
            out_r = value
            out_g = value
            out_b = value
        else:
            out_r = _clamp_shift(int(r), shift_r)
            out_g = _clamp_shift(int(g), shift_g)
            out_b = _clamp_shift(int(b), shift_b)

        target[offset] = out_r
        target[offset + 1] = out_g
        target[offset + 2] = out_b
        target[offset + 3] = source[offset + 3]


@jit(nopython=True, cache=True)
def _apply_sobel(source: np.ndarray, target: np.ndarray, width: int, height: int) -> None:
    """Sobel kernel writing opaque grey edges and a black, opaque border."""

    pixel_count = width * height
    gray = np.empty(pixel_count, dtype=np.int64)
    for index in range(pixel_count):
        offset = index * 4
        level = _gray_level(
            float(source[offset]), float(source[offset + 1]), float(source[offset + 2])
        )
        gray[index] = int(min(255.0, level))

    for index in range(pixel_count):
        offset = index * 4
        target[offset] = 0
        target[offset + 1] = 0
        target[offset + 2] = 0
        target[offset + 3] = 255

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
            target[offset] = value
            target[offset + 1] = value
            target[offset + 2] = value


class JitExecutor(FilterExecutor):
    """Numba-compiled pixel loops; fastest once the kernels are warm."""

    name = "jit"

    def apply(self, pixels: np.ndarray, kind: FilterKind) -> np.ndarray:
        height, width = pixels.shape[:2]
        source = np.ascontiguousarray(pixels).reshape(-1)
        target = np.empty_like(source)

        if kind is FilterKind.IDENTITY:
            target[:] = source
        elif kind is FilterKind.EDGE_DETECTION:
            _apply_sobel(source, target, width, height)
        elif kind in _POINT_OPS:
            shift_r, shift_g, shift_b = _SHIFTS.get(kind, (0, 0, 0))
            _apply_point_filter(
                source, target, width * height, _POINT_OPS[kind], shift_r, shift_g, shift_b
            )
        else:
            raise UnsupportedFilterKindError(f"Unsupported filter kind: {kind!r}")

        return target.reshape(pixels.shape)
