"""Scalar per-pixel kernels shared by the loop based executors.

The functions are compiled with Numba so :mod:`.jit_executor` can inline them
into its pixel loops, while :mod:`.fallback_executor` calls the same
dispatchers from plain Python.  :mod:`.numpy_executor` repeats the formulas in
vectorised form with identical operation order, which keeps every backend
bit-for-bit equal.
"""

from __future__ import annotations

import math

from numba import jit

from .constants import (
    EDGE_MAGNITUDE_THRESHOLD,
    GRAY_B,
    GRAY_G,
    GRAY_R,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    SEPIA_MATRIX,
    THRESHOLD_LEVEL,
)

# Numba freezes module-level floats as constants; nested tuples need unpacking.
_SEPIA_RR, _SEPIA_RG, _SEPIA_RB = SEPIA_MATRIX[0]
_SEPIA_GR, _SEPIA_GG, _SEPIA_GB = SEPIA_MATRIX[1]
_SEPIA_BR, _SEPIA_BG, _SEPIA_BB = SEPIA_MATRIX[2]


@jit(nopython=True, cache=True)
def _round_half_even(value: float) -> int:
    """Round *value* to the nearest integer, ties going to the even neighbour."""

    floor = math.floor(value)
    result = int(floor)
    remainder = value - floor
    if remainder > 0.5 or (remainder == 0.5 and result % 2 == 1):
        result += 1
    return result


@jit(nopython=True, cache=True)
def _float_to_uint8(value: float) -> int:
    """Clamp *value* into ``[0, 255]`` and round it to an 8-bit sample."""

    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return _round_half_even(value)


@jit(nopython=True, cache=True)
def _clamp_shift(value: int, delta: int) -> int:
    shifted = value + delta
    if shifted < 0:
        return 0
    if shifted > 255:
        return 255
    return shifted


@jit(nopython=True, cache=True)
def _gray_level(r: float, g: float, b: float) -> float:
    """Perceptual grey used by the Grayscale filter and the Sobel plane."""

    return GRAY_R * r + GRAY_G * g + GRAY_B * b


@jit(nopython=True, cache=True)
def _threshold_value(r: float, g: float, b: float) -> int:
    luma = LUMA_R * r + LUMA_G * g + LUMA_B * b
    if luma >= THRESHOLD_LEVEL:
        return 255
    return 0


@jit(nopython=True, cache=True)
def _sepia_channels(r: float, g: float, b: float) -> tuple[int, int, int]:
    return (
        _float_to_uint8(_SEPIA_RR * r + _SEPIA_RG * g + _SEPIA_RB * b),
        _float_to_uint8(_SEPIA_GR * r + _SEPIA_GG * g + _SEPIA_GB * b),
        _float_to_uint8(_SEPIA_BR * r + _SEPIA_BG * g + _SEPIA_BB * b),
    )


@jit(nopython=True, cache=True)
def _sobel_value(
    p00: int,
    p01: int,
    p02: int,
    p10: int,
    p12: int,
    p20: int,
    p21: int,
    p22: int,
) -> int:
    """Return the thresholded gradient magnitude for one 3x3 neighbourhood."""

    gx = -p00 + p02 - 2 * p10 + 2 * p12 - p20 + p22
    gy = -p00 - 2 * p01 - p02 + p20 + 2 * p21 + p22
    magnitude = math.sqrt(float(gx * gx + gy * gy))
    if magnitude > EDGE_MAGNITUDE_THRESHOLD:
        return _float_to_uint8(min(255.0, magnitude))
    return 0
