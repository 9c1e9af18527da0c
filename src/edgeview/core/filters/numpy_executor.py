"""NumPy vectorised executor.

Each filter is a free function over a ``(height, width, 4)`` ``uint8`` array.
Arithmetic runs in ``float64`` with the same operand order as the scalar
kernels in :mod:`.algorithms`; ``np.rint`` rounds ties to even, matching
``_float_to_uint8``.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from ...errors import UnsupportedFilterKindError
from ..filter_kind import FilterKind
from .base import FilterExecutor
from .constants import (
    COOL_SHIFT,
    EDGE_MAGNITUDE_THRESHOLD,
    GRAY_B,
    GRAY_G,
    GRAY_R,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    SEPIA_MATRIX,
    THRESHOLD_LEVEL,
    WARM_SHIFT,
)


def _np_to_uint8(values: np.ndarray) -> np.ndarray:
    """Vectorised equivalent of ``_float_to_uint8``."""

    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def _split_rgb(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    rgb = pixels[..., :3].astype(np.float64)
    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


def _with_gray(pixels: np.ndarray, gray: np.ndarray) -> np.ndarray:
    output = pixels.copy()
    output[..., 0] = gray
    output[..., 1] = gray
    output[..., 2] = gray
    return output


def gray_plane(pixels: np.ndarray) -> np.ndarray:
    """Return the truncated 8-bit grey plane used by the Sobel detector."""

    r, g, b = _split_rgb(pixels)
    gray = GRAY_R * r + GRAY_G * g + GRAY_B * b
    return np.clip(gray, 0.0, 255.0).astype(np.uint8)


def grayscale(pixels: np.ndarray) -> np.ndarray:
    r, g, b = _split_rgb(pixels)
    return _with_gray(pixels, _np_to_uint8(GRAY_R * r + GRAY_G * g + GRAY_B * b))


def sepia(pixels: np.ndarray) -> np.ndarray:
    r, g, b = _split_rgb(pixels)
    output = pixels.copy()
    for channel, (wr, wg, wb) in enumerate(SEPIA_MATRIX):
        output[..., channel] = _np_to_uint8(wr * r + wg * g + wb * b)
    return output


def invert(pixels: np.ndarray) -> np.ndarray:
    output = pixels.copy()
    output[..., :3] = 255 - pixels[..., :3]
    return output


def threshold(pixels: np.ndarray) -> np.ndarray:
    r, g, b = _split_rgb(pixels)
    luma = LUMA_R * r + LUMA_G * g + LUMA_B * b
    binary = np.where(luma >= THRESHOLD_LEVEL, 255, 0).astype(np.uint8)
    return _with_gray(pixels, binary)


def _shift(pixels: np.ndarray, deltas: tuple[int, int, int]) -> np.ndarray:
    output = pixels.copy()
    shifted = pixels[..., :3].astype(np.int16) + np.asarray(deltas, dtype=np.int16)
    output[..., :3] = np.clip(shifted, 0, 255).astype(np.uint8)
    return output


def warm(pixels: np.ndarray) -> np.ndarray:
    return _shift(pixels, WARM_SHIFT)


def cool(pixels: np.ndarray) -> np.ndarray:
    return _shift(pixels, COOL_SHIFT)


def edge_detection(pixels: np.ndarray) -> np.ndarray:
    """Sobel gradient magnitude; border pixels stay black, alpha is forced opaque."""

    height, width = pixels.shape[:2]
    output = np.zeros_like(pixels)
    output[..., 3] = 255
    if width < 3 or height < 3:
        return output

    gray = gray_plane(pixels).astype(np.int64)
    p00 = gray[:-2, :-2]
    p01 = gray[:-2, 1:-1]
    p02 = gray[:-2, 2:]
    p10 = gray[1:-1, :-2]
    p12 = gray[1:-1, 2:]
    p20 = gray[2:, :-2]
    p21 = gray[2:, 1:-1]
    p22 = gray[2:, 2:]

    gx = -p00 + p02 - 2 * p10 + 2 * p12 - p20 + p22
    gy = -p00 - 2 * p01 - p02 + p20 + 2 * p21 + p22
    magnitude = np.sqrt((gx * gx + gy * gy).astype(np.float64))
    value = np.where(
        magnitude > EDGE_MAGNITUDE_THRESHOLD, np.minimum(255.0, magnitude), 0.0
    )
    interior = _np_to_uint8(value)
    output[1:-1, 1:-1, 0] = interior
    output[1:-1, 1:-1, 1] = interior
    output[1:-1, 1:-1, 2] = interior
    return output


_FILTERS: Dict[FilterKind, Callable[[np.ndarray], np.ndarray]] = {
    FilterKind.IDENTITY: np.copy,
    FilterKind.GRAYSCALE: grayscale,
    FilterKind.EDGE_DETECTION: edge_detection,
    FilterKind.INVERT: invert,
    FilterKind.SEPIA: sepia,
    FilterKind.THRESHOLD: threshold,
    FilterKind.WARM: warm,
    FilterKind.COOL: cool,
}


def filter_function(kind: FilterKind) -> Callable[[np.ndarray], np.ndarray]:
    """Return the vectorised implementation registered for *kind*."""

    try:
        return _FILTERS[kind]
    except KeyError:
        raise UnsupportedFilterKindError(f"Unsupported filter kind: {kind!r}") from None


class NumpyExecutor(FilterExecutor):
    """Default executor; vectorised and dependency-light."""

    name = "numpy"

    def apply(self, pixels: np.ndarray, kind: FilterKind) -> np.ndarray:
        return filter_function(kind)(pixels)
