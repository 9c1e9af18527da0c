"""RGBA pixel buffers and the telemetry attached to a filter run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from ..errors import InvalidGeometryError

CHANNELS = 4
"""Samples per pixel, ordered R, G, B, A."""

BufferLike = Union["PixelBuffer", bytes, bytearray, memoryview, np.ndarray]


def validate_geometry(width: int, height: int, length: int) -> None:
    """Raise :class:`InvalidGeometryError` unless ``length == width * height * 4``."""

    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidGeometryError(f"{label} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidGeometryError(f"{label} must be positive, got {value}")
    expected = int(width) * int(height) * CHANNELS
    if length != expected:
        raise InvalidGeometryError(
            f"Buffer holds {length} samples but {width}x{height} RGBA needs {expected}"
        )


def as_pixel_array(buffer: BufferLike, width: int, height: int) -> np.ndarray:
    """Return a ``(height, width, 4)`` ``uint8`` view over *buffer*.

    Geometry is validated before any sample is read.  The returned array may
    share memory with *buffer*; callers must treat it as read-only.
    """

    if isinstance(buffer, PixelBuffer):
        if (buffer.width, buffer.height) != (width, height):
            raise InvalidGeometryError(
                f"Buffer is {buffer.width}x{buffer.height}, caller declared {width}x{height}"
            )
        return buffer.as_array()

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidGeometryError(f"Expected uint8 samples, got {buffer.dtype}")
        validate_geometry(width, height, int(buffer.size))
        return np.ascontiguousarray(buffer).reshape((height, width, CHANNELS))

    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise InvalidGeometryError(f"Unsupported pixel buffer type: {type(buffer).__name__}")

    try:
        view = memoryview(buffer).cast("B")
    except TypeError as exc:
        raise InvalidGeometryError(f"Pixel buffer must be C-contiguous bytes: {exc}") from exc
    validate_geometry(width, height, view.nbytes)
    return np.frombuffer(view, dtype=np.uint8).reshape((height, width, CHANNELS))


@dataclass(frozen=True)
class PixelBuffer:
    """Immutable row-major RGBA raster."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        validate_geometry(self.width, self.height, len(self.data))

    def __len__(self) -> int:
        return len(self.data)

    def as_array(self) -> np.ndarray:
        """Return a read-only ``(height, width, 4)`` view of the samples."""

        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            (self.height, self.width, CHANNELS)
        )

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the ``(r, g, b, a)`` tuple stored at column *x*, row *y*."""

        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * CHANNELS
        r, g, b, a = self.data[offset : offset + CHANNELS]
        return r, g, b, a

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Copy a ``(height, width, 4)`` ``uint8`` array into a new buffer."""

        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise InvalidGeometryError(f"Expected an (H, W, 4) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise InvalidGeometryError(f"Expected uint8 samples, got {array.dtype}")
        height, width = int(array.shape[0]), int(array.shape[1])
        return cls(width, height, np.ascontiguousarray(array).tobytes())

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> "PixelBuffer":
        """Return a buffer where every pixel equals *rgba*."""

        validate_geometry(width, height, width * height * CHANNELS)
        return cls(width, height, bytes(rgba) * (width * height))


@dataclass(frozen=True)
class ProcessingStats:
    """Size and timing telemetry for one filter run."""

    width: int
    height: int
    elapsed_ms: float

    @property
    def fps(self) -> int:
        """Frames per second a display would quote; 60 when no work was timed."""

        if self.elapsed_ms <= 0.0:
            return 60
        return round(1000.0 / self.elapsed_ms)


@dataclass(frozen=True)
class FilterResult:
    """Output raster plus the stats describing how it was produced."""

    buffer: PixelBuffer
    stats: ProcessingStats

    @property
    def data(self) -> bytes:
        return self.buffer.data

    @property
    def elapsed_ms(self) -> float:
        return self.stats.elapsed_ms
