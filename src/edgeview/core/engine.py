"""Uniform entry point running one filter over one RGBA buffer."""

from __future__ import annotations

import logging
import time
from functools import lru_cache

from .filter_kind import FilterKind
from .filters import FilterExecutor, select_backend
from .pixel_buffer import (
    BufferLike,
    FilterResult,
    PixelBuffer,
    ProcessingStats,
    as_pixel_array,
)

_LOGGER = logging.getLogger(__name__)


class FilterEngine:
    """Validate a raster, run the selected filter and time the transform.

    The engine is stateless between calls: it never mutates the caller's
    buffer, always returns a fresh :class:`PixelBuffer`, and keeps no
    reference to either.  Instances can therefore be shared across threads as
    long as every caller owns its own input.
    """

    def __init__(self, backend: str | FilterExecutor = "auto") -> None:
        self._executor = select_backend(backend)

    @property
    def backend(self) -> str:
        """Name of the executor doing the pixel work."""

        return self._executor.name

    def apply(
        self,
        buffer: BufferLike,
        width: int,
        height: int,
        kind: FilterKind | str,
    ) -> FilterResult:
        """Return *buffer* transformed by *kind* together with timing stats.

        Raises :class:`~edgeview.errors.InvalidGeometryError` when the buffer
        length does not equal ``width * height * 4`` and
        :class:`~edgeview.errors.UnsupportedFilterKindError` for selectors
        outside :class:`FilterKind`.  Both are raised before any pixel work.
        """

        pixels = as_pixel_array(buffer, width, height)
        resolved = FilterKind.parse(kind)

        if resolved is FilterKind.IDENTITY:
            output = PixelBuffer(width, height, pixels.tobytes())
            return FilterResult(output, ProcessingStats(width, height, 0.0))

        start = time.perf_counter()
        transformed = self._executor.apply(pixels, resolved)
        elapsed_ms = max(0.0, (time.perf_counter() - start) * 1000.0)

        output = PixelBuffer(width, height, transformed.tobytes())
        _LOGGER.debug(
            "%s on %dx%d via %s took %.2fms",
            resolved.value,
            width,
            height,
            self._executor.name,
            elapsed_ms,
        )
        return FilterResult(output, ProcessingStats(width, height, elapsed_ms))

    def apply_buffer(self, buffer: PixelBuffer, kind: FilterKind | str) -> FilterResult:
        """Convenience wrapper taking the geometry from *buffer* itself."""

        return self.apply(buffer, buffer.width, buffer.height, kind)


@lru_cache(maxsize=None)
def _engine_for(backend: str) -> FilterEngine:
    # Executors hold no state, so one engine per backend name is enough.
    return FilterEngine(backend)


def apply_filter(
    buffer: BufferLike,
    width: int,
    height: int,
    kind: FilterKind | str,
    *,
    backend: str = "auto",
) -> FilterResult:
    """Module-level shortcut for :meth:`FilterEngine.apply`."""

    return _engine_for(backend).apply(buffer, width, height, kind)
