"""Bridge between PySide6 ``QImage`` surfaces and :class:`PixelBuffer`.

GUI collaborators hand the engine whatever ``QImage`` they decoded or drew and
display the filtered result.  Qt pads scanlines to ``bytesPerLine`` and may
store pixels in a native-endian ARGB layout, so conversions always go through
``Format_RGBA8888`` and strip the padding explicitly.
"""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..core.pixel_buffer import CHANNELS, PixelBuffer
from ..errors import InvalidGeometryError


def _pixel_view(image: QImage) -> memoryview:
    """Return a read-only byte view over *image*'s scanlines, padding included."""

    expected_size = image.bytesPerLine() * image.height()
    view = memoryview(image.constBits()).cast("B")
    if view.nbytes < expected_size:
        raise InvalidGeometryError("QImage pixel buffer is smaller than expected")
    return view[:expected_size]


def qimage_to_buffer(image: QImage) -> PixelBuffer:
    """Copy *image* into a tightly packed RGBA :class:`PixelBuffer`."""

    if image.isNull() or image.width() <= 0 or image.height() <= 0:
        raise InvalidGeometryError("Cannot convert a null QImage")

    converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = converted.width()
    height = converted.height()
    bytes_per_line = converted.bytesPerLine()

    # ``converted`` owns the memory; it stays referenced until the copy below.
    view = _pixel_view(converted)
    rows = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    pixels = rows.reshape((height, bytes_per_line))[:, : width * CHANNELS]
    return PixelBuffer(width, height, np.ascontiguousarray(pixels).tobytes())


def buffer_to_qimage(buffer: PixelBuffer) -> QImage:
    """Return a detached ``Format_RGBA8888`` image holding *buffer*'s pixels."""

    image = QImage(
        buffer.data,
        buffer.width,
        buffer.height,
        buffer.width * CHANNELS,
        QImage.Format.Format_RGBA8888,
    )
    # ``copy`` detaches from the Python-owned bytes the constructor wrapped.
    return image.copy()
