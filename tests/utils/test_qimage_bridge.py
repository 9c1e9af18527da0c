from __future__ import annotations

import pytest

QtGui = pytest.importorskip("PySide6.QtGui")

from edgeview import FilterKind, InvalidGeometryError, PixelBuffer, apply_filter  # noqa: E402
from edgeview.utils.qimage import _pixel_view, buffer_to_qimage, qimage_to_buffer  # noqa: E402


def test_buffer_round_trips_through_qimage():
    source = PixelBuffer(2, 2, bytes(range(16)))

    image = buffer_to_qimage(source)

    assert (image.width(), image.height()) == (2, 2)
    assert qimage_to_buffer(image) == source


def test_scanline_padding_is_stripped():
    # RGB888 rows of 3 pixels take 9 bytes and are padded to 12.
    image = QtGui.QImage(3, 2, QtGui.QImage.Format.Format_RGB888)
    image.fill(QtGui.QColor(200, 150, 100))
    image.setPixelColor(2, 1, QtGui.QColor(1, 2, 3))

    buffer = qimage_to_buffer(image)

    assert len(buffer) == 3 * 2 * 4
    assert buffer.pixel(0, 0) == (200, 150, 100, 255)
    assert buffer.pixel(2, 1) == (1, 2, 3, 255)


def test_filtered_result_can_be_displayed():
    image = QtGui.QImage(1, 1, QtGui.QImage.Format.Format_RGBA8888)
    image.fill(QtGui.QColor(200, 150, 100, 255))

    result = apply_filter(qimage_to_buffer(image), 1, 1, FilterKind.WARM)
    shown = buffer_to_qimage(result.buffer)

    colour = shown.pixelColor(0, 0)
    assert (colour.red(), colour.green(), colour.blue(), colour.alpha()) == (240, 160, 80, 255)


def test_null_images_are_rejected():
    with pytest.raises(InvalidGeometryError):
        qimage_to_buffer(QtGui.QImage())


def test_pixel_view_spans_padded_scanlines():
    image = QtGui.QImage(3, 2, QtGui.QImage.Format.Format_RGBA8888)
    image.fill(QtGui.QColor(4, 5, 6, 7))

    view = _pixel_view(image)

    assert view.nbytes == image.bytesPerLine() * image.height()
    assert bytes(view[:4]) == bytes([4, 5, 6, 7])
