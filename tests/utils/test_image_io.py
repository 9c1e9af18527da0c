from __future__ import annotations

import io

import pytest
import requests
from PIL import Image

from edgeview import FilterKind, ImageLoadError, PixelBuffer, apply_filter
from edgeview.config import FETCH_TIMEOUT
from edgeview.utils.image_io import (
    encode_png,
    fetch_image_bytes,
    fit_to_width,
    is_url,
    load_image,
    save_png,
)


def test_fit_to_width_scales_proportionally():
    assert fit_to_width(800, 600, 1024) == (800, 600)
    assert fit_to_width(2048, 1536, 1024) == (1024, 768)
    assert fit_to_width(3000, 1, 1024) == (1024, 1)


def test_load_image_downscales_wide_sources(tmp_path):
    path = tmp_path / "wide.png"
    Image.new("RGB", (2048, 100), (10, 20, 30)).save(path)

    buffer = load_image(path, max_width=1024)

    assert (buffer.width, buffer.height) == (1024, 50)
    assert buffer.pixel(0, 0) == (10, 20, 30, 255)


def test_load_image_converts_to_rgba(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (3, 2), 77).save(path)

    buffer = load_image(path)

    assert len(buffer) == 3 * 2 * 4
    assert buffer.pixel(2, 1) == (77, 77, 77, 255)


def test_load_image_accepts_file_objects():
    stream = io.BytesIO()
    Image.new("RGBA", (2, 2), (1, 2, 3, 4)).save(stream, format="PNG")
    stream.seek(0)

    assert load_image(stream).data == bytes([1, 2, 3, 4]) * 4


def test_load_image_reports_missing_files(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")


def test_load_image_reports_undecodable_data(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not an image")

    with pytest.raises(ImageLoadError):
        load_image(path)


def test_png_export_is_lossless(tmp_path):
    source = PixelBuffer(2, 1, bytes([255, 0, 10, 128, 1, 2, 3, 0]))
    result = apply_filter(source, 2, 1, FilterKind.INVERT)

    path = save_png(result.buffer, tmp_path / "out" / "processed_invert.png")

    assert path.exists()
    with Image.open(path) as reopened:
        assert reopened.mode == "RGBA"
        assert reopened.tobytes() == result.data


def test_encode_png_produces_png_signature():
    payload = encode_png(PixelBuffer.filled(1, 1, (0, 0, 0, 255)))
    assert payload.startswith(b"\x89PNG\r\n\x1a\n")


class _StubResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class _StubSession:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self._error is not None:
            raise self._error
        return self._response


def _png_bytes(size=(2, 2), colour=(9, 8, 7, 255)) -> bytes:
    stream = io.BytesIO()
    Image.new("RGBA", size, colour).save(stream, format="PNG")
    return stream.getvalue()


def test_is_url_only_matches_http_schemes(tmp_path):
    assert is_url("https://picsum.photos/seed/edgedetect/800/600")
    assert is_url("HTTP://example.com/a.png")
    assert not is_url("ftp://example.com/a.png")
    assert not is_url(str(tmp_path / "a.png"))
    assert not is_url(tmp_path / "a.png")


def test_load_image_fetches_remote_sources():
    session = _StubSession(_StubResponse(_png_bytes(size=(2048, 4))))

    buffer = load_image("https://example.com/wide.png", max_width=512, session=session)

    assert (buffer.width, buffer.height) == (512, 1)
    assert buffer.pixel(0, 0) == (9, 8, 7, 255)
    assert session.calls == [("https://example.com/wide.png", FETCH_TIMEOUT)]


def test_http_errors_become_load_errors():
    session = _StubSession(_StubResponse(status_code=404))

    with pytest.raises(ImageLoadError, match="404"):
        load_image("https://example.com/missing.png", session=session)


def test_network_failures_become_load_errors():
    session = _StubSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(ImageLoadError):
        fetch_image_bytes("https://example.com/a.png", session=session)


def test_remote_payload_that_is_not_an_image_is_rejected():
    session = _StubSession(_StubResponse(b"<html>nope</html>"))

    with pytest.raises(ImageLoadError):
        load_image("https://example.com/page", session=session)
