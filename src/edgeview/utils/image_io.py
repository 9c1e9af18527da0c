"""Decode and encode helpers wrapping Pillow.

The engine only ever sees :class:`PixelBuffer` instances; these helpers turn
files or remote URLs into buffers and buffers back into lossless PNGs.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

import requests
from PIL import Image, UnidentifiedImageError

from ..config import DEFAULT_MAX_WIDTH, FETCH_TIMEOUT
from ..core.pixel_buffer import PixelBuffer
from ..errors import ImageExportError, ImageLoadError

_LOGGER = logging.getLogger(__name__)

ImageSource = Union[str, Path, BinaryIO]


def fit_to_width(width: int, height: int, max_width: int) -> tuple[int, int]:
    """Return ``(width, height)`` scaled down so width does not exceed *max_width*.

    Dimensions are truncated like a canvas would, but never drop below one.
    """

    if width <= max_width:
        return width, height
    scale = max_width / width
    return max(1, int(width * scale)), max(1, int(height * scale))


def from_pil(image: Image.Image) -> PixelBuffer:
    """Convert a Pillow image of any mode into an RGBA :class:`PixelBuffer`."""

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return PixelBuffer(rgba.width, rgba.height, rgba.tobytes())


def to_pil(buffer: PixelBuffer) -> Image.Image:
    """Return a detached Pillow ``RGBA`` image holding *buffer*'s pixels."""

    return Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.data)


def is_url(source: ImageSource) -> bool:
    """Return ``True`` when *source* is an ``http(s)://`` address."""

    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def fetch_image_bytes(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = FETCH_TIMEOUT,
) -> bytes:
    """Download *url* and return the raw response body.

    Connection problems, timeouts and non-2xx statuses all surface as
    :class:`ImageLoadError` so callers never see a ``requests`` exception.
    """

    client = session if session is not None else requests
    try:
        response = client.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ImageLoadError(f"Failed to fetch {url}: {exc}") from exc
    _LOGGER.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content


def load_image(
    source: ImageSource,
    *,
    max_width: int = DEFAULT_MAX_WIDTH,
    session: Optional[requests.Session] = None,
) -> PixelBuffer:
    """Decode *source* into an RGBA buffer no wider than *max_width*.

    *source* may be a path, a binary file object or an ``http(s)://`` URL;
    URLs are fetched through *session* when one is given.
    """

    if is_url(source):
        source = io.BytesIO(fetch_image_bytes(source, session=session))

    try:
        with Image.open(source) as image:
            image.load()
            width, height = fit_to_width(image.width, image.height, max_width)
            if (width, height) != image.size:
                _LOGGER.debug(
                    "Downscaling %dx%d to %dx%d", image.width, image.height, width, height
                )
                rgba = image.convert("RGBA").resize(
                    (width, height), Image.Resampling.BILINEAR
                )
            else:
                rgba = image.convert("RGBA")
    except FileNotFoundError as exc:
        raise ImageLoadError(f"Image not found: {source}") from exc
    except UnidentifiedImageError as exc:
        raise ImageLoadError(f"Unrecognised image data: {source}") from exc
    except OSError as exc:
        raise ImageLoadError(f"Failed to decode image {source}: {exc}") from exc
    return from_pil(rgba)


def encode_png(buffer: PixelBuffer) -> bytes:
    """Return *buffer* encoded as PNG bytes."""

    stream = io.BytesIO()
    try:
        to_pil(buffer).save(stream, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageExportError(f"Failed to encode PNG: {exc}") from exc
    return stream.getvalue()


def save_png(buffer: PixelBuffer, path: Union[str, Path]) -> Path:
    """Write *buffer* to *path* as PNG and return the resolved path."""

    target = Path(path)
    payload = encode_png(buffer)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as exc:
        raise ImageExportError(f"Failed to write {target}: {exc}") from exc
    return target
