"""Behavioural tests for FilterEngine / apply_filter."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from edgeview import (
    FilterEngine,
    FilterKind,
    InvalidGeometryError,
    PixelBuffer,
    UnsupportedFilterKindError,
    apply_filter,
)


ALL_KINDS = list(FilterKind)
ALPHA_PRESERVING = [kind for kind in FilterKind if kind is not FilterKind.EDGE_DETECTION]


def _rgba(result) -> np.ndarray:
    return result.buffer.as_array()


def test_identity_is_byte_identical_and_untimed(random_rgba):
    data = random_rgba(7, 5)
    result = apply_filter(data, 7, 5, FilterKind.IDENTITY)

    assert result.data == data
    assert result.elapsed_ms == 0.0
    assert result.stats.fps == 60


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_geometry_is_preserved(kind, random_rgba):
    data = random_rgba(9, 4)
    result = apply_filter(data, 9, 4, kind)

    assert len(result.data) == len(data) == 9 * 4 * 4
    assert (result.stats.width, result.stats.height) == (9, 4)
    assert result.elapsed_ms >= 0.0


@pytest.mark.parametrize("kind", ALPHA_PRESERVING)
def test_alpha_passes_through(kind, random_rgba):
    data = random_rgba(6, 6, seed=7)
    result = apply_filter(data, 6, 6, kind)

    assert result.data[3::4] == data[3::4]


def test_edge_detection_forces_opaque_alpha(random_rgba):
    data = bytearray(random_rgba(6, 6, seed=3))
    data[3::4] = bytes([10]) * 36
    result = apply_filter(bytes(data), 6, 6, FilterKind.EDGE_DETECTION)

    assert set(result.data[3::4]) == {255}


def test_grayscale_is_idempotent(random_rgba):
    data = random_rgba(8, 8, seed=11)
    once = apply_filter(data, 8, 8, FilterKind.GRAYSCALE)
    twice = apply_filter(once.data, 8, 8, FilterKind.GRAYSCALE)

    assert twice.data == once.data
    pixels = _rgba(once)
    assert np.array_equal(pixels[..., 0], pixels[..., 1])
    assert np.array_equal(pixels[..., 1], pixels[..., 2])


def test_invert_is_an_involution(random_rgba):
    data = random_rgba(10, 3, seed=5)
    inverted = apply_filter(data, 10, 3, FilterKind.INVERT)
    restored = apply_filter(inverted.data, 10, 3, FilterKind.INVERT)

    assert restored.data == data


def test_threshold_output_is_binary(random_rgba):
    result = apply_filter(random_rgba(12, 12, seed=21), 12, 12, FilterKind.THRESHOLD)
    rgb = _rgba(result)[..., :3]

    assert set(np.unique(rgb)).issubset({0, 255})


def test_threshold_uses_rec709_luma():
    # Pure green is bright under Rec. 709, pure red is not.
    data = bytes([0, 255, 0, 255, 255, 0, 0, 255])
    result = apply_filter(data, 2, 1, "threshold")

    assert result.buffer.pixel(0, 0) == (255, 255, 255, 255)
    assert result.buffer.pixel(1, 0) == (0, 0, 0, 255)


def test_mid_gray_survives_grayscale():
    source = PixelBuffer.filled(3, 3, (128, 128, 128, 255))
    result = apply_filter(source, 3, 3, FilterKind.GRAYSCALE)

    assert result.data == source.data


def test_white_inverts_to_black():
    source = PixelBuffer.filled(2, 2, (255, 255, 255, 255))
    result = apply_filter(source, 2, 2, FilterKind.INVERT)

    assert result.data == bytes([0, 0, 0, 255]) * 4


def test_warm_shifts_and_clamps_channels():
    result = apply_filter(bytes([200, 150, 100, 255]), 1, 1, FilterKind.WARM)
    assert result.buffer.pixel(0, 0) == (240, 160, 80, 255)

    clamped = apply_filter(bytes([250, 250, 5, 40]), 1, 1, FilterKind.WARM)
    assert clamped.buffer.pixel(0, 0) == (255, 255, 0, 40)


def test_cool_shifts_and_clamps_channels():
    result = apply_filter(bytes([5, 250, 220, 99]), 1, 1, FilterKind.COOL)
    assert result.buffer.pixel(0, 0) == (0, 255, 255, 99)

    plain = apply_filter(bytes([100, 100, 100, 255]), 1, 1, FilterKind.COOL)
    assert plain.buffer.pixel(0, 0) == (90, 110, 150, 255)


def test_sepia_rounds_and_clamps():
    result = apply_filter(bytes([100, 100, 100, 255, 255, 255, 255, 128]), 2, 1, FilterKind.SEPIA)

    assert result.buffer.pixel(0, 0) == (135, 120, 94, 255)
    assert result.buffer.pixel(1, 0) == (255, 255, 239, 128)


def test_edge_detection_border_is_black_and_opaque(random_rgba):
    result = apply_filter(random_rgba(5, 5, seed=99), 5, 5, FilterKind.EDGE_DETECTION)
    buffer = result.buffer

    for y in range(5):
        for x in range(5):
            if x in (0, 4) or y in (0, 4):
                assert buffer.pixel(x, y) == (0, 0, 0, 255)


def test_edge_detection_finds_vertical_step():
    pixels = np.zeros((5, 5, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[:, 2:, :3] = 255
    result = apply_filter(pixels, 5, 5, FilterKind.EDGE_DETECTION)
    buffer = result.buffer

    for y in (1, 2, 3):
        assert buffer.pixel(1, y) == (255, 255, 255, 255)
        assert buffer.pixel(2, y) == (255, 255, 255, 255)
        assert buffer.pixel(3, y) == (0, 0, 0, 255)


def test_edge_detection_ignores_flat_regions():
    source = PixelBuffer.filled(6, 4, (90, 30, 200, 17))
    result = apply_filter(source, 6, 4, FilterKind.EDGE_DETECTION)

    assert result.data == bytes([0, 0, 0, 255]) * 24


@pytest.mark.parametrize("size", [(2, 5), (5, 2), (1, 1)])
def test_edge_detection_on_tiny_images_is_all_border(size, random_rgba):
    width, height = size
    result = apply_filter(random_rgba(width, height), width, height, FilterKind.EDGE_DETECTION)

    assert result.data == bytes([0, 0, 0, 255]) * (width * height)


def test_input_buffer_is_never_mutated(random_rgba):
    data = bytearray(random_rgba(4, 4))
    snapshot = bytes(data)
    array = np.frombuffer(snapshot, dtype=np.uint8).copy()

    for kind in FilterKind:
        apply_filter(data, 4, 4, kind)
        apply_filter(array, 4, 4, kind)

    assert bytes(data) == snapshot
    assert array.tobytes() == snapshot


@pytest.mark.parametrize(
    "length, width, height",
    [(15, 2, 2), (16, 0, 4), (16, 4, -1), (0, 1, 1)],
)
def test_invalid_geometry_is_rejected(length, width, height):
    with pytest.raises(InvalidGeometryError):
        apply_filter(bytes(length), width, height, FilterKind.INVERT)


def test_non_uint8_arrays_are_rejected():
    with pytest.raises(InvalidGeometryError):
        apply_filter(np.zeros((2, 2, 4), dtype=np.float32), 2, 2, FilterKind.GRAYSCALE)


def test_pixel_buffer_geometry_must_match_declared_size():
    source = PixelBuffer.filled(2, 3, (1, 2, 3, 4))
    with pytest.raises(InvalidGeometryError):
        apply_filter(source, 3, 2, FilterKind.GRAYSCALE)


@pytest.mark.parametrize("selector", ["blur", "", 3, None])
def test_unknown_filter_kind_is_rejected(selector):
    with pytest.raises(UnsupportedFilterKindError):
        apply_filter(bytes(4), 1, 1, selector)


def test_engine_reports_backend_and_accepts_pixel_buffers(random_rgba):
    engine = FilterEngine("numpy")
    source = PixelBuffer(3, 3, random_rgba(3, 3))
    result = engine.apply_buffer(source, "Edge Detection")

    assert engine.backend == "numpy"
    assert len(result.buffer) == len(source)


def test_concurrent_calls_match_sequential_results(random_rgba):
    engine = FilterEngine()
    jobs = [(random_rgba(16, 16, seed=seed), kind) for seed in range(4) for kind in FilterKind]
    expected = [engine.apply(data, 16, 16, kind).data for data, kind in jobs]

    with ThreadPoolExecutor(max_workers=4) as pool:
        actual = list(pool.map(lambda job: engine.apply(job[0], 16, 16, job[1]).data, jobs))

    assert actual == expected


def test_non_contiguous_memoryviews_are_rejected():
    strided = memoryview(bytes(32))[::2]

    with pytest.raises(InvalidGeometryError):
        apply_filter(strided, 2, 2, FilterKind.INVERT)
