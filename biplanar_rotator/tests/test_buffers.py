from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from biplanar_rotator.errors import BufferTooSmall, DimensionMismatch, RotationError
from biplanar_rotator.models.buffers import (
    ChromaPlaneBuffer,
    ImageBuffer,
    PlaneBuffer,
    aligned_stride,
)


def test_aligned_stride() -> None:
    assert aligned_stride(6, 1) == 6
    assert aligned_stride(6, 4) == 8
    assert aligned_stride(64, 64) == 64
    with pytest.raises(ValueError):
        aligned_stride(6, 0)


def test_allocate_luma_with_alignment() -> None:
    p = PlaneBuffer.allocate(6, 3, alignment=16)
    assert p.stride == 16
    assert p.row_bytes == 6
    assert p.required_size == 48
    assert p.data.dtype == np.uint8
    assert p.samples().shape == (3, 6)


def test_samples_view_writes_through_and_skips_padding() -> None:
    p = PlaneBuffer.allocate(3, 2, stride=5, fill=9)
    p.samples()[...] = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8)
    assert p.data.tolist() == [1, 2, 3, 9, 9, 4, 5, 6, 9, 9]
    np.testing.assert_array_equal(p.to_array(), [[1, 2, 3], [4, 5, 6]])


def test_chroma_samples_are_pairs() -> None:
    c = ChromaPlaneBuffer.allocate(2, 1, stride=6, fill=0)
    assert c.bytes_per_sample == 2
    assert c.row_bytes == 4
    c.samples()[0, 1] = [7, 8]
    assert c.data.tolist() == [0, 0, 7, 8, 0, 0]


def test_chroma_for_luma_halves_dimensions() -> None:
    c = ChromaPlaneBuffer.for_luma(8, 6)
    assert (c.width, c.height) == (4, 3)
    assert c.stride == 8
    assert np.all(c.data == 128)


@pytest.mark.parametrize("w,h", [(3, 4), (4, 5), (1, 1)])
def test_chroma_for_luma_rejects_odd(w: int, h: int) -> None:
    with pytest.raises(DimensionMismatch):
        ChromaPlaneBuffer.for_luma(w, h)


def test_check_rejects_short_stride() -> None:
    p = PlaneBuffer(width=4, height=2, stride=3, data=np.zeros(8, dtype=np.uint8))
    with pytest.raises(BufferTooSmall):
        p.check()


def test_check_rejects_short_storage() -> None:
    p = PlaneBuffer(width=4, height=2, stride=4, data=np.zeros(7, dtype=np.uint8))
    with pytest.raises(BufferTooSmall):
        p.check()


def test_check_rejects_chroma_stride_counting_pairs_as_bytes() -> None:
    # 4 pairs need 8 bytes per row
    c = ChromaPlaneBuffer(width=4, height=1, stride=4, data=np.zeros(8, dtype=np.uint8))
    with pytest.raises(BufferTooSmall):
        c.check()


def test_check_rejects_non_positive_and_bad_dtype() -> None:
    with pytest.raises(DimensionMismatch):
        PlaneBuffer(width=0, height=2, stride=4, data=np.zeros(8, dtype=np.uint8)).check()
    with pytest.raises(ValueError):
        PlaneBuffer(width=2, height=2, stride=2, data=np.zeros(4, dtype=np.uint16)).check()
    with pytest.raises(ValueError):
        PlaneBuffer(width=2, height=2, stride=2, data=np.zeros((2, 2), dtype=np.uint8)).check()


def test_errors_are_value_errors() -> None:
    assert issubclass(DimensionMismatch, RotationError)
    assert issubclass(BufferTooSmall, RotationError)
    assert issubclass(RotationError, ValueError)


def test_plane_is_frozen() -> None:
    p = PlaneBuffer.allocate(2, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.width = 3  # type: ignore[misc]


def test_image_from_planes_and_back() -> None:
    y = np.arange(24, dtype=np.uint8).reshape(4, 6)
    uv = np.arange(12, dtype=np.uint8).reshape(2, 3, 2)
    img = ImageBuffer.from_planes(y, uv, alignment=8)
    assert (img.width, img.height) == (6, 4)
    assert img.luma.stride == 8
    assert img.chroma.stride == 8
    y2, uv2 = img.to_arrays()
    np.testing.assert_array_equal(y2, y)
    np.testing.assert_array_equal(uv2, uv)


def test_image_check_rejects_odd_luma() -> None:
    with pytest.raises(DimensionMismatch):
        ImageBuffer.from_planes(np.zeros((3, 4), dtype=np.uint8), np.zeros((1, 2, 2), dtype=np.uint8))


def test_image_check_rejects_wrong_chroma_size() -> None:
    img = ImageBuffer(
        luma=PlaneBuffer.allocate(4, 4),
        chroma=ChromaPlaneBuffer.allocate(2, 1),
    )
    with pytest.raises(DimensionMismatch):
        img.check()


def test_image_check_rejects_unknown_pixel_format() -> None:
    img = ImageBuffer.allocate(2, 2)
    bad = dataclasses.replace(img, pixel_format="I420")
    with pytest.raises(ValueError):
        bad.check()
