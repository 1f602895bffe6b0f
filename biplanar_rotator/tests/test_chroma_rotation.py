from __future__ import annotations

import numpy as np
import pytest

from biplanar_rotator.errors import DimensionMismatch
from biplanar_rotator.models.buffers import ChromaPlaneBuffer, PlaneBuffer
from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.rotation.chroma import chroma_byte_index, rotate_chroma

CW = RotationDirection.CLOCKWISE
CCW = RotationDirection.COUNTER_CLOCKWISE


def _pairs_2x2() -> ChromaPlaneBuffer:
    # Pairs (0,1) (2,3) / (4,5) (6,7) for a 4x4 luma image
    return ChromaPlaneBuffer.from_array(np.arange(8, dtype=np.uint8).reshape(2, 2, 2))


def test_clockwise_pairs() -> None:
    dst = rotate_chroma(_pairs_2x2(), ChromaPlaneBuffer.allocate(2, 2), CW)
    assert dst.to_array().tolist() == [[[4, 5], [0, 1]], [[6, 7], [2, 3]]]


def test_counter_clockwise_pairs() -> None:
    dst = rotate_chroma(_pairs_2x2(), ChromaPlaneBuffer.allocate(2, 2), CCW)
    assert dst.to_array().tolist() == [[[2, 3], [6, 7]], [[0, 1], [4, 5]]]


@pytest.mark.parametrize("direction", [CW, CCW])
def test_single_pair_boundary(direction: RotationDirection) -> None:
    src = ChromaPlaneBuffer.from_array(np.array([[[10, 20]]], dtype=np.uint8))
    dst = rotate_chroma(src, ChromaPlaneBuffer.allocate(1, 1, fill=0), direction)
    assert dst.data.tolist() == [10, 20]


@pytest.mark.parametrize("direction", [CW, CCW])
def test_pairs_never_split(direction: RotationDirection) -> None:
    # U = 2k, V = 2k + 1 for pair k: every destination pair must keep that shape.
    w, h = 5, 3
    uv = np.arange(2 * w * h, dtype=np.uint8).reshape(h, w, 2)
    dst = rotate_chroma(ChromaPlaneBuffer.from_array(uv), ChromaPlaneBuffer.allocate(h, w), direction)
    out = dst.to_array().reshape(-1, 2).astype(int)
    assert np.all(out[:, 0] % 2 == 0)
    assert np.all(out[:, 1] == out[:, 0] + 1)
    assert sorted(out[:, 0].tolist()) == list(range(0, 2 * w * h, 2))


@pytest.mark.parametrize("direction", [CW, CCW])
def test_byte_formulas_match_rotation(direction: RotationDirection) -> None:
    W, H = 8, 6  # luma size
    uv = np.arange(W * H // 2, dtype=np.uint8).reshape(H // 2, W // 2, 2)
    src_bytes = uv.reshape(H // 2, W)
    dst = rotate_chroma(ChromaPlaneBuffer.from_array(uv), ChromaPlaneBuffer.allocate(H // 2, W // 2), direction)
    flat = dst.data

    for y in range(H // 2):
        for x in range(0, W, 2):
            if direction is CW:
                expected = (x // 2) * H + (H // 2 - y - 1) * 2
            else:
                expected = ((W - x - 2) // 2) * H + y * 2
            idx = chroma_byte_index(x, y, W, H, direction)
            assert idx == expected
            assert flat[idx] == src_bytes[y, x]
            assert flat[idx + 1] == src_bytes[y, x + 1]


def test_destination_stride_is_respected() -> None:
    uv = np.arange(12, dtype=np.uint8).reshape(2, 3, 2)
    dst = ChromaPlaneBuffer.allocate(2, 3, stride=7, fill=0xFF)
    rotate_chroma(ChromaPlaneBuffer.from_array(uv, stride=10), dst, CW)
    np.testing.assert_array_equal(dst.to_array(), np.rot90(uv, k=-1))
    assert np.all(dst.data.reshape(3, 7)[:, 4:] == 0xFF)


def test_byte_index_rejects_odd_offset_and_odd_luma() -> None:
    with pytest.raises(ValueError):
        chroma_byte_index(1, 0, 4, 4, CW)
    with pytest.raises(DimensionMismatch):
        chroma_byte_index(0, 0, 5, 4, CW)


def test_rejects_unswapped_destination_without_writing() -> None:
    src = ChromaPlaneBuffer.from_array(np.zeros((1, 2, 2), dtype=np.uint8))
    dst = ChromaPlaneBuffer.allocate(2, 1, fill=55)
    with pytest.raises(DimensionMismatch):
        rotate_chroma(src, dst, CCW)
    assert np.all(dst.data == 55)


def test_rejects_luma_planes() -> None:
    with pytest.raises(DimensionMismatch):
        rotate_chroma(PlaneBuffer.allocate(2, 1), PlaneBuffer.allocate(1, 2), CW)  # type: ignore[arg-type]
