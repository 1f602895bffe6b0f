from __future__ import annotations

import numpy as np
import pytest

from biplanar_rotator.errors import BufferLocked
from biplanar_rotator.models.buffers import PlaneBuffer
from biplanar_rotator.rotation.access import acquire, acquire_pair
from biplanar_rotator.rotation.partition import partition_rows, run_bands


@pytest.mark.parametrize("n_rows,n_parts", [(1, 1), (5, 2), (10, 3), (2, 4), (7, 7), (0, 3)])
def test_partition_covers_every_row_once(n_rows: int, n_parts: int) -> None:
    bands = partition_rows(n_rows, n_parts)
    rows = [r for band in bands for r in band]
    assert rows == list(range(n_rows))
    assert len(bands) <= n_parts
    assert all(len(b) > 0 for b in bands)
    if bands:
        sizes = [len(b) for b in bands]
        assert max(sizes) - min(sizes) <= 1


def test_partition_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        partition_rows(4, 0)
    with pytest.raises(ValueError):
        partition_rows(-1, 2)


def test_run_bands_parallel_fills_disjoint_rows() -> None:
    out = np.zeros((9, 3), dtype=np.int64)

    def fill(rows: range) -> None:
        out[rows.start : rows.stop] += 1

    run_bands(9, fill, max_workers=4)
    assert np.all(out == 1)


def test_run_bands_propagates_errors() -> None:
    def fill(rows: range) -> None:
        if rows.start > 0:
            raise RuntimeError("band failed")

    with pytest.raises(RuntimeError, match="band failed"):
        run_bands(6, fill, max_workers=3)


def test_read_hold_blocks_writes_and_is_released_on_error() -> None:
    p = PlaneBuffer.allocate(2, 2)
    with pytest.raises(KeyError):
        with acquire(p, writable=False) as rows:
            assert not p.data.flags.writeable
            with pytest.raises(ValueError):
                rows[0, 0] = 1
            raise KeyError("boom")
    assert p.data.flags.writeable


def test_write_hold_refused_while_read_held() -> None:
    p = PlaneBuffer.allocate(2, 2)
    with acquire(p, writable=False):
        with pytest.raises(BufferLocked):
            with acquire(p, writable=True):
                pass
    with acquire(p, writable=True) as rows:
        rows[1, 1] = 5
    assert p.data[3] == 5


def test_read_hold_keeps_read_only_arrays_read_only() -> None:
    p = PlaneBuffer.allocate(2, 2)
    p.data.flags.writeable = False
    with acquire(p, writable=False):
        pass
    assert not p.data.flags.writeable


def test_acquire_pair_views() -> None:
    src = PlaneBuffer.allocate(2, 1, fill=3)
    dst = PlaneBuffer.allocate(1, 2)
    with acquire_pair(src, dst) as (s, d):
        assert s.shape == (1, 2)
        assert d.shape == (2, 1)
        assert not s.flags.writeable
        assert d.flags.writeable
    assert src.data.flags.writeable
