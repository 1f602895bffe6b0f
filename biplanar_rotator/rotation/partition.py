"""Row-band partitioning of a destination plane.

Every destination row of a quarter-turn rotation depends only on the source,
so disjoint row bands can be filled independently.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List


def partition_rows(n_rows: int, n_parts: int) -> List[range]:
    """Split ``range(n_rows)`` into at most ``n_parts`` contiguous, non-empty bands.

    Bands differ in length by at most one row and cover every row exactly once.

    Examples
    --------
    >>> partition_rows(5, 2)
    [range(0, 3), range(3, 5)]
    >>> partition_rows(2, 4)
    [range(0, 1), range(1, 2)]
    """
    n_rows = int(n_rows)
    n_parts = int(n_parts)
    if n_rows < 0:
        raise ValueError(f"n_rows must be >= 0, got {n_rows}")
    if n_parts < 1:
        raise ValueError(f"n_parts must be >= 1, got {n_parts}")

    n_parts = min(n_parts, n_rows)
    if n_parts == 0:
        return []
    base, extra = divmod(n_rows, n_parts)
    bands: List[range] = []
    start = 0
    for i in range(n_parts):
        stop = start + base + (1 if i < extra else 0)
        bands.append(range(start, stop))
        start = stop
    return bands


def run_bands(n_rows: int, fill_band: Callable[[range], None], *, max_workers: int = 1) -> None:
    """Call ``fill_band`` once per band, sequentially or on a thread pool.

    Exceptions raised by any band propagate to the caller.
    """
    max_workers = int(max_workers)
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    bands = partition_rows(n_rows, max_workers)
    if max_workers == 1 or len(bands) <= 1:
        for band in bands:
            fill_band(band)
        return

    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [pool.submit(fill_band, band) for band in bands]
        for fut in futures:
            fut.result()
