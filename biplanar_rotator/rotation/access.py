"""Scoped acquisition of plane storage.

Planes are locked for the duration of a rotation and always released, on
success and on failure alike:

- a read-only hold clears the numpy ``writeable`` flag of the backing array so
  that an accidental write into the source raises immediately;
- a writable hold refuses planes that are currently held read-only.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

import numpy as np

from biplanar_rotator.errors import BufferLocked
from biplanar_rotator.models.buffers import PlaneBuffer


def check_writable(plane: PlaneBuffer) -> None:
    """Raise ``BufferLocked`` if ``plane`` cannot currently take writes."""
    if not plane.data.flags.writeable:
        raise BufferLocked(f"{type(plane).__name__} is held read-only and cannot be written")


@contextmanager
def acquire(plane: PlaneBuffer, *, writable: bool) -> Iterator[np.ndarray]:
    """Hold ``plane`` and yield its ``(height, row_bytes)`` row view."""
    plane.check()
    data = plane.data

    if writable:
        check_writable(plane)
        yield plane.rows()
        return

    was_writeable = bool(data.flags.writeable)
    data.flags.writeable = False
    try:
        yield plane.rows()
    finally:
        if was_writeable:
            data.flags.writeable = True


@contextmanager
def acquire_pair(source: PlaneBuffer, destination: PlaneBuffer) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
    """Hold ``source`` read-only and ``destination`` writable; yield both row views."""
    with acquire(destination, writable=True) as dst_rows:
        with acquire(source, writable=False) as src_rows:
            yield src_rows, dst_rows
