"""Luma plane rotation.

Functions
---------
check_rotation_pair
    Validate a source/destination plane pair before any write.
rotate_luma
    Rotate a one-byte-per-sample plane by 90 degrees into a caller-allocated destination.
"""

from __future__ import annotations

from typing import Union

from biplanar_rotator.errors import BufferOverlap, DimensionMismatch
from biplanar_rotator.models.buffers import PlaneBuffer
from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.rotation.access import acquire_pair, check_writable
from biplanar_rotator.rotation.mapping import QuarterTurnMapping
from biplanar_rotator.rotation.partition import run_bands


def check_rotation_pair(source: PlaneBuffer, destination: PlaneBuffer) -> None:
    """Raise unless ``destination`` can receive the quarter-turn rotation of ``source``.

    Checks, in order: both planes are individually valid, they hold the same
    kind of sample, the destination dimensions are the swap of the source's,
    the two planes do not share storage, and the destination is not held
    read-only.
    """
    source.check()
    destination.check()

    if source.bytes_per_sample != destination.bytes_per_sample:
        raise DimensionMismatch(
            f"sample size mismatch: source {source.bytes_per_sample} B, "
            f"destination {destination.bytes_per_sample} B"
        )
    if int(destination.width) != int(source.height) or int(destination.height) != int(source.width):
        raise DimensionMismatch(
            f"destination must be {source.height}x{source.width} for source "
            f"{source.width}x{source.height}, got {destination.width}x{destination.height}"
        )
    if source.shares_memory(destination):
        raise BufferOverlap("source and destination planes share memory; rotation cannot be done in place")
    check_writable(destination)


def _rotate_cells(
    source: PlaneBuffer,
    destination: PlaneBuffer,
    direction: RotationDirection,
    *,
    max_workers: int = 1,
) -> None:
    """Copy every source cell to its rotated destination cell (no validation)."""
    mapping = QuarterTurnMapping(int(source.width), int(source.height), direction)

    with acquire_pair(source, destination):
        # Views taken inside the hold so the source view is read-only.
        src = source.samples()
        dst = destination.samples()

        def fill_band(rows: range) -> None:
            src_y, src_x = mapping.source_grid(rows)
            # Fancy indexing keeps any trailing pair axis together.
            dst[rows.start : rows.stop] = src[src_y, src_x]

        run_bands(mapping.dest_height, fill_band, max_workers=max_workers)


def rotate_luma(
    source: PlaneBuffer,
    destination: PlaneBuffer,
    direction: Union[RotationDirection, str, int],
    *,
    max_workers: int = 1,
) -> PlaneBuffer:
    """Rotate a luma plane by a quarter turn.

    Parameters
    ----------
    source:
        Plane to read; never modified.
    destination:
        Pre-allocated plane with ``width == source.height`` and ``height == source.width``.
        Every sample is overwritten; stride padding is left untouched.
    direction:
        Clockwise or counter-clockwise (aliases accepted, see ``RotationDirection.parse``).
    max_workers:
        Number of destination row bands filled concurrently.

    Returns
    -------
    PlaneBuffer
        ``destination``, for chaining.

    Raises
    ------
    DimensionMismatch, BufferTooSmall, BufferOverlap, BufferLocked
        Before any byte of ``destination`` is written.
    """
    direction = RotationDirection.parse(direction)
    if source.bytes_per_sample != 1:
        raise DimensionMismatch(
            f"rotate_luma expects one byte per sample, got {source.bytes_per_sample}; use rotate_chroma"
        )
    check_rotation_pair(source, destination)
    _rotate_cells(source, destination, direction, max_workers=max_workers)
    return destination
