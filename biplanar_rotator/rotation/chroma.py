"""Chroma plane rotation for interleaved 4:2:0 (U, V) pairs.

The chroma plane is rotated on its own half-resolution pair grid with exactly
the same :class:`~biplanar_rotator.rotation.mapping.QuarterTurnMapping` as the
luma plane, so both planes turn in the same sense. The two bytes of a pair are
copied as one sample and are never separated or reordered.
"""

from __future__ import annotations

from typing import Union

from biplanar_rotator.errors import DimensionMismatch
from biplanar_rotator.models.buffers import ChromaPlaneBuffer
from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.rotation.luma import _rotate_cells, check_rotation_pair
from biplanar_rotator.rotation.mapping import QuarterTurnMapping


def chroma_byte_index(
    x: int,
    y: int,
    luma_width: int,
    luma_height: int,
    direction: Union[RotationDirection, str, int],
) -> int:
    """Destination byte offset of the pair at source byte offset ``x`` of chroma row ``y``.

    Offsets are for tightly packed planes (chroma row length in bytes equals the
    luma width). ``x`` must be even. For luma size ``W x H`` this evaluates to
    ``(x/2) * H + (H/2 - y - 1) * 2`` clockwise and
    ``((W - x - 2)/2) * H + y * 2`` counter-clockwise.
    """
    if x % 2:
        raise ValueError(f"chroma byte offset must be even (start of a pair), got {x}")
    if luma_width % 2 or luma_height % 2:
        raise DimensionMismatch(f"4:2:0 chroma needs even luma dimensions, got {luma_width}x{luma_height}")
    mapping = QuarterTurnMapping(luma_width // 2, luma_height // 2, direction)
    return 2 * mapping.linear_index(x // 2, y)


def rotate_chroma(
    source: ChromaPlaneBuffer,
    destination: ChromaPlaneBuffer,
    direction: Union[RotationDirection, str, int],
    *,
    max_workers: int = 1,
) -> ChromaPlaneBuffer:
    """Rotate an interleaved chroma plane by a quarter turn.

    Parameters
    ----------
    source:
        Chroma plane of ``W/2 x H/2`` pairs for a ``W x H`` image; never modified.
    destination:
        Pre-allocated chroma plane of ``H/2 x W/2`` pairs. Every pair is overwritten;
        addressing uses the destination's own stride.
    direction:
        Must match the direction used for the luma plane of the same image.
    max_workers:
        Number of destination row bands filled concurrently.

    Raises
    ------
    DimensionMismatch
        Destination not swapped, or either plane is not a pair plane.
    BufferTooSmall, BufferOverlap, BufferLocked
        Raised before any write.
    """
    direction = RotationDirection.parse(direction)
    for name, plane in (("source", source), ("destination", destination)):
        if not isinstance(plane, ChromaPlaneBuffer):
            raise DimensionMismatch(
                f"rotate_chroma {name} must be a ChromaPlaneBuffer of (U, V) pairs, got {type(plane).__name__}"
            )
    check_rotation_pair(source, destination)
    _rotate_cells(source, destination, direction, max_workers=max_workers)
    return destination
