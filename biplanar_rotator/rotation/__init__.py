"""Quarter-turn rotation of semi-planar 4:2:0 images.

Design principle:
  - One coordinate mapping (:class:`QuarterTurnMapping`) serves both planes:
    luma cells are bytes, chroma cells are (U, V) pairs on the half-resolution grid.
  - Every precondition is checked before the first destination byte is written.

Accordingly, a failed call leaves the destination exactly as it was.
"""

from .mapping import QuarterTurnMapping
from .luma import check_rotation_pair, rotate_luma
from .chroma import chroma_byte_index, rotate_chroma
from .image import (
    allocate_rotated,
    rotate_from_profile,
    rotate_image,
    rotate_image_into,
    rotate_quarter_turns,
)
from .partition import partition_rows

__all__ = [
    "QuarterTurnMapping",
    "check_rotation_pair",
    "rotate_luma",
    "chroma_byte_index",
    "rotate_chroma",
    "allocate_rotated",
    "rotate_from_profile",
    "rotate_image",
    "rotate_image_into",
    "rotate_quarter_turns",
    "partition_rows",
]
