r"""Quarter-turn coordinate mapping on a sample grid.

The mapping is defined on an abstract ``width x height`` grid of cells and is
shared by both planes: a luma cell is one byte, a chroma cell is one (U, V)
pair on the half-resolution grid. Nothing here touches buffers.

For a source cell :math:`(x, y)` with :math:`0 \le x < W`, :math:`0 \le y < H`:

- clockwise:          ``(x, y) -> (H - 1 - y, x)``
- counter-clockwise:  ``(x, y) -> (y, W - 1 - x)``

The destination grid is ``H x W`` (width and height swapped).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from biplanar_rotator.errors import DimensionMismatch
from biplanar_rotator.models.direction import RotationDirection


@dataclass(frozen=True)
class QuarterTurnMapping:
    """Bijective map from a ``width x height`` source grid to its rotated ``height x width`` grid."""

    width: int
    height: int
    direction: RotationDirection

    def __post_init__(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise DimensionMismatch(f"grid must be non-empty, got {self.width}x{self.height}")
        object.__setattr__(self, "direction", RotationDirection.parse(self.direction))

    @property
    def dest_width(self) -> int:
        return int(self.height)

    @property
    def dest_height(self) -> int:
        return int(self.width)

    @property
    def clockwise(self) -> bool:
        return self.direction is RotationDirection.CLOCKWISE

    def _check_source(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"source cell ({x}, {y}) outside {self.width}x{self.height}")

    def map(self, x: int, y: int) -> Tuple[int, int]:
        """Destination ``(x, y)`` of source cell ``(x, y)``."""
        self._check_source(x, y)
        if self.clockwise:
            return self.height - 1 - y, x
        return y, self.width - 1 - x

    def inverse(self, dest_x: int, dest_y: int) -> Tuple[int, int]:
        """Source ``(x, y)`` landing on destination cell ``(dest_x, dest_y)``."""
        if not (0 <= dest_x < self.dest_width and 0 <= dest_y < self.dest_height):
            raise IndexError(
                f"destination cell ({dest_x}, {dest_y}) outside {self.dest_width}x{self.dest_height}"
            )
        if self.clockwise:
            return dest_y, self.height - 1 - dest_x
        return self.width - 1 - dest_y, dest_x

    def linear_index(self, x: int, y: int, row_length: Optional[int] = None) -> int:
        """Destination linear cell index of source ``(x, y)``.

        ``row_length`` is the destination row length in cells (stride / bytes per
        sample); it defaults to the packed ``dest_width`` and may not be shorter.
        With the packed default this reduces to ``x * H + (H - y - 1)`` clockwise
        and ``(W - x - 1) * H + y`` counter-clockwise.
        """
        if row_length is None:
            row_length = self.dest_width
        row_length = int(row_length)
        if row_length < self.dest_width:
            raise DimensionMismatch(
                f"destination row length {row_length} shorter than destination width {self.dest_width}"
            )
        dx, dy = self.map(x, y)
        return dy * row_length + dx

    def source_grid(self, rows: Optional[range] = None) -> Tuple[np.ndarray, np.ndarray]:
        """Gather indices for a band of destination rows.

        Returns ``(src_y, src_x)`` integer arrays of shape ``(len(rows), dest_width)``
        such that ``dest[r, c] = src[src_y[i, c], src_x[i, c]]`` for ``r = rows[i]``.
        """
        if rows is None:
            rows = range(self.dest_height)
        if rows.step != 1 or rows.start < 0 or rows.stop > self.dest_height or rows.start > rows.stop:
            raise IndexError(f"rows {rows} not a contiguous band of 0..{self.dest_height}")

        dest_y = np.arange(rows.start, rows.stop, dtype=np.intp)[:, None]
        dest_x = np.arange(self.dest_width, dtype=np.intp)[None, :]
        if self.clockwise:
            src_x = np.broadcast_to(dest_y, (len(rows), self.dest_width))
            src_y = np.broadcast_to(self.height - 1 - dest_x, (len(rows), self.dest_width))
        else:
            src_x = np.broadcast_to(self.width - 1 - dest_y, (len(rows), self.dest_width))
            src_y = np.broadcast_to(dest_x, (len(rows), self.dest_width))
        return src_y, src_x
