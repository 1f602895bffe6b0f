"""Property self-check over a grid of image sizes.

For each size and each direction this runner builds a synthetic image with
unique sample values, rotates it and records whether the core properties hold:

- ``dims_swapped``   : destination reports ``height x width``
- ``luma_bijective`` : each destination luma cell is hit exactly once by the mapping
- ``pairs_intact``   : every (U, V) pair lands as an adjacent, unsplit pair
- ``matches_rot90``  : both planes agree with ``numpy.rot90``
- ``round_trip``     : rotating back, and four same-sense turns, restore the source
- ``padding_untouched`` : destination stride padding keeps its fill value

Results are returned as one pandas DataFrame row per (size, direction).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from biplanar_rotator.models.buffers import ChromaPlaneBuffer, ImageBuffer, PlaneBuffer
from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.rotation.image import rotate_image, rotate_image_into
from biplanar_rotator.rotation.mapping import QuarterTurnMapping


DEFAULT_SIZES: Tuple[Tuple[int, int], ...] = ((2, 2), (4, 2), (4, 6), (6, 4), (16, 10))

PROPERTY_COLUMNS: Tuple[str, ...] = (
    "dims_swapped",
    "luma_bijective",
    "pairs_intact",
    "matches_rot90",
    "round_trip",
    "padding_untouched",
)

# Padding sentinel written into destination rows before rotation.
_PAD = 0xA5


@dataclass(frozen=True)
class SelfCheckReport:
    """
    Outcome of :func:`run_self_check`.

    Attributes
    ----------
    table:
        One row per (width, height, direction) with a boolean column per property
        and an overall ``ok`` column.
    warnings:
        Non-fatal notes (e.g. skipped sizes).
    """

    table: pd.DataFrame
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return bool(len(self.table)) and bool(self.table["ok"].all())

    def failures(self) -> pd.DataFrame:
        return self.table.loc[~self.table["ok"].astype(bool)]


def synthetic_image(width: int, height: int, *, alignment: int = 1, pixel_format: str = "NV12") -> ImageBuffer:
    """Image whose luma samples and chroma pairs carry distinguishable values.

    Luma holds ``(y * width + x) % 251``; each chroma pair holds ``(2k % 256, (2k + 1) % 256)``
    for its pair index ``k``, so a split pair is detectable as a broken even/odd sequence.
    """
    y = (np.arange(width * height, dtype=np.int64).reshape(height, width) % 251).astype(np.uint8)
    n_pairs = (width // 2) * (height // 2)
    uv = (np.arange(2 * n_pairs, dtype=np.int64) % 256).astype(np.uint8)
    uv = uv.reshape(height // 2, width // 2, 2)
    return ImageBuffer.from_planes(y, uv, alignment=alignment, pixel_format=pixel_format)


def luma_coverage(width: int, height: int, direction: RotationDirection) -> np.ndarray:
    """Count how many source cells map onto each destination cell (all ones for a bijection)."""
    mapping = QuarterTurnMapping(width, height, direction)
    counts = np.zeros(mapping.dest_width * mapping.dest_height, dtype=np.int64)
    for y in range(height):
        for x in range(width):
            counts[mapping.linear_index(x, y)] += 1
    return counts.reshape(mapping.dest_height, mapping.dest_width)


def _pairs_intact(src_uv: np.ndarray, dst_uv: np.ndarray) -> bool:
    """Every destination pair is one source pair, in source byte order."""
    src_pairs = Counter(tuple(p) for p in src_uv.reshape(-1, 2).tolist())
    dst_pairs = Counter(tuple(p) for p in dst_uv.reshape(-1, 2).tolist())
    return src_pairs == dst_pairs


def _padded_destination(source: ImageBuffer, alignment: int) -> ImageBuffer:
    """Destination with one extra padding byte per row beyond ``alignment`` rounding."""
    w, h = source.height, source.width
    luma = PlaneBuffer.allocate(w, h, stride=w + alignment, fill=_PAD)
    chroma = ChromaPlaneBuffer.allocate(w // 2, h // 2, stride=w + alignment, fill=_PAD)
    return ImageBuffer(luma=luma, chroma=chroma, pixel_format=source.pixel_format)


def _padding_untouched(plane: PlaneBuffer) -> bool:
    grid = plane.data[: plane.required_size].reshape(int(plane.height), int(plane.stride))
    return bool(np.all(grid[:, plane.row_bytes :] == _PAD))


def check_size(
    width: int,
    height: int,
    direction: RotationDirection,
    *,
    alignment: int = 1,
    max_workers: int = 1,
) -> Dict[str, object]:
    """Run every property for one size and direction; return one table row."""
    k = -direction.quarter_turns  # numpy.rot90 counts counter-clockwise turns
    src = synthetic_image(width, height, alignment=alignment)
    src_y, src_uv = src.to_arrays()

    out = rotate_image(src, direction, alignment=alignment, max_workers=max_workers)
    out_y, out_uv = out.to_arrays()

    back = rotate_image(out, direction.inverse, alignment=alignment, max_workers=max_workers)
    four = src
    for _ in range(4):
        four = rotate_image(four, direction, alignment=alignment, max_workers=max_workers)

    padded = rotate_image_into(src, _padded_destination(src, alignment), direction, max_workers=max_workers)

    row: Dict[str, object] = {
        "width": int(width),
        "height": int(height),
        "direction": direction.value,
        "dims_swapped": out.width == height and out.height == width,
        "luma_bijective": bool(np.all(luma_coverage(width, height, direction) == 1)),
        "pairs_intact": _pairs_intact(src_uv, out_uv),
        "matches_rot90": bool(
            np.array_equal(out_y, np.rot90(src_y, k=k)) and np.array_equal(out_uv, np.rot90(src_uv, k=k))
        ),
        "round_trip": all(
            np.array_equal(a, b)
            for a, b in zip(back.to_arrays() + four.to_arrays(), (src_y, src_uv, src_y, src_uv))
        ),
        "padding_untouched": (
            _padding_untouched(padded.luma)
            and _padding_untouched(padded.chroma)
            and np.array_equal(padded.luma.to_array(), out_y)
            and np.array_equal(padded.chroma.to_array(), out_uv)
        ),
    }
    row["ok"] = all(bool(row[c]) for c in PROPERTY_COLUMNS)
    return row


def run_self_check(
    sizes: Optional[Iterable[Tuple[int, int]]] = None,
    *,
    directions: Sequence[RotationDirection] = (RotationDirection.CLOCKWISE, RotationDirection.COUNTER_CLOCKWISE),
    alignment: int = 1,
    max_workers: int = 1,
) -> SelfCheckReport:
    """Check all properties over ``sizes`` (luma ``(width, height)``) and ``directions``.

    Odd sizes cannot carry 4:2:0 chroma; they are skipped with a warning.
    """
    if sizes is None:
        sizes = DEFAULT_SIZES

    rows: List[Dict[str, object]] = []
    warnings: List[str] = []
    for w, h in sizes:
        w, h = int(w), int(h)
        if w <= 0 or h <= 0 or w % 2 or h % 2:
            warnings.append(f"Skipped {w}x{h}: 4:2:0 needs positive even dimensions")
            continue
        for d in directions:
            rows.append(check_size(w, h, RotationDirection.parse(d), alignment=alignment, max_workers=max_workers))

    columns = ["width", "height", "direction", *PROPERTY_COLUMNS, "ok"]
    table = pd.DataFrame(rows, columns=columns)
    if table.empty:
        warnings.append("No sizes were checked")
    return SelfCheckReport(table=table, warnings=tuple(warnings))
