"""
Command-line self-check of the quarter-turn rotation.

Runs :func:`~biplanar_rotator.validation.self_check.run_self_check` on synthetic
images and prints a compact summary. Optionally exports the result table to CSV
and renders a preview of the first checked size.

Examples
--------
python -m biplanar_rotator.scripts.check_rotation --sizes 4x2,640x480 --alignment 64
python -m biplanar_rotator.scripts.check_rotation --profile profile.json --csv out/check.csv
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.models.profile import RotationProfile
from biplanar_rotator.validation.self_check import (
    DEFAULT_SIZES,
    PROPERTY_COLUMNS,
    run_self_check,
    synthetic_image,
)


def _parse_sizes_csv(text: Optional[str]) -> List[Tuple[int, int]]:
    """Parse ``"4x2,640x480"`` into ``[(4, 2), (640, 480)]``."""
    if not text:
        return list(DEFAULT_SIZES)
    sizes: List[Tuple[int, int]] = []
    for tok in text.split(","):
        tok = tok.strip().lower()
        if not tok:
            continue
        parts = tok.split("x")
        if len(parts) != 2:
            raise ValueError(f"Size must look like WxH, got {tok!r}")
        sizes.append((int(parts[0]), int(parts[1])))
    if not sizes:
        raise ValueError("No sizes provided.")
    return sizes


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Self-check 90 degree rotation of NV12/NV21 buffers.")
    ap.add_argument("--sizes", default=None, help="Comma-separated luma sizes WxH (default: built-in grid).")
    ap.add_argument(
        "--direction",
        default="both",
        help="cw, ccw or both (default: both). Ignored when --profile is given.",
    )
    ap.add_argument("--alignment", type=int, default=1, help="Destination row alignment in bytes.")
    ap.add_argument("--workers", type=int, default=1, help="Row bands rotated concurrently.")
    ap.add_argument("--profile", type=Path, default=None, help="RotationProfile JSON file.")
    ap.add_argument("--csv", type=Path, default=None, help="Write the result table to this CSV file.")
    ap.add_argument("--preview", type=Path, default=None, help="Write a PNG preview of the first size.")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = build_parser().parse_args(argv)

    sizes = _parse_sizes_csv(ns.sizes)

    if ns.profile is not None:
        profile = RotationProfile.from_json(ns.profile)
        print(f"[info] loaded profile {ns.profile}: {profile.to_dict()}")
        directions = [profile.direction]
    else:
        profile = RotationProfile(alignment=ns.alignment, max_workers=ns.workers)
        if str(ns.direction).lower() == "both":
            directions = [RotationDirection.CLOCKWISE, RotationDirection.COUNTER_CLOCKWISE]
        else:
            directions = [RotationDirection.parse(ns.direction)]

    report = run_self_check(
        sizes,
        directions=directions,
        alignment=profile.alignment,
        max_workers=profile.max_workers,
    )

    for msg in report.warnings:
        print(f"[warn] {msg}")

    for row in report.table.itertuples(index=False):
        status = "ok" if row.ok else "fail"
        print(f"[{status}] {row.width}x{row.height} {row.direction}")
    for row in report.failures().itertuples(index=False):
        bad = [c for c in PROPERTY_COLUMNS if not getattr(row, c)]
        print(f"  {row.width}x{row.height} {row.direction}: failed {', '.join(bad)}")

    if ns.csv is not None:
        ns.csv.parent.mkdir(parents=True, exist_ok=True)
        report.table.to_csv(ns.csv, index=False)
        print(f"[info] wrote: {ns.csv}")

    if ns.preview is not None:
        # Late import keeps matplotlib off the path of plain checks.
        from biplanar_rotator.presentation.preview import save_rotation_preview
        from biplanar_rotator.rotation.image import rotate_from_profile

        checked = [(w, h) for w, h in sizes if w > 0 and h > 0 and w % 2 == 0 and h % 2 == 0]
        if not checked:
            print("[warn] no valid size to preview")
        else:
            w, h = checked[0]
            src = synthetic_image(w, h, pixel_format=profile.pixel_format)
            out = rotate_from_profile(src, replace(profile, direction=directions[0]))
            path = save_rotation_preview(src, out, ns.preview, title=f"{w}x{h} {directions[0].value}")
            print(f"[info] wrote: {path}")

    n = int(len(report.table))
    n_ok = int(report.table["ok"].sum()) if n else 0
    print(f"[info] {n_ok}/{n} checks passed")
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
