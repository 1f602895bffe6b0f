"""Side-by-side preview of a source image and its rotation.

Each row of the figure shows one image: the luma plane and the two bytes of the
chroma pairs (first and second byte, i.e. U and V for NV12) as separate panels.
A ``matplotlib.figure.Figure`` is built directly so no GUI backend is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from matplotlib.figure import Figure

from biplanar_rotator.models.buffers import ImageBuffer


def _chroma_labels(pixel_format: str) -> Sequence[str]:
    return ("V", "U") if pixel_format == "NV21" else ("U", "V")


def plot_rotation_preview(
    source: ImageBuffer,
    rotated: ImageBuffer,
    *,
    title: Optional[str] = None,
    figsize: Sequence[float] = (9.0, 6.0),
) -> Figure:
    """Return a 2x3 figure: rows (source, rotated), columns (Y, first chroma byte, second chroma byte)."""
    fig = Figure(figsize=tuple(figsize), layout="constrained")
    axes = fig.subplots(2, 3)

    for row, (label, img) in enumerate((("source", source), ("rotated", rotated))):
        y, uv = img.to_arrays()
        c0, c1 = _chroma_labels(img.pixel_format)
        panels = (
            (f"{label} Y {img.width}x{img.height}", y),
            (f"{label} {c0}", uv[:, :, 0]),
            (f"{label} {c1}", uv[:, :, 1]),
        )
        for col, (name, arr) in enumerate(panels):
            ax = axes[row, col]
            ax.imshow(arr, cmap="gray", vmin=0, vmax=255, interpolation="nearest")
            ax.set_title(name, fontsize=9)
            ax.set_xticks([])
            ax.set_yticks([])

    if title:
        fig.suptitle(title)
    return fig


def save_rotation_preview(
    source: ImageBuffer,
    rotated: ImageBuffer,
    path: Union[str, Path],
    *,
    title: Optional[str] = None,
    dpi: int = 100,
) -> Path:
    """Render :func:`plot_rotation_preview` to an image file and return its path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_rotation_preview(source, rotated, title=title)
    fig.savefig(p, dpi=int(dpi))
    return p
