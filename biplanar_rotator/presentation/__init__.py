"""Matplotlib previews of source and rotated planes."""

from .preview import plot_rotation_preview, save_rotation_preview

__all__ = ["plot_rotation_preview", "save_rotation_preview"]
