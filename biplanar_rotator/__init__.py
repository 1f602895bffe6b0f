"""Bi-planar Rotator -- quarter-turn rotation of YUV 4:2:0 semi-planar image buffers.

Targets NV12/NV21 style layouts: one full-resolution luma plane and one
half-resolution chroma plane holding interleaved two-byte (U, V) pairs.

This package provides tools for:
- Describing strided planes and images backed by numpy byte storage
- Rotating luma and chroma planes by 90 degrees in either direction
- Allocating correctly swapped and aligned destination buffers
- Self-checking the rotation properties over a grid of sizes
- Previewing source and rotated planes with matplotlib

Key principles:
- Validate first: every precondition is checked before the first write
- Pairs stay pairs: a chroma (U, V) sample is never split
- Destination addressing always uses the destination's own stride

Main subpackages:
- models: Buffers, rotation direction, rotation profile
- rotation: Coordinate mapping, plane rotators, orchestration
- validation: Property self-check runner
- presentation: Matplotlib previews
"""

__all__ = []
