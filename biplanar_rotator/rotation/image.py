"""Whole-image rotation: luma and chroma planes turned together.

Functions
---------
rotate_image
    Allocate a swapped destination and rotate both planes into it.
rotate_image_into
    Rotate into a caller-allocated destination image.
rotate_quarter_turns
    Any number of quarter turns, composed from single rotations.
rotate_from_profile
    :func:`rotate_image` driven by a :class:`~biplanar_rotator.models.profile.RotationProfile`.
"""

from __future__ import annotations

from typing import Optional, Union

from biplanar_rotator.errors import BufferOverlap, DimensionMismatch
from biplanar_rotator.models.buffers import ChromaPlaneBuffer, ImageBuffer, PlaneBuffer
from biplanar_rotator.models.direction import RotationDirection
from biplanar_rotator.models.profile import RotationProfile
from biplanar_rotator.rotation.chroma import rotate_chroma
from biplanar_rotator.rotation.luma import check_rotation_pair, rotate_luma


def allocate_rotated(
    source: ImageBuffer,
    *,
    alignment: int = 1,
    pixel_format: Optional[str] = None,
) -> ImageBuffer:
    """Allocate the destination for a quarter turn of ``source`` (dimensions swapped)."""
    source.check()
    return ImageBuffer.allocate(
        source.height,
        source.width,
        alignment=alignment,
        pixel_format=pixel_format or source.pixel_format,
    )


def rotate_image_into(
    source: ImageBuffer,
    destination: ImageBuffer,
    direction: Union[RotationDirection, str, int],
    *,
    max_workers: int = 1,
) -> ImageBuffer:
    """Rotate both planes of ``source`` into ``destination``.

    All preconditions of both planes are checked before the first write, so a
    failure on the chroma plane never leaves a rotated luma plane behind.
    """
    direction = RotationDirection.parse(direction)
    source.check()
    destination.check()
    if destination.width != source.height or destination.height != source.width:
        raise DimensionMismatch(
            f"destination image must be {source.height}x{source.width} for source "
            f"{source.width}x{source.height}, got {destination.width}x{destination.height}"
        )
    # Cross-plane aliasing (e.g. destination luma over source chroma) is rejected too.
    for src_plane in (source.luma, source.chroma):
        for dst_plane in (destination.luma, destination.chroma):
            if src_plane.shares_memory(dst_plane):
                raise BufferOverlap("source and destination images share memory")
    check_rotation_pair(source.luma, destination.luma)
    check_rotation_pair(source.chroma, destination.chroma)

    rotate_luma(source.luma, destination.luma, direction, max_workers=max_workers)
    rotate_chroma(source.chroma, destination.chroma, direction, max_workers=max_workers)
    return destination


def rotate_image(
    source: ImageBuffer,
    direction: Union[RotationDirection, str, int],
    *,
    alignment: int = 1,
    max_workers: int = 1,
) -> ImageBuffer:
    """Return a new image holding ``source`` turned 90 degrees.

    The destination is ``height x width`` (luma units) with a chroma plane of
    ``height/2 x width/2`` pairs, rows padded to ``alignment`` bytes. On any
    precondition failure an exception is raised and no buffer is returned.

    Examples
    --------
    >>> import numpy as np
    >>> img = ImageBuffer.from_planes(np.arange(8, dtype=np.uint8).reshape(2, 4),
    ...                               np.zeros((1, 2, 2), dtype=np.uint8))
    >>> out = rotate_image(img, "cw")
    >>> (out.width, out.height)
    (2, 4)
    """
    direction = RotationDirection.parse(direction)
    destination = allocate_rotated(source, alignment=alignment)
    return rotate_image_into(source, destination, direction, max_workers=max_workers)


def rotate_quarter_turns(
    source: ImageBuffer,
    turns: int,
    *,
    alignment: int = 1,
    max_workers: int = 1,
) -> ImageBuffer:
    """Rotate by ``turns`` quarter turns (clockwise positive); always returns a new image."""
    turns = int(turns)
    source.check()
    n = turns % 4
    if n == 0:
        luma = PlaneBuffer.from_array(source.luma.samples(), alignment=alignment)
        chroma = ChromaPlaneBuffer.from_array(source.chroma.samples(), alignment=alignment)
        return ImageBuffer(luma=luma, chroma=chroma, pixel_format=source.pixel_format)

    # Three clockwise quarter turns are one counter-clockwise turn.
    if n == 3:
        return rotate_image(
            source, RotationDirection.COUNTER_CLOCKWISE, alignment=alignment, max_workers=max_workers
        )
    out = source
    for _ in range(n):
        out = rotate_image(out, RotationDirection.CLOCKWISE, alignment=alignment, max_workers=max_workers)
    return out


def rotate_from_profile(source: ImageBuffer, profile: RotationProfile) -> ImageBuffer:
    """Thin wrapper: rotate ``source`` with every setting taken from ``profile``.

    ``profile.pixel_format`` states the layout the caller expects; a source in
    the other layout is rejected rather than relabelled.
    """
    source.check()
    if profile.pixel_format != source.pixel_format:
        raise ValueError(
            f"profile expects {profile.pixel_format} but source is {source.pixel_format}; "
            "rotation never reorders (U, V) pairs"
        )
    destination = allocate_rotated(source, alignment=profile.alignment)
    return rotate_image_into(source, destination, profile.direction, max_workers=profile.max_workers)
