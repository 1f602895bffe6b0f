"""Strided plane and image buffers for YUV 4:2:0 semi-planar data.

A plane is a rectangle of fixed-size samples stored row by row in a flat
``uint8`` numpy array. Rows may be padded: ``stride`` is the byte distance
between the starts of two consecutive rows and may exceed the bytes actually
used by the samples of a row.

Classes
-------
PlaneBuffer
    Luma plane, one byte per sample.
ChromaPlaneBuffer
    Chroma plane, one interleaved (U, V) byte pair per sample, half luma resolution.
ImageBuffer
    One luma plane plus one chroma plane sharing a logical width x height.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

import numpy as np

from biplanar_rotator.errors import BufferTooSmall, DimensionMismatch


PIXEL_FORMATS: Tuple[str, str] = ("NV12", "NV21")

# Neutral chroma value (no colour) for 8-bit video.
CHROMA_NEUTRAL = 128


def aligned_stride(row_bytes: int, alignment: int = 1) -> int:
    """Smallest multiple of ``alignment`` that holds ``row_bytes``.

    Examples
    --------
    >>> aligned_stride(6, 4)
    8
    >>> aligned_stride(8, 4)
    8
    """
    alignment = int(alignment)
    if alignment < 1:
        raise ValueError(f"alignment must be >= 1, got {alignment}")
    row_bytes = int(row_bytes)
    return ((row_bytes + alignment - 1) // alignment) * alignment


@dataclass(frozen=True, eq=False)
class PlaneBuffer:
    """
    Rectangular grid of samples over caller-owned byte storage.

    Attributes
    ----------
    width:
        Samples per row.
    height:
        Number of rows.
    stride:
        Bytes per row including padding, ``>= width * bytes_per_sample``.
    data:
        Flat contiguous ``uint8`` array of at least ``stride * height`` bytes.

    Notes
    - The dataclass is frozen but ``data`` is a mutable array: rotation writes
      into the destination's storage in place.
    - Padding bytes at the end of each row are never read or written by the rotators.
    """

    BYTES_PER_SAMPLE: ClassVar[int] = 1

    width: int
    height: int
    stride: int
    data: np.ndarray

    @property
    def bytes_per_sample(self) -> int:
        return self.BYTES_PER_SAMPLE

    @property
    def row_bytes(self) -> int:
        return int(self.width) * self.bytes_per_sample

    @property
    def required_size(self) -> int:
        return int(self.stride) * int(self.height)

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) in samples."""
        return int(self.height), int(self.width)

    def check(self) -> None:
        """Raise if the declared geometry cannot be backed by ``data``."""
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise DimensionMismatch(
                f"{type(self).__name__}: width and height must be > 0, got {self.width}x{self.height}"
            )
        data = self.data
        if not isinstance(data, np.ndarray) or data.ndim != 1 or data.dtype != np.uint8:
            raise ValueError(
                f"{type(self).__name__}: data must be a 1D uint8 array, "
                f"got {type(data).__name__} {getattr(data, 'dtype', None)} {getattr(data, 'shape', None)}"
            )
        if not data.flags.c_contiguous:
            raise ValueError(f"{type(self).__name__}: data must be contiguous")
        if int(self.stride) < self.row_bytes:
            raise BufferTooSmall(
                f"{type(self).__name__}: stride={self.stride} < row bytes={self.row_bytes}"
            )
        if data.size < self.required_size:
            raise BufferTooSmall(
                f"{type(self).__name__}: data size={data.size}, need stride*height={self.required_size}"
            )

    def rows(self) -> np.ndarray:
        """2D ``(height, row_bytes)`` view of the storage without row padding."""
        grid = self.data[: self.required_size].reshape((int(self.height), int(self.stride)))
        return grid[:, : self.row_bytes]

    def samples(self) -> np.ndarray:
        """Sample-grid view, ``(height, width)`` for luma."""
        return self.rows()

    def to_array(self) -> np.ndarray:
        """Compact copy of the samples (padding dropped)."""
        return self.samples().copy()

    def shares_memory(self, other: "PlaneBuffer") -> bool:
        # Only the stride * height prefix is ever addressed; bytes past it are free.
        return bool(np.may_share_memory(self.data[: self.required_size], other.data[: other.required_size]))

    @classmethod
    def allocate(
        cls,
        width: int,
        height: int,
        *,
        stride: Optional[int] = None,
        alignment: int = 1,
        fill: int = 0,
    ):
        """Allocate a plane; ``stride`` defaults to the row size rounded up to ``alignment``."""
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise DimensionMismatch(f"{cls.__name__}: width and height must be > 0, got {width}x{height}")
        if stride is None:
            stride = aligned_stride(width * cls.BYTES_PER_SAMPLE, alignment)
        data = np.full(int(stride) * height, fill, dtype=np.uint8)
        plane = cls(width=width, height=height, stride=int(stride), data=data)
        plane.check()
        return plane

    @classmethod
    def from_array(cls, array: np.ndarray, *, stride: Optional[int] = None, alignment: int = 1):
        """Copy a sample array into a newly allocated plane."""
        a = np.asarray(array)
        if a.ndim != 2:
            raise ValueError(f"{cls.__name__}: expected 2D (height, width) array, got shape {a.shape}")
        height, width = a.shape
        plane = cls.allocate(width, height, stride=stride, alignment=alignment)
        plane.samples()[...] = a
        return plane


@dataclass(frozen=True, eq=False)
class ChromaPlaneBuffer(PlaneBuffer):
    """
    Interleaved chroma plane: each sample is two adjacent bytes.

    ``width`` and ``height`` count pairs, so for a ``W x H`` image they are
    ``W // 2`` and ``H // 2``. The byte order inside a pair (U then V for NV12,
    V then U for NV21) is opaque to the rotators.
    """

    BYTES_PER_SAMPLE: ClassVar[int] = 2

    def samples(self) -> np.ndarray:
        """``(height, width, 2)`` view; the last axis is the byte pair."""
        return self.rows().reshape((int(self.height), int(self.width), 2))

    @classmethod
    def for_luma(
        cls,
        luma_width: int,
        luma_height: int,
        *,
        alignment: int = 1,
        fill: int = CHROMA_NEUTRAL,
    ) -> "ChromaPlaneBuffer":
        """Allocate the 4:2:0 chroma plane matching a luma plane size."""
        luma_width = int(luma_width)
        luma_height = int(luma_height)
        if luma_width % 2 or luma_height % 2:
            raise DimensionMismatch(
                f"4:2:0 chroma needs even luma dimensions, got {luma_width}x{luma_height}"
            )
        return cls.allocate(luma_width // 2, luma_height // 2, alignment=alignment, fill=fill)

    @classmethod
    def from_array(cls, array: np.ndarray, *, stride: Optional[int] = None, alignment: int = 1):
        a = np.asarray(array)
        if a.ndim != 3 or a.shape[2] != 2:
            raise ValueError(f"{cls.__name__}: expected (height, width, 2) array, got shape {a.shape}")
        height, width = a.shape[:2]
        plane = cls.allocate(width, height, stride=stride, alignment=alignment)
        plane.samples()[...] = a
        return plane


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """
    Semi-planar 4:2:0 image: full-resolution luma plus half-resolution chroma pairs.

    ``width`` and ``height`` are always expressed in luma samples.
    """

    luma: PlaneBuffer
    chroma: ChromaPlaneBuffer
    pixel_format: str = "NV12"

    @property
    def width(self) -> int:
        return int(self.luma.width)

    @property
    def height(self) -> int:
        return int(self.luma.height)

    def check(self) -> None:
        """Validate both planes and the 4:2:0 relation between them."""
        if self.pixel_format not in PIXEL_FORMATS:
            raise ValueError(f"pixel_format must be one of {PIXEL_FORMATS}, got {self.pixel_format!r}")
        if not isinstance(self.chroma, ChromaPlaneBuffer):
            raise TypeError(f"chroma must be a ChromaPlaneBuffer, got {type(self.chroma).__name__}")
        self.luma.check()
        self.chroma.check()
        w, h = self.width, self.height
        if w % 2 or h % 2:
            raise DimensionMismatch(f"4:2:0 image needs even luma dimensions, got {w}x{h}")
        if int(self.chroma.width) != w // 2 or int(self.chroma.height) != h // 2:
            raise DimensionMismatch(
                f"chroma plane must be {w // 2}x{h // 2} pairs for luma {w}x{h}, "
                f"got {self.chroma.width}x{self.chroma.height}"
            )

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Compact copies ``(Y, UV)`` shaped ``(H, W)`` and ``(H/2, W/2, 2)``."""
        return self.luma.to_array(), self.chroma.to_array()

    @classmethod
    def allocate(
        cls,
        width: int,
        height: int,
        *,
        alignment: int = 1,
        pixel_format: str = "NV12",
    ) -> "ImageBuffer":
        """Allocate a black image (luma 0, neutral chroma)."""
        chroma = ChromaPlaneBuffer.for_luma(width, height, alignment=alignment)
        luma = PlaneBuffer.allocate(width, height, alignment=alignment)
        img = cls(luma=luma, chroma=chroma, pixel_format=pixel_format)
        img.check()
        return img

    @classmethod
    def from_planes(
        cls,
        y: np.ndarray,
        uv: np.ndarray,
        *,
        alignment: int = 1,
        pixel_format: str = "NV12",
    ) -> "ImageBuffer":
        """Build an image by copying a ``(H, W)`` luma array and a ``(H/2, W/2, 2)`` chroma array."""
        img = cls(
            luma=PlaneBuffer.from_array(y, alignment=alignment),
            chroma=ChromaPlaneBuffer.from_array(uv, alignment=alignment),
            pixel_format=pixel_format,
        )
        img.check()
        return img
