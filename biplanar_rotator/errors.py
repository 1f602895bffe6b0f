"""Error taxonomy for buffer validation and rotation.

All errors derive from :class:`RotationError`, itself a ``ValueError``, so callers
that already guard buffer handling with ``except ValueError`` keep working.
These are contract violations: nothing is retried and nothing is written when
one is raised.
"""

from __future__ import annotations


class RotationError(ValueError):
    """Base class for every rotation precondition failure."""


class DimensionMismatch(RotationError):
    """Plane dimensions are inconsistent with the requested operation.

    Raised when a destination is not the width/height swap of its source, when
    luma dimensions are odd (4:2:0 undefined), or when a chroma plane is not
    half the luma plane on both axes.
    """


class BufferTooSmall(RotationError):
    """Declared stride or backing storage cannot hold the plane's samples."""


class BufferOverlap(RotationError):
    """Source and destination planes share backing memory."""


class BufferLocked(RotationError):
    """A plane held for reading was requested for writing."""
