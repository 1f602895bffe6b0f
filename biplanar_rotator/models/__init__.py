from .buffers import ChromaPlaneBuffer, ImageBuffer, PlaneBuffer, aligned_stride
from .direction import RotationDirection
from .profile import RotationProfile

__all__ = [
    "ChromaPlaneBuffer",
    "ImageBuffer",
    "PlaneBuffer",
    "aligned_stride",
    "RotationDirection",
    "RotationProfile",
]
