"""Rotation profile -- bundles every parameter that affects a rotation run.

A RotationProfile groups the rotation settings into one frozen dataclass.
It can be:

- Constructed directly with defaults
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict (or a JSON file) for provenance
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Union

from biplanar_rotator.models.buffers import PIXEL_FORMATS
from biplanar_rotator.models.direction import RotationDirection


@dataclass(frozen=True)
class RotationProfile:
    """Frozen configuration for :func:`~biplanar_rotator.rotation.image.rotate_from_profile`.

    Fields
    ------
    direction : RotationDirection
        Rotation sense applied to both planes.
    alignment : int
        Row alignment in bytes for the allocated destination planes (1 = tightly packed).
    max_workers : int
        Number of row bands rotated concurrently (1 = sequential).
    pixel_format : str
        "NV12" or "NV21"; the layout the source must already be in. Rotation never
        reorders pairs, so a source in the other layout is rejected.
    """

    direction: RotationDirection = RotationDirection.CLOCKWISE
    alignment: int = 1
    max_workers: int = 1
    pixel_format: str = "NV12"

    def __post_init__(self) -> None:
        # Accept aliases such as "cw" or 90 at construction time
        object.__setattr__(self, "direction", RotationDirection.parse(self.direction))
        if int(self.alignment) < 1:
            raise ValueError(f"alignment must be >= 1, got {self.alignment}")
        if int(self.max_workers) < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.pixel_format not in PIXEL_FORMATS:
            raise ValueError(f"pixel_format must be one of {PIXEL_FORMATS}, got {self.pixel_format!r}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (direction becomes its value string)."""
        d = asdict(self)
        d["direction"] = self.direction.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> RotationProfile:
        """Reconstruct from a dict (e.g. loaded from JSON); unknown keys are rejected."""
        d = dict(d)  # shallow copy
        unknown = sorted(set(d) - set(cls.__dataclass_fields__))
        if unknown:
            raise ValueError(f"Unknown RotationProfile keys: {unknown}")
        return cls(**d)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> RotationProfile:
        p = Path(path)
        with p.open("r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))
