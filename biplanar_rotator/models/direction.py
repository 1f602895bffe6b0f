from __future__ import annotations

from enum import Enum
from typing import Union


class RotationDirection(Enum):
    """Sense of a 90 degree rotation, as seen on the displayed image."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"

    @property
    def inverse(self) -> "RotationDirection":
        if self is RotationDirection.CLOCKWISE:
            return RotationDirection.COUNTER_CLOCKWISE
        return RotationDirection.CLOCKWISE

    @property
    def quarter_turns(self) -> int:
        """Signed quarter turns, clockwise positive."""
        return 1 if self is RotationDirection.CLOCKWISE else -1

    @classmethod
    def parse(cls, value: Union["RotationDirection", str, int]) -> "RotationDirection":
        """Accept an enum member, a name/alias string or a signed angle in degrees.

        Examples
        --------
        >>> RotationDirection.parse("cw")
        <RotationDirection.CLOCKWISE: 'clockwise'>
        >>> RotationDirection.parse(-90)
        <RotationDirection.COUNTER_CLOCKWISE: 'counter_clockwise'>
        """
        if isinstance(value, RotationDirection):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Ambiguous rotation direction: {value!r}")
        if isinstance(value, int):
            a = value % 360
            if a == 90:
                return cls.CLOCKWISE
            if a == 270:
                return cls.COUNTER_CLOCKWISE
            raise ValueError(f"Angle must be +/-90 or 270 degrees, got {value}")

        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {
            "cw": cls.CLOCKWISE,
            "clockwise": cls.CLOCKWISE,
            "ccw": cls.COUNTER_CLOCKWISE,
            "counterclockwise": cls.COUNTER_CLOCKWISE,
            "counter_clockwise": cls.COUNTER_CLOCKWISE,
        }
        if key not in aliases:
            raise ValueError(f"Unknown rotation direction: {value!r}")
        return aliases[key]
