"""Validation utilities.

This package contains *non-interactive* tooling for checking the rotation
properties on synthetic images.

Design goals
------------
1) Keep checks independent of any caller pipeline (pure in-memory buffers).
2) Make runs reproducible and scriptable (CLI entry point in ``scripts``).
3) Report results as a table that can be exported to CSV.
"""

from .self_check import SelfCheckReport, check_size, luma_coverage, run_self_check, synthetic_image

__all__ = [
    "SelfCheckReport",
    "check_size",
    "luma_coverage",
    "run_self_check",
    "synthetic_image",
]
