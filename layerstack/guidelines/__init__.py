"""Guideline engine — alignment guides and pointer snapping."""

from layerstack.guidelines.engine import GuidelineSet, compute_guidelines
from layerstack.guidelines.snap import snap_coordinate, snap_point

__all__ = [
    "GuidelineSet",
    "compute_guidelines",
    "snap_coordinate",
    "snap_point",
]
