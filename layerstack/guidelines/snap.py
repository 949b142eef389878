"""Snapping of an in-progress rectangle corner.

While the user drags out a rectangle from ``start``, each axis of the
pointer position is snapped independently:

1. to the previous rectangle's width/height, when the current extent is
   within the proximity threshold of it (the drag direction is kept);
2. to any guideline within the threshold, evaluated afterwards so a
   guideline overrides the size snap (last match wins).
"""

from __future__ import annotations

from typing import Iterable

from layerstack.config import SNAP_PROXIMITY
from layerstack.geometry.rect import Point, within
from layerstack.guidelines.engine import GuidelineSet


def snap_coordinate(
    proposed: float,
    start: float | None,
    guidelines: Iterable[float],
    last_size: float | None,
    show_guidelines: bool,
    proximity: float = SNAP_PROXIMITY,
) -> float:
    """Snap one pointer coordinate.

    Parameters
    ----------
    proposed:
        Raw pointer coordinate on this axis.
    start:
        Coordinate where the drag started, or ``None`` when no drag is active.
    guidelines:
        Guideline values for this axis (vertical for x, horizontal for y).
    last_size:
        Width (x) or height (y) of the previously committed rectangle.
    show_guidelines:
        Whether guideline snapping is enabled.
    """
    value = proposed

    if last_size is not None and start is not None:
        current = abs(start - value)
        if within(current, last_size, proximity):
            value = start - last_size if start > value else start + last_size

    if show_guidelines:
        for guideline in guidelines:
            if within(value, guideline, proximity):
                value = guideline

    return value


def snap_point(
    point: Point,
    start: Point | None,
    guidelines: GuidelineSet,
    last_size: tuple[float, float] | None,
    show_guidelines: bool,
    proximity: float = SNAP_PROXIMITY,
) -> Point:
    """Snap both axes of *point*; x uses vertical guides, y horizontal ones."""
    last_width = last_size[0] if last_size is not None else None
    last_height = last_size[1] if last_size is not None else None

    x = snap_coordinate(
        point.x,
        start.x if start is not None else None,
        guidelines.vertical,
        last_width,
        show_guidelines,
        proximity,
    )
    y = snap_coordinate(
        point.y,
        start.y if start is not None else None,
        guidelines.horizontal,
        last_height,
        show_guidelines,
        proximity,
    )
    return Point(x=x, y=y)
