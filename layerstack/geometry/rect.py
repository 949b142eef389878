"""Axis-aligned rectangle helpers on the 2D layer plane.

Pure Python arithmetic; the y axis grows downwards, so ``(x, y)`` is the
top-left corner of a normalized rectangle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from layerstack.config import MIN_COMPONENT_SIZE


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Rectangle with its origin in the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)


def normalize_rect(start: Point, end: Point) -> Rect:
    """Build a rectangle from two opposite corners.

    A negative width or height (dragging left or up) moves the origin to the
    top-left corner and flips the sign of that dimension.
    """
    x, y = start.x, start.y
    width = end.x - start.x
    height = end.y - start.y
    if width < 0:
        x += width
        width = -width
    if height < 0:
        y += height
        height = -height
    return Rect(x=x, y=y, width=width, height=height)


def is_degenerate(rect: Rect, min_size: float = MIN_COMPONENT_SIZE) -> bool:
    """True when either side is below *min_size*."""
    return rect.width < min_size or rect.height < min_size


def within(a: float, b: float, proximity: float) -> bool:
    """True when *a* and *b* are strictly closer than *proximity*."""
    return abs(a - b) < proximity


def suppressed(value: float, accepted: Iterable[float], proximity: float) -> bool:
    """True when *value* lies in ``[a - proximity, a + proximity]`` for any accepted ``a``."""
    return any(abs(value - a) <= proximity for a in accepted)
