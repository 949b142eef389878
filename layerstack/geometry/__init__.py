"""Geometry utilities — rectangle normalization and proximity tests."""

from layerstack.geometry.rect import Point, Rect, is_degenerate, normalize_rect, suppressed, within

__all__ = [
    "Point",
    "Rect",
    "is_degenerate",
    "normalize_rect",
    "suppressed",
    "within",
]
