"""GuidelineEngine — alignment lines derived from existing component edges.

Every component contributes its left/right edges to the vertical axis and
its top/bottom edges to the horizontal axis.  Candidates are accepted
greedily in a stable order (layer, component, then left/right/top/bottom);
a candidate within the proximity threshold of an already accepted value on
the same axis is discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from layerstack.config import SNAP_PROXIMITY
from layerstack.geometry.rect import suppressed
from layerstack.models.model import Model

logger = logging.getLogger(__name__)

VERTICAL = "vertical"
HORIZONTAL = "horizontal"


@dataclass
class GuidelineSet:
    """Accepted guideline values per axis, in acceptance order."""

    vertical: list[float] = field(default_factory=list)
    horizontal: list[float] = field(default_factory=list)

    def axis(self, name: str) -> list[float]:
        if name == VERTICAL:
            return self.vertical
        if name == HORIZONTAL:
            return self.horizontal
        raise KeyError(f"Unknown guideline axis: {name}")

    def is_empty(self) -> bool:
        return not self.vertical and not self.horizontal

    def to_dict(self) -> dict[str, Any]:
        return {
            "vertical": list(self.vertical),
            "horizontal": list(self.horizontal),
        }


def compute_guidelines(model: Model, proximity: float = SNAP_PROXIMITY) -> GuidelineSet:
    """Derive the deduplicated guideline set for *model*.

    Always a full recompute; call again after any component is added,
    removed or moved.
    """
    result = GuidelineSet()

    def handle_candidate(axis: str, value: float) -> None:
        accepted = result.axis(axis)
        if suppressed(value, accepted, proximity):
            return
        accepted.append(value)

    for layer in model.layers:
        for component in layer.components:
            handle_candidate(VERTICAL, component.x)
            handle_candidate(VERTICAL, component.right)
            handle_candidate(HORIZONTAL, component.y)
            handle_candidate(HORIZONTAL, component.bottom)

    logger.debug(
        "Computed %d vertical / %d horizontal guidelines",
        len(result.vertical), len(result.horizontal),
    )
    return result
