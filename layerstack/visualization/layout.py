"""Layout compositor — places the layered 2D model in 3D.

The plane's x axis maps to 3D x, the plane's y axis maps to 3D z and the
layer stack grows along 3D y.  The whole scene is centred on the origin
using the midpoint of the 2D bounding box and half the summed layer
heights.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from layerstack.config import DEFAULT_LAYER_GAP
from layerstack.models.model import Model

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]


@dataclass(frozen=True)
class Footprint:
    width: float
    height: float
    depth: float

    def to_list(self) -> list[float]:
        return [self.width, self.height, self.depth]


@dataclass(frozen=True)
class Placement:
    """Centre position and box extents of one component."""

    position: Vec3
    footprint: Footprint


@dataclass
class Layout:
    """Output of :func:`compute_layout`."""

    centre: Vec3
    placements: dict[tuple[int, str], Placement] = field(default_factory=dict)
    layer_hues: list[float] = field(default_factory=list)
    layer_offsets: list[float] = field(default_factory=list)

    def placement(self, layer_index: int, component_id: str) -> Placement | None:
        return self.placements.get((layer_index, component_id))

    def to_dict(self) -> dict[str, Any]:
        return {
            "centre": self.centre.to_list(),
            "layer_hues": list(self.layer_hues),
            "layer_offsets": list(self.layer_offsets),
            "placements": [
                {
                    "layer": layer_index,
                    "id": component_id,
                    "position": p.position.to_list(),
                    "footprint": p.footprint.to_list(),
                }
                for (layer_index, component_id), p in self.placements.items()
            ],
        }


def hue_step(layer_count: int) -> float:
    """Hue increment between consecutive layers (never wrapped)."""
    return 360 / (layer_count + 1)


def compute_layout(model: Model, layer_gap: float = DEFAULT_LAYER_GAP) -> Layout | None:
    """Compute the centred 3D placement of every component.

    Returns ``None`` for a model without components, which has no bounding
    box to centre on.
    """
    if model.is_empty():
        logger.debug("Model has no components; skipping layout")
        return None

    # Pass 1: bounding box and total stacked height
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    total_height = 0.0
    for layer in model.layers:
        total_height += layer.height
        for component in layer.components:
            min_x = min(min_x, component.x)
            max_x = max(max_x, component.right)
            min_y = min(min_y, component.y)
            max_y = max(max_y, component.bottom)

    centre = Vec3(
        x=max_x - (max_x - min_x) / 2,
        y=total_height / 2,
        z=max_y - (max_y - min_y) / 2,
    )

    # Pass 2: stack layers and place components
    layout = Layout(centre=centre)
    step = hue_step(len(model.layers))
    current_height = 0.0
    current_hue = 0.0
    for layer_index, layer in enumerate(model.layers):
        layout.layer_offsets.append(current_height)
        layout.layer_hues.append(current_hue)
        for component in layer.components:
            width, depth = component.size
            layout.placements[(layer_index, component.id)] = Placement(
                position=Vec3(
                    x=component.x - centre.x + width / 2,
                    y=current_height - centre.y + layer.height / 2,
                    z=component.y - centre.z + depth / 2,
                ),
                footprint=Footprint(width=width, height=layer.height, depth=depth),
            )
        current_hue += step
        current_height += layer.height + layer_gap

    return layout
