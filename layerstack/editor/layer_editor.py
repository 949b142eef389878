"""LayerEditor — interactive rectangle drawing session for one layer.

The editor tracks the component ids the user intends to place, the
selected id and an in-progress drag.  Pointer positions are snapped to the
previous rectangle's size and to the model-wide guidelines before any
rectangle is committed to the model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from layerstack.config import MIN_COMPONENT_SIZE
from layerstack.editor.component_ids import add_component_id, generate_component_ids, merge_component_ids
from layerstack.geometry.rect import Point, Rect, is_degenerate, normalize_rect
from layerstack.guidelines.snap import snap_point
from layerstack.models.model import Component, Layer

if TYPE_CHECKING:
    from layerstack.editor.editor import ModelEditor

logger = logging.getLogger(__name__)

# Approximate label width per character, in plane units
_LABEL_CHAR_WIDTH = 8


@dataclass
class CanvasBox:
    """A placed component as drawn on the layer canvas."""

    id: str
    rect: Rect
    selected: bool = False
    label_rotated: bool = False


@dataclass
class LayerCanvas:
    """Everything needed to paint the 2D layer editor."""

    vertical: list[float] = field(default_factory=list)
    horizontal: list[float] = field(default_factory=list)
    boxes: list[CanvasBox] = field(default_factory=list)
    preview: Rect | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "guidelines": {"vertical": list(self.vertical), "horizontal": list(self.horizontal)},
            "boxes": [
                {
                    "id": b.id,
                    "x": b.rect.x,
                    "y": b.rect.y,
                    "width": b.rect.width,
                    "height": b.rect.height,
                    "selected": b.selected,
                    "label_rotated": b.label_rotated,
                }
                for b in self.boxes
            ],
            "preview": None if self.preview is None else [
                self.preview.x, self.preview.y, self.preview.width, self.preview.height,
            ],
        }


class LayerEditor:
    """Draw components of one layer.

    Obtain instances through :meth:`ModelEditor.open_layer` so the editor
    is registered under its layer index.
    """

    def __init__(self, editor: ModelEditor, layer_index: int) -> None:
        self._editor = editor
        self.layer_index = layer_index
        self.component_ids: list[str] = self.layer.component_ids()
        self.current: str | None = None
        self.start: Point | None = None
        self.show_guidelines = True
        self.canvas = LayerCanvas()
        self.redraw()

    @property
    def layer(self) -> Layer:
        return self._editor.layer(self.layer_index)

    @property
    def used_ids(self) -> list[str]:
        return self.layer.component_ids()

    # -- component id list -------------------------------------------------

    def add_id(self, component_id: str) -> None:
        self.component_ids = add_component_id(self.component_ids, component_id)

    def generate_ids(self, prefix: str, start: Any, end: Any, pad_digits: Any = 0) -> list[str]:
        generated = generate_component_ids(prefix, start, end, pad_digits)
        self.component_ids = merge_component_ids(self.component_ids, generated)
        return generated

    def update_component_list(self, component_ids: list[str]) -> None:
        self.component_ids = list(component_ids)
        if self.current is not None and self.current not in self.component_ids:
            self.current = None

    def select(self, component_id: str | None) -> None:
        if component_id is not None and component_id not in self.component_ids:
            raise ValueError(f"Unknown component id: {component_id!r}")
        self.current = component_id
        self.redraw()

    def remove(self, component_id: str) -> None:
        """Remove an id from the list and its rectangle from the layer."""
        self._editor.remove_component(self.layer_index, component_id)
        if component_id in self.component_ids:
            self.component_ids.remove(component_id)
        if self.current == component_id:
            self.current = None
        self.redraw()

    # -- drawing -----------------------------------------------------------

    def set_show_guidelines(self, show: bool) -> None:
        self.show_guidelines = show
        self.redraw()

    def snap(self, point: Point) -> Point:
        return snap_point(
            point,
            self.start,
            self._editor.guidelines,
            self._editor.last_size,
            self.show_guidelines,
            self._editor.proximity,
        )

    def begin(self, point: Point) -> bool:
        """Start dragging a rectangle for the selected component."""
        if self.current is None:
            logger.debug("No component selected; drag ignored")
            return False
        if self.current in self.used_ids:
            logger.debug("Component %s already placed; drag ignored", self.current)
            return False
        self.start = self.snap(point)
        return True

    def move(self, point: Point) -> Rect | None:
        """Update the preview rectangle while dragging."""
        if self.start is None:
            return None
        self.redraw()
        self.canvas.preview = normalize_rect(self.start, self.snap(point))
        return self.canvas.preview

    def finish(self, point: Point) -> Component | None:
        """Commit the dragged rectangle; degenerate ones are discarded."""
        if self.start is None or self.current is None:
            return None

        rect = normalize_rect(self.start, self.snap(point))
        self.start = None

        if is_degenerate(rect, MIN_COMPONENT_SIZE):
            logger.debug("Discarding degenerate rectangle %s", rect)
            self.redraw()
            return None

        component = Component(id=self.current, x=rect.x, y=rect.y, size=rect.size)
        self._editor.add_component(self.layer_index, component)

        position = self.component_ids.index(component.id) if component.id in self.component_ids else -1
        if position == -1 or position + 1 >= len(self.component_ids):
            self.current = None
        else:
            self.current = self.component_ids[position + 1]
        self.redraw()
        return component

    def cancel(self) -> None:
        self.start = None
        self.redraw()

    def redraw(self) -> LayerCanvas:
        """Rebuild the canvas description from the current model."""
        guidelines = self._editor.guidelines
        canvas = LayerCanvas()
        if self.show_guidelines:
            canvas.vertical = list(guidelines.vertical)
            canvas.horizontal = list(guidelines.horizontal)
        for component in self.layer.components:
            width, height = component.size
            canvas.boxes.append(CanvasBox(
                id=component.id,
                rect=Rect(component.x, component.y, width, height),
                selected=component.id == self.current,
                label_rotated=width < len(component.id) * _LABEL_CHAR_WIDTH and width < height,
            ))
        self.canvas = canvas
        return canvas
