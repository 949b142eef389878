"""ModelEditor — layer and component operations on a single owned model.

Usage::

    from layerstack.editor import ModelEditor

    editor = ModelEditor()
    index = editor.add_layer()
    layer = editor.open_layer(index)
    layer.add_id("A")
    layer.select("A")
    layer.begin(Point(0, 0))
    layer.finish(Point(10, 10))
    text = editor.export_json()

Every mutation recomputes the guideline set from scratch and notifies the
optional ``on_change`` callback (e.g. ``VisualizationBridge.set_model``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from layerstack.config import DEFAULT_LAYER_HEIGHT, SNAP_PROXIMITY
from layerstack.editor.layer_editor import LayerEditor
from layerstack.editor.registry import LayerEditorRegistry
from layerstack.guidelines.engine import GuidelineSet, compute_guidelines
from layerstack.models.model import Component, Layer, Model
from layerstack.parsing import ParseResult, parse_int

logger = logging.getLogger(__name__)


class ModelEditor:
    """Owner of the editable model and its derived guideline set.

    Parameters
    ----------
    model:
        Initial model; an empty one is created when omitted.
    proximity:
        Snap / guideline dedup threshold.
    on_change:
        Called with the model after every mutation.
    """

    def __init__(
        self,
        model: Model | None = None,
        proximity: float = SNAP_PROXIMITY,
        on_change: Callable[[Model], Any] | None = None,
    ) -> None:
        self.model = model if model is not None else Model()
        self.proximity = proximity
        self.registry = LayerEditorRegistry()
        self.last_size: tuple[float, float] | None = None
        self._on_change = on_change
        self.guidelines: GuidelineSet = compute_guidelines(self.model, proximity)

    # -- layers ------------------------------------------------------------

    def layer(self, index: int) -> Layer:
        self._check_index(index)
        return self.model.layers[index]

    def add_layer(self) -> int:
        """Append an empty layer; it inherits the last layer's height."""
        layers = self.model.layers
        height = layers[-1].height if layers else DEFAULT_LAYER_HEIGHT
        layers.append(Layer(components=[], height=height, label=""))
        self._changed(guidelines=False)
        return len(layers) - 1

    def remove_layer(self, index: int) -> Layer:
        """Remove a layer with all its components."""
        self._check_index(index)
        self.registry.clear()
        removed = self.model.layers.pop(index)
        self._changed()
        return removed

    def move_layer(self, index: int, up: bool) -> int:
        """Swap a layer with its upper (``up=True``) or lower neighbour."""
        self._check_index(index)
        target = index - 1 if up else index + 1
        if target < 0 or target >= len(self.model.layers):
            raise IndexError(f"Cannot move layer {index} {'up' if up else 'down'}")

        layers = self.model.layers
        layers[index], layers[target] = layers[target], layers[index]
        self._changed()
        for i in (index, target):
            self.registry.refresh(i, layers[i].component_ids())
        logger.debug("Moved layer %d to %d", index, target)
        return target

    def copy_layer(
        self,
        index: int,
        replacements: Iterable[tuple[str, str]] | None = None,
    ) -> int:
        """Append a deep copy of a layer, rewriting component ids.

        Each ``(find, replace)`` pair with a non-blank *find* replaces the
        first occurrence of *find* in every component id of the copy.
        """
        self._check_index(index)
        copy = self.model.layers[index].model_copy(deep=True)
        pairs = list(replacements or [])
        for component in copy.components:
            for find, replace in pairs:
                if find.strip() == "":
                    continue
                if find in component.id:
                    component.id = component.id.replace(find, replace, 1)
        self.model.layers.append(copy)
        self._changed()
        return len(self.model.layers) - 1

    def update_layer_height(self, index: int, raw: Any) -> ParseResult:
        """Set a layer's render height from raw field input.

        Invalid or non-positive input leaves the model unchanged.
        """
        self._check_index(index)
        result = parse_int(raw)
        if not result.ok:
            logger.debug("Ignoring layer height %r: %s", raw, result.error)
            return result
        if result.value <= 0:
            return ParseResult(ok=False, error=f"Layer height must be positive, got {result.value}")
        self.model.layers[index].height = result.value
        self._changed(guidelines=False)
        return result

    def update_layer_label(self, index: int, label: str) -> None:
        self._check_index(index)
        self.model.layers[index].label = label
        self._changed(guidelines=False)

    # -- components --------------------------------------------------------

    def add_component(self, index: int, component: Component) -> None:
        """Place a component and remember its size for size snapping."""
        self._check_index(index)
        layer = self.model.layers[index]
        if layer.find(component.id) is not None:
            raise ValueError(f"Component {component.id!r} already placed in layer {index}")
        layer.components.append(component)
        self.last_size = component.size
        self._changed()

    def remove_component(self, index: int, component_id: str) -> bool:
        """Remove a placed component; returns False when it was not placed."""
        self._check_index(index)
        layer = self.model.layers[index]
        before = len(layer.components)
        layer.components = [c for c in layer.components if c.id != component_id]
        if len(layer.components) == before:
            return False
        self._changed()
        return True

    # -- layer editors -----------------------------------------------------

    def open_layer(self, index: int) -> LayerEditor:
        """Return the open editor for a layer, creating and registering it."""
        self._check_index(index)
        handle = self.registry.get(index)
        if isinstance(handle, LayerEditor):
            return handle
        layer_editor = LayerEditor(self, index)
        self.registry.register(index, layer_editor)
        return layer_editor

    def close_layer(self, index: int) -> None:
        self.registry.unregister(index)

    # -- import / export ---------------------------------------------------

    def export_json(self, indent: int | None = 2) -> str:
        return self.model.to_json(indent=indent)

    def import_json(self, text: str) -> Model:
        """Replace the model with a JSON export and refresh open editors."""
        self.model = Model.from_json(text)
        self._changed()
        for index in list(self.registry):
            if index < len(self.model.layers):
                self.registry.refresh(index, self.model.layers[index].component_ids())
            else:
                self.registry.unregister(index)
        logger.info("Imported model with %d layers", len(self.model.layers))
        return self.model

    def export_file(self, path: str | Path) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.export_json(), encoding="utf-8")
        logger.info("Exported model to %s", output)
        return output

    def import_file(self, path: str | Path) -> Model:
        return self.import_json(Path(path).read_text(encoding="utf-8"))

    # -- internals ---------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.model.layers):
            raise IndexError(f"Layer index out of range: {index}")

    def _changed(self, guidelines: bool = True) -> None:
        if guidelines:
            self.guidelines = compute_guidelines(self.model, self.proximity)
        if self._on_change is not None:
            self._on_change(self.model)
