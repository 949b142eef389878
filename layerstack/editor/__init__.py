"""Editor services — model editing, layer drawing sessions, id helpers."""

from layerstack.editor.component_ids import add_component_id, generate_component_ids
from layerstack.editor.editor import ModelEditor
from layerstack.editor.layer_editor import LayerCanvas, LayerEditor
from layerstack.editor.registry import LayerEditorRegistry

__all__ = [
    "LayerCanvas",
    "LayerEditor",
    "LayerEditorRegistry",
    "ModelEditor",
    "add_component_id",
    "generate_component_ids",
]
