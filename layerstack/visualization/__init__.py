"""Visualization — layout, colour mapping, playback and scene assembly."""

from layerstack.visualization.assembler import assemble_scene
from layerstack.visualization.bridge import ExportResult, VisualizationBridge
from layerstack.visualization.colors import ColorMapper, Palette, ValueRange, get_min_max_value, resolve_color
from layerstack.visualization.layout import Layout, compute_layout
from layerstack.visualization.playback import PlaybackController, PlaybackState
from layerstack.visualization.scene import Drawable, Scene

__all__ = [
    "ColorMapper",
    "Drawable",
    "ExportResult",
    "Layout",
    "Palette",
    "PlaybackController",
    "PlaybackState",
    "Scene",
    "ValueRange",
    "VisualizationBridge",
    "assemble_scene",
    "compute_layout",
    "get_min_max_value",
    "resolve_color",
]
