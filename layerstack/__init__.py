"""layerstack — layered spatial model editor core and 3D stack preview."""

__version__ = "1.0.0"

from layerstack.config import ViewOptions, load_options
from layerstack.editor.editor import ModelEditor
from layerstack.editor.layer_editor import LayerEditor
from layerstack.geometry.rect import Point, Rect
from layerstack.guidelines.engine import GuidelineSet, compute_guidelines
from layerstack.guidelines.snap import snap_coordinate, snap_point
from layerstack.models.data import ScalarFrame, TimeSeries, parse_data_source
from layerstack.models.model import Component, Layer, Model
from layerstack.parsing import ParseResult, parse_float, parse_int
from layerstack.visualization.assembler import assemble_scene
from layerstack.visualization.bridge import ExportResult, VisualizationBridge
from layerstack.visualization.colors import ColorMapper, Palette, get_min_max_value, resolve_color
from layerstack.visualization.layout import Layout, compute_layout
from layerstack.visualization.playback import PlaybackController, PlaybackState
from layerstack.visualization.scene import Drawable, Scene

__all__ = [
    "__version__",
    # Model
    "Component",
    "Layer",
    "Model",
    "ScalarFrame",
    "TimeSeries",
    "parse_data_source",
    # Geometry & guidelines
    "GuidelineSet",
    "Point",
    "Rect",
    "compute_guidelines",
    "snap_coordinate",
    "snap_point",
    # Visualization
    "ColorMapper",
    "Drawable",
    "ExportResult",
    "Layout",
    "Palette",
    "PlaybackController",
    "PlaybackState",
    "Scene",
    "VisualizationBridge",
    "assemble_scene",
    "compute_layout",
    "get_min_max_value",
    "resolve_color",
    # Editor
    "LayerEditor",
    "ModelEditor",
    # Config & parsing
    "ParseResult",
    "ViewOptions",
    "load_options",
    "parse_float",
    "parse_int",
]
