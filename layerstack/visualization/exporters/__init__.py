"""Scene exporters — JSON scene graph and Wavefront OBJ."""

from layerstack.visualization.exporters.base import ExportResult, Exporter
from layerstack.visualization.exporters.json3d import JSON3DExporter
from layerstack.visualization.exporters.obj import OBJExporter

__all__ = [
    "ExportResult",
    "Exporter",
    "JSON3DExporter",
    "OBJExporter",
]
