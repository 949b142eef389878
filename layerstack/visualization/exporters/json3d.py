"""JSON3D exporter — the drawable list and camera as plain JSON."""

from __future__ import annotations

from layerstack.visualization.exporters.base import Exporter
from layerstack.visualization.scene import Scene


class JSON3DExporter(Exporter):
    """Write ``scene.json``.

    Shape: ``{frame, drawables: [{layer, id, position, footprint, color,
    wireframe, opacity}], camera: {position, target, up, fov}}``.
    """

    file_name = "scene.json"

    @property
    def format_name(self) -> str:
        return "json3d"

    def render(self, scene: Scene) -> str:
        return scene.to_json(indent=2)
