"""OBJ exporter — Wavefront geometry with a companion material library."""

from __future__ import annotations

from pathlib import Path

from layerstack.visualization.colors import hex_to_rgb
from layerstack.visualization.exporters.base import ExportResult, Exporter
from layerstack.visualization.scene import MeshData, Scene

MATERIAL_FILE = "model.mtl"

# Corner pairs of a box tessellated by scene._build_box
_BOX_EDGES: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


class OBJExporter(Exporter):
    """Write ``model.obj`` and ``model.mtl``, one object per drawable.

    Solid boxes become triangle faces; wireframe boxes become ``l`` edge
    elements.  Opacity is carried by the material's ``d`` statement.
    """

    file_name = "model.obj"

    @property
    def format_name(self) -> str:
        return "obj"

    def export(self, scene: Scene, output_dir: Path) -> ExportResult:
        result = super().export(scene, output_dir)
        mtl_path = output_dir / MATERIAL_FILE
        mtl_path.write_text(self.render_materials(scene), encoding="utf-8")
        return result

    def render(self, scene: Scene) -> str:
        lines = [f"mtllib {MATERIAL_FILE}"]
        base = 1  # OBJ vertex indices start at 1
        for index, mesh in enumerate(scene.to_meshes()):
            lines.append(f"o {mesh.name or f'box_{index}'}")
            lines.append(f"usemtl {_material_name(index)}")
            lines.extend(f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.vertices)
            lines.extend(_elements(mesh, base))
            base += len(mesh.vertices)
        return "\n".join(lines) + "\n"

    def render_materials(self, scene: Scene) -> str:
        lines: list[str] = []
        for index, mesh in enumerate(scene.to_meshes()):
            r, g, b = (channel / 255 for channel in hex_to_rgb(mesh.color))
            lines += [
                f"newmtl {_material_name(index)}",
                f"Kd {r:.4f} {g:.4f} {b:.4f}",
                f"d {mesh.opacity:.4f}",
                "",
            ]
        return "\n".join(lines) + "\n"


def _material_name(index: int) -> str:
    return f"material_{index}"


def _elements(mesh: MeshData, base: int) -> list[str]:
    if mesh.wireframe:
        return [f"l {a + base} {b + base}" for a, b in _BOX_EDGES]
    return [f"f {a + base} {b + base} {c + base}" for a, b, c in mesh.faces]
