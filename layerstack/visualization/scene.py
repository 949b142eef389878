"""Scene model — drawable boxes, box meshes and camera for 3D output."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any

from layerstack.visualization.colors import parse_css_color
from layerstack.visualization.layout import Footprint, Vec3


@dataclass
class Drawable:
    """One positioned, coloured box with its material parameters."""

    layer_index: int
    component_id: str
    position: Vec3
    footprint: Footprint
    color: str
    wireframe: bool = True
    opacity: float = 1.0

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """``(min_x, min_y, min_z, max_x, max_y, max_z)`` around the centre."""
        hw = self.footprint.width / 2
        hh = self.footprint.height / 2
        hd = self.footprint.depth / 2
        p = self.position
        return (p.x - hw, p.y - hh, p.z - hd, p.x + hw, p.y + hh, p.z + hd)

    def to_dict(self) -> dict[str, Any]:
        return {
            "layer": self.layer_index,
            "id": self.component_id,
            "position": self.position.to_list(),
            "footprint": self.footprint.to_list(),
            "color": self.color,
            "wireframe": self.wireframe,
            "opacity": self.opacity,
        }


@dataclass
class MeshData:
    """A single box mesh with vertices, triangular faces and material."""

    vertices: list[tuple[float, float, float]]
    faces: list[tuple[int, int, int]]
    color: str
    name: str = ""
    opacity: float = 1.0
    wireframe: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vertices": [list(v) for v in self.vertices],
            "faces": [list(f) for f in self.faces],
            "color": self.color,
            "opacity": self.opacity,
            "wireframe": self.wireframe,
        }


@dataclass
class Camera:
    """Camera settings for the scene (y is up, the stacking axis)."""

    position: tuple[float, float, float] = (400.0, 350.0, -120.0)
    target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    fov: float = 75.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": list(self.position),
            "target": list(self.target),
            "up": list(self.up),
            "fov": self.fov,
        }


@dataclass
class Scene:
    """Flat list of drawables plus camera configuration."""

    drawables: list[Drawable] = field(default_factory=list)
    camera: Camera = field(default_factory=Camera)
    frame: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "frame": self.frame,
            "drawables": [d.to_dict() for d in self.drawables],
            "camera": self.camera.to_dict(),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_meshes(self) -> list[MeshData]:
        """Tessellate every drawable into an 8-vertex, 12-face box."""
        meshes = []
        for d in self.drawables:
            mesh = _build_box(*d.bounds, color=parse_css_color(d.color), name=d.component_id)
            mesh.opacity = d.opacity
            mesh.wireframe = d.wireframe
            meshes.append(mesh)
        return meshes


def compute_isometric_camera(drawables: list[Drawable]) -> Camera:
    """Camera looking at the origin from a distance framing every drawable."""
    if not drawables:
        return Camera()

    extent = 0.0
    for d in drawables:
        min_x, min_y, min_z, max_x, max_y, max_z = d.bounds
        extent = max(extent, abs(min_x), abs(min_y), abs(min_z), abs(max_x), abs(max_y), abs(max_z))

    diagonal = extent * math.sqrt(3)
    distance = max(diagonal * 1.5, 2.0)
    offset = distance / math.sqrt(3)
    return Camera(position=(round(offset, 4), round(offset, 4), round(-offset, 4)))


def _build_box(
    min_x: float, min_y: float, min_z: float,
    max_x: float, max_y: float, max_z: float,
    color: str, name: str,
) -> MeshData:
    """Generate a box mesh from bounding box coordinates.

    8 vertices, 12 triangular faces (2 per side).
    """
    vertices = [
        (min_x, min_y, min_z),  # 0
        (max_x, min_y, min_z),  # 1
        (max_x, max_y, min_z),  # 2
        (min_x, max_y, min_z),  # 3
        (min_x, min_y, max_z),  # 4
        (max_x, min_y, max_z),  # 5
        (max_x, max_y, max_z),  # 6
        (min_x, max_y, max_z),  # 7
    ]

    faces = [
        # Back (z = min)
        (0, 2, 1), (0, 3, 2),
        # Front (z = max)
        (4, 5, 6), (4, 6, 7),
        # Bottom
        (0, 1, 5), (0, 5, 4),
        # Top
        (3, 6, 2), (3, 7, 6),
        # Left
        (0, 4, 7), (0, 7, 3),
        # Right
        (1, 2, 6), (1, 6, 5),
    ]

    return MeshData(vertices=vertices, faces=faces, color=color, name=name)
