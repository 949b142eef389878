"""Exporter interface shared by the scene writers."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from layerstack.visualization.scene import Scene


@dataclass
class ExportResult:
    """Outcome of writing one scene to disk."""

    file_path: Path | None
    format: str
    drawable_count: int = 0
    success: bool = True
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": str(self.file_path) if self.file_path else None,
            "format": self.format,
            "drawable_count": self.drawable_count,
            "success": self.success,
            "message": self.message,
        }


class Exporter(abc.ABC):
    """Write a :class:`Scene` into a directory.

    Subclasses set :attr:`file_name` (the main output file) and implement
    :meth:`render`, which returns the text of that file.  Formats with side
    files write them from :meth:`export`.
    """

    file_name: str = ""

    @property
    @abc.abstractmethod
    def format_name(self) -> str:
        """Identifier used by ``VisualizationBridge.export`` (``json3d``, ``obj``)."""

    @abc.abstractmethod
    def render(self, scene: Scene) -> str:
        """Serialise *scene* into the main output file's text."""

    def export(self, scene: Scene, output_dir: Path) -> ExportResult:
        """Write the scene below *output_dir*, creating it when missing."""
        output_path = self.target(output_dir)
        output_path.write_text(self.render(scene), encoding="utf-8")
        return ExportResult(
            file_path=output_path,
            format=self.format_name,
            drawable_count=len(scene.drawables),
            message=f"{self.format_name} export wrote {len(scene.drawables)} boxes.",
        )

    def target(self, output_dir: Path) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir / self.file_name
