"""VisualizationBridge — main entry point for the 3D preview pipeline.

Usage::

    from layerstack.visualization import VisualizationBridge

    with VisualizationBridge(model, data=series, options=options) as bridge:
        bridge.play()
        scene = bridge.scene
        bridge.export("out", format="obj")

Every model, data, filter or frame change triggers a full recompute
(layout, colours, assembly).  The playback timer only moves the frame
cursor, which funnels back into the same recompute.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Mapping

from layerstack.config import ViewOptions
from layerstack.models.data import DataSource, TimeSeries, parse_data_source
from layerstack.models.model import Model
from layerstack.visualization.assembler import assemble_scene
from layerstack.visualization.colors import ColorMapper
from layerstack.visualization.exporters.base import ExportResult, Exporter
from layerstack.visualization.exporters.json3d import JSON3DExporter
from layerstack.visualization.exporters.obj import OBJExporter
from layerstack.visualization.layout import Layout, compute_layout
from layerstack.visualization.loop import RenderLoop
from layerstack.visualization.playback import PlaybackController, PlaybackState
from layerstack.visualization.scene import Scene, compute_isometric_camera
from layerstack.visualization.viewer import generate_viewer

logger = logging.getLogger(__name__)

__all__ = ["ExportResult", "VisualizationBridge"]

_EXPORTERS: dict[str, type[Exporter]] = {
    "json3d": JSON3DExporter,
    "obj": OBJExporter,
}


class VisualizationBridge:
    """Own the render pipeline state for one preview.

    Parameters
    ----------
    model:
        Model to render; a snapshot is taken on every :meth:`set_model`.
    data:
        Optional scalar data, raw mapping or parsed variant.
    options:
        View options; defaults are used when omitted.
    on_scene:
        Optional callback receiving every freshly assembled scene.
    """

    def __init__(
        self,
        model: Model | None = None,
        data: Mapping[str, Any] | DataSource | None = None,
        options: ViewOptions | None = None,
        on_scene: Callable[[Scene], Any] | None = None,
    ) -> None:
        self.options = options or ViewOptions()
        self._on_scene = on_scene
        self._lock = threading.RLock()
        self._model = Model()
        self._hidden_layers: set[int] = set()
        self._search_term = ""
        self._data: DataSource | None = None
        self._mapper: ColorMapper | None = None
        self._layout: Layout | None = None
        self._scene = Scene()
        self._render_loop: RenderLoop | None = None
        self._playback = PlaybackController(
            interval_ms=self.options.playback_speed_ms,
            on_frame=self._on_frame,
        )

        if model is not None:
            self._model = model.snapshot()
        self.set_data(data)

    def __enter__(self) -> VisualizationBridge:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- inputs ------------------------------------------------------------

    @property
    def model(self) -> Model:
        return self._model

    @property
    def data(self) -> DataSource | None:
        return self._data

    def set_model(self, model: Model) -> Scene:
        """Replace the rendered model; layers beyond the old count start visible."""
        with self._lock:
            self._model = model.snapshot()
            self._hidden_layers = {i for i in self._hidden_layers if i < len(model.layers)}
            return self.recompute()

    def set_data(self, data: Mapping[str, Any] | DataSource | None) -> Scene:
        """Attach a data source; the value range is resolved once here."""
        with self._lock:
            self._data = parse_data_source(data)
            if self._data is None:
                self._mapper = None
            else:
                self._mapper = ColorMapper(
                    self._data,
                    min_value=self.options.min_value,
                    max_value=self.options.max_value,
                    inverse=self.options.inverse,
                    palette=self.options.palette,
                )

            if isinstance(self._data, TimeSeries):
                self._playback.set_series(self._data.frame_count)
            else:
                self._playback.pause()
                self._playback.set_series(None)
            scene = self.recompute()

        if isinstance(self._data, TimeSeries) and self.options.autoplay:
            self.play()
        return scene

    def set_search_term(self, term: str) -> Scene:
        with self._lock:
            self._search_term = term
            return self.recompute()

    def set_transparency(self, transparency: float) -> Scene:
        with self._lock:
            self.options = self.options.model_copy(update={"transparency": transparency})
            return self.recompute()

    def set_layer_visible(self, layer_index: int, visible: bool) -> Scene:
        with self._lock:
            if visible:
                self._hidden_layers.discard(layer_index)
            else:
                self._hidden_layers.add(layer_index)
            return self.recompute()

    def toggle_layer_visible(self, layer_index: int) -> Scene:
        return self.set_layer_visible(layer_index, layer_index in self._hidden_layers)

    @property
    def visible_layers(self) -> set[int]:
        return {i for i in range(len(self._model.layers)) if i not in self._hidden_layers}

    # -- playback ----------------------------------------------------------

    @property
    def playback(self) -> PlaybackController:
        return self._playback

    @property
    def playback_state(self) -> PlaybackState | None:
        return self._playback.state

    def play(self) -> None:
        self._playback.play()

    def pause(self) -> None:
        self._playback.pause()

    def seek(self, frame: int) -> None:
        self._playback.seek(frame)

    def _on_frame(self, frame: int) -> None:
        logger.debug("Frame changed to %d", frame)
        self.recompute()

    # -- pipeline ----------------------------------------------------------

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def layout(self) -> Layout | None:
        return self._layout

    def recompute(self) -> Scene:
        """Run layout, colour mapping and assembly from scratch."""
        with self._lock:
            state = self._playback.state
            self._layout = compute_layout(self._model, layer_gap=self.options.layer_gap)
            drawables = assemble_scene(
                self._model,
                self._layout,
                mapper=self._mapper,
                state=state,
                visible_layers=self.visible_layers,
                search_term=self._search_term,
                transparency=self.options.clamped_transparency,
            )
            self._scene = Scene(
                drawables=drawables,
                camera=compute_isometric_camera(drawables),
                frame=state.current_frame if state is not None else None,
            )
            scene = self._scene

        if self._on_scene is not None:
            self._on_scene(scene)
        return scene

    # -- rendering & export ------------------------------------------------

    def start_render_loop(
        self,
        render: Callable[[Scene], Any],
        interval_ms: float | None = None,
    ) -> RenderLoop:
        """Start (or return the running) continuous redraw loop."""
        if self._render_loop is None:
            kwargs = {} if interval_ms is None else {"interval_ms": interval_ms}
            self._render_loop = RenderLoop(lambda: self._scene, render, **kwargs)
        self._render_loop.start()
        return self._render_loop

    def stop_render_loop(self) -> None:
        if self._render_loop is not None:
            self._render_loop.stop()

    def export(self, output_dir: str | Path, format: str = "json3d") -> ExportResult:
        """Export the current scene.

        Parameters
        ----------
        output_dir:
            Directory receiving the output file(s).
        format:
            Export format: ``json3d`` or ``obj``.
        """
        exporter = self._get_exporter(format)
        result = exporter.export(self._scene, Path(output_dir))
        logger.info("Exported %s to %s", result.format, result.file_path)
        return result

    def export_all(
        self,
        output_dir: str | Path,
        formats: list[str] | None = None,
    ) -> list[ExportResult]:
        """Export to several formats and write the HTML viewer alongside."""
        if formats is None:
            formats = ["json3d", "obj"]
        results = [self.export(output_dir, fmt) for fmt in formats]
        self.generate_viewer(Path(output_dir) / "viewer.html")
        return results

    def generate_viewer(self, output_path: str | Path) -> Path:
        return generate_viewer(self._scene, output_path)

    def _get_exporter(self, format: str) -> Exporter:
        exporter_cls = _EXPORTERS.get(format)
        if exporter_cls is None:
            logger.warning("Unknown format '%s', using json3d", format)
            exporter_cls = JSON3DExporter
        return exporter_cls()

    # -- teardown ----------------------------------------------------------

    def close(self) -> None:
        """Release the playback timer and the redraw loop."""
        self._playback.close()
        self.stop_render_loop()
