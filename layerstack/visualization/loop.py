"""RenderLoop — continuous redraw tick, independent of data changes."""

from __future__ import annotations

import logging
from typing import Any, Callable

from layerstack.config import DEFAULT_REDRAW_INTERVAL_MS
from layerstack.visualization.scene import Scene
from layerstack.visualization.timer import RepeatingTimer

logger = logging.getLogger(__name__)


class RenderLoop:
    """Hand the latest scene to a renderer on every tick.

    The loop only reads: *scene_source* returns the most recently assembled
    scene and *render* draws it.  Neither model nor playback state is
    touched, so rendering an unchanged scene repeatedly is harmless.
    """

    def __init__(
        self,
        scene_source: Callable[[], Scene],
        render: Callable[[Scene], Any],
        interval_ms: float = DEFAULT_REDRAW_INTERVAL_MS,
    ) -> None:
        self._scene_source = scene_source
        self._render = render
        self._timer = RepeatingTimer(self.render_once, interval_ms, name="render-loop")
        self.frames_rendered = 0

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    def start(self) -> None:
        if self._timer.start():
            logger.debug("Render loop started")

    def stop(self) -> None:
        if self._timer.stop():
            logger.debug("Render loop stopped after %d frames", self.frames_rendered)

    def render_once(self) -> None:
        self._render(self._scene_source())
        self.frames_rendered += 1
