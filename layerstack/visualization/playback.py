"""PlaybackController — timer-driven frame cursor over a time series."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from layerstack.config import DEFAULT_PLAYBACK_SPEED_MS
from layerstack.visualization.timer import RepeatingTimer

logger = logging.getLogger(__name__)

STOPPED = "stopped"
PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackState:
    """Frame cursor over a time series."""

    current_frame: int | None = None
    playing: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"current_frame": self.current_frame, "playing": self.playing}


class PlaybackController:
    """Play, pause and seek through the frames of a time series.

    Parameters
    ----------
    frame_count:
        Number of frames in the attached series, or ``None`` when no time
        series is configured.  Ticks without a series leave the frame alone
        while the timer keeps running.
    interval_ms:
        Tick interval in milliseconds.
    on_frame:
        Optional callback receiving the new frame index after every
        advance or seek.

    Always release the timer with :meth:`pause` or :meth:`close` (or use
    the controller as a context manager) when the visualization is torn
    down.
    """

    def __init__(
        self,
        frame_count: int | None = None,
        interval_ms: float = DEFAULT_PLAYBACK_SPEED_MS,
        on_frame: Callable[[int], Any] | None = None,
    ) -> None:
        self._frame_count = frame_count
        self._current_frame: int | None = 0 if frame_count is not None else None
        self._on_frame = on_frame
        self._lock = threading.Lock()
        self._timer = RepeatingTimer(self.tick, interval_ms, name="playback")

    def __enter__(self) -> PlaybackController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- state -------------------------------------------------------------

    @property
    def status(self) -> str:
        return PLAYING if self._timer.is_running else STOPPED

    @property
    def is_playing(self) -> bool:
        return self._timer.is_running

    @property
    def current_frame(self) -> int | None:
        return self._current_frame

    @property
    def frame_count(self) -> int | None:
        return self._frame_count

    @property
    def state(self) -> PlaybackState | None:
        """Snapshot for transport controls; ``None`` without a time series."""
        if self._frame_count is None:
            return None
        return PlaybackState(current_frame=self._current_frame, playing=self.is_playing)

    def set_series(self, frame_count: int | None) -> None:
        """Attach a new series length (``None`` detaches); resets to frame 0."""
        with self._lock:
            self._frame_count = frame_count
            self._current_frame = 0 if frame_count is not None else None

    # -- transport ---------------------------------------------------------

    def play(self) -> None:
        """Start ticking; no-op while already playing."""
        if self._timer.start():
            logger.info("Playback started (every %.0f ms)", self._timer.interval_ms)

    def pause(self) -> None:
        """Stop ticking; no-op while already stopped."""
        if self._timer.stop():
            logger.info("Playback paused at frame %s", self._current_frame)

    def seek(self, frame: int) -> None:
        """Jump to *frame*; bounds are the caller's responsibility."""
        with self._lock:
            self._current_frame = frame
        self._notify(frame)

    def tick(self) -> None:
        """Advance one frame, looping back to 0 after the last index."""
        with self._lock:
            if self._frame_count is None:
                return
            current = self._current_frame if self._current_frame is not None else 0
            if current >= self._frame_count - 1:
                new_frame = 0
            else:
                new_frame = current + 1
            self._current_frame = new_frame
        self._notify(new_frame)

    def close(self) -> None:
        """Release the timer."""
        self.pause()

    def _notify(self, frame: int) -> None:
        if self._on_frame is not None:
            self._on_frame(frame)
