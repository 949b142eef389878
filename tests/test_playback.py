"""Tests for the playback controller, the repeating timer and the render loop."""

from __future__ import annotations

import threading

from layerstack.visualization.loop import RenderLoop
from layerstack.visualization.playback import PLAYING, STOPPED, PlaybackController, PlaybackState
from layerstack.visualization.scene import Scene
from layerstack.visualization.timer import RepeatingTimer

# Long enough that no tick fires while a test inspects the controller
IDLE_MS = 60_000


class TestPlaybackController:
    def test_starts_at_frame_zero(self):
        controller = PlaybackController(frame_count=3, interval_ms=IDLE_MS)
        assert controller.current_frame == 0
        assert controller.state == PlaybackState(current_frame=0, playing=False)

    def test_tick_advances_and_wraps(self):
        controller = PlaybackController(frame_count=3, interval_ms=IDLE_MS)
        frames = []
        for _ in range(4):
            controller.tick()
            frames.append(controller.current_frame)
        assert frames == [1, 2, 0, 1]

    def test_tick_from_last_frame(self):
        controller = PlaybackController(frame_count=3, interval_ms=IDLE_MS)
        controller.seek(2)
        controller.tick()
        assert controller.current_frame == 0

    def test_single_frame_series_stays_put(self):
        controller = PlaybackController(frame_count=1, interval_ms=IDLE_MS)
        controller.tick()
        assert controller.current_frame == 0

    def test_tick_without_series_is_noop(self):
        seen = []
        controller = PlaybackController(interval_ms=IDLE_MS, on_frame=seen.append)
        controller.tick()
        assert controller.current_frame is None
        assert controller.state is None
        assert seen == []

    def test_seek_notifies(self):
        seen = []
        controller = PlaybackController(frame_count=10, interval_ms=IDLE_MS, on_frame=seen.append)
        controller.seek(7)
        controller.tick()
        assert seen == [7, 8]

    def test_set_series_resets_frame(self):
        controller = PlaybackController(frame_count=5, interval_ms=IDLE_MS)
        controller.seek(4)
        controller.set_series(8)
        assert controller.current_frame == 0
        assert controller.frame_count == 8
        controller.set_series(None)
        assert controller.current_frame is None
        assert controller.state is None

    def test_play_is_idempotent(self):
        controller = PlaybackController(frame_count=3, interval_ms=IDLE_MS)
        try:
            controller.play()
            first = controller._timer._timer
            controller.play()
            assert controller._timer._timer is first
            assert controller.status == PLAYING
            assert controller.state.playing is True
        finally:
            controller.pause()
        assert controller.status == STOPPED

    def test_pause_while_stopped(self):
        controller = PlaybackController(frame_count=3, interval_ms=IDLE_MS)
        controller.pause()
        assert controller.is_playing is False

    def test_context_manager_stops_timer(self):
        with PlaybackController(frame_count=3, interval_ms=IDLE_MS) as controller:
            controller.play()
            assert controller.is_playing
        assert controller.is_playing is False

    def test_timer_drives_ticks(self):
        reached = threading.Event()
        seen = []

        def on_frame(frame: int) -> None:
            seen.append(frame)
            if len(seen) >= 3:
                reached.set()

        with PlaybackController(frame_count=2, interval_ms=5, on_frame=on_frame) as controller:
            controller.play()
            assert reached.wait(timeout=5)
        assert seen[:3] == [1, 0, 1]

    def test_state_to_dict(self):
        assert PlaybackState(current_frame=2, playing=True).to_dict() == {
            "current_frame": 2,
            "playing": True,
        }


class TestRepeatingTimer:
    def test_start_and_stop_report_transitions(self):
        timer = RepeatingTimer(lambda: None, IDLE_MS)
        assert timer.start() is True
        assert timer.start() is False
        assert timer.is_running
        assert timer.stop() is True
        assert timer.stop() is False
        assert timer.is_running is False

    def test_failing_callback_keeps_running(self):
        calls = []
        done = threading.Event()

        def callback() -> None:
            calls.append(1)
            if len(calls) >= 2:
                done.set()
            raise RuntimeError("boom")

        timer = RepeatingTimer(callback, 5)
        timer.start()
        try:
            assert done.wait(timeout=5)
        finally:
            timer.stop()


    def test_restart_during_tick_keeps_one_chain(self):
        entered = threading.Event()
        release = threading.Event()
        runs: list[threading.Thread] = []

        def callback() -> None:
            runs.append(threading.current_thread())
            if len(runs) == 1:
                entered.set()
                release.wait(timeout=5)

        timer = RepeatingTimer(callback, 5, name="restart-test")
        timer.start()
        try:
            assert entered.wait(timeout=5)
            # the restarted chain must not fire while the old run is checked
            timer._interval_ms = IDLE_MS
            timer.stop()
            timer.start()
            fresh = timer._timer

            release.set()
            runs[0].join(timeout=5)

            assert not runs[0].is_alive()
            assert timer._timer is fresh
            assert len(runs) == 1
        finally:
            release.set()
            timer.stop()


class TestRenderLoop:
    def test_render_once(self):
        scene = Scene()
        rendered = []
        loop = RenderLoop(lambda: scene, rendered.append, interval_ms=IDLE_MS)
        loop.render_once()
        loop.render_once()
        assert rendered == [scene, scene]
        assert loop.frames_rendered == 2

    def test_start_stop(self):
        loop = RenderLoop(Scene, lambda s: None, interval_ms=IDLE_MS)
        loop.start()
        assert loop.is_running
        loop.stop()
        assert loop.is_running is False
