"""RepeatingTimer — a cancellable periodic task built on threading.Timer."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Invoke *callback* every *interval_ms* milliseconds until stopped.

    Each run schedules the next one on a fresh daemon ``threading.Timer``.
    :meth:`start` is idempotent; a running chain is never replaced.  Every
    start opens a new generation, so a run still in flight from a stopped
    chain finishes its callback but never schedules another run.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        interval_ms: float,
        name: str = "repeating-timer",
    ) -> None:
        self._callback = callback
        self._interval_ms = interval_ms
        self._name = name
        self._timer: threading.Timer | None = None
        self._running = False
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    def start(self) -> bool:
        """Start the chain; returns False when it was already running."""
        with self._lock:
            if self._running:
                return False
            self._running = True
            self._generation += 1
            self._schedule_next(self._generation)
        return True

    def stop(self) -> bool:
        """Cancel the pending run; returns False when already stopped."""
        with self._lock:
            if not self._running:
                return False
            self._running = False
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        return True

    def _current(self, generation: int) -> bool:
        return self._running and generation == self._generation

    def _schedule_next(self, generation: int) -> None:
        if not self._current(generation):
            return
        self._timer = threading.Timer(self._interval_ms / 1000, self._run, args=(generation,))
        self._timer.name = self._name
        self._timer.daemon = True
        self._timer.start()

    def _run(self, generation: int) -> None:
        with self._lock:
            if not self._current(generation):
                return
        try:
            self._callback()
        except Exception:
            logger.exception("%s callback failed", self._name)
        finally:
            with self._lock:
                self._schedule_next(generation)
