"""
session.py — Visualizer Controller
==================================
The Visualizer is the ONLY object the web layer talks to.  It owns one
grid, one playback scheduler, the selected speed and the metrics of the
last completed run, i.e. everything one browser surface displays.

Rules:
  - Only one playback at a time: run() is rejected while the previous
    playback has not fired `finished`.
  - reset() / randomize() cancel an in-flight playback; its remaining
    emissions are dropped.
  - toggle() is allowed while animating.  Edits are copy-on-write, so
    the playback keeps replaying the result it was started with.

Thread safety:
  Flask serves requests on several threads, so every public method
  takes `_lock`.
"""

import logging
import random
import threading
from typing import Any, Callable, Dict, Optional

from grid import Grid, GridConfig
from engine.recorder import Recorder, RunMetrics
from engine.scheduler import SPEED_PRESETS, PlaybackHandle, PlaybackScheduler, delay_for

logger = logging.getLogger(__name__)


class PlaybackInProgress(RuntimeError):
    """A run was requested while the previous playback is still animating."""


class Visualizer:
    """
    Attributes:
        config       : GridConfig the grid was built from.
        grid         : Current grid snapshot (replaced on every edit).
        speed        : Selected speed preset name.
        scheduler    : PlaybackScheduler driving the animation.
        last_metrics : RunMetrics of the last run whose playback finished.
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config:       GridConfig          = config or GridConfig()
        self.grid:         Grid                = Grid.from_config(self.config)
        self.speed:        str                 = self.config.speed
        self.scheduler:    PlaybackScheduler   = PlaybackScheduler(clock=clock)
        self.last_metrics: Optional[RunMetrics] = None
        self._rng:         random.Random        = rng or random.Random()
        self._lock = threading.RLock()
        delay_for(self.speed)

    # ------------------------------------------------------------------
    # Grid edits
    # ------------------------------------------------------------------
    def toggle(self, row: int, col: int) -> Grid:
        with self._lock:
            self.grid = self.grid.toggle_obstacle(row, col)
            return self.grid

    def reset(self) -> Grid:
        with self._lock:
            self.scheduler.cancel()
            self.grid = self.grid.reset()
            self.last_metrics = None
            logger.info("grid reset")
            return self.grid

    def randomize(self, density: Optional[float] = None) -> Grid:
        with self._lock:
            density = self.config.wall_density if density is None else density
            new_grid = self.grid.randomize(density, rng=self._rng)
            self.scheduler.cancel()
            self.grid = new_grid
            self.last_metrics = None
            return self.grid

    def set_speed(self, name: str) -> str:
        with self._lock:
            delay_for(name)
            if self._running():
                raise PlaybackInProgress("Cannot change speed while a playback is running")
            self.speed = name
            return self.speed

    # ------------------------------------------------------------------
    # Run + playback
    # ------------------------------------------------------------------
    def run(self) -> PlaybackHandle:
        with self._lock:
            if self._running():
                raise PlaybackInProgress("A playback is already running")

            rec = Recorder()
            metrics = rec.run(self.grid)
            self.last_metrics = None
            logger.info(
                "search finished in %sms: visited=%s path_edges=%s",
                metrics.wall_time_ms, metrics.visited_count, metrics.path_length,
            )

            handle = self.scheduler.play(rec.result.visited_order, rec.result.path_order, self.speed)
            handle.add_done_callback(lambda h: self._on_finished(h, metrics))
            return handle

    def poll(self, cursor: int = 0) -> Dict[str, Any]:
        """Fire whatever is due and report events the caller has not seen."""
        with self._lock:
            self.scheduler.tick()
            handle = self.scheduler.active
            if handle is not None and handle.is_cancelled:
                handle = None
            events = handle.events_since(cursor) if handle else []
            return {
                "epoch":    self.scheduler.epoch,
                "cursor":   len(handle.fired) if handle else 0,
                "events":   [e.to_dict() for e in events],
                "running":  self._running(),
                "finished": bool(handle and handle.is_finished),
                "metrics":  self.last_metrics.to_dict() if self.last_metrics else None,
            }

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running()

    @property
    def speeds(self):
        return list(SPEED_PRESETS)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _running(self) -> bool:
        self.scheduler.tick()
        return self.scheduler.is_playing

    def _on_finished(self, handle: PlaybackHandle, metrics: RunMetrics) -> None:
        if handle.epoch != self.scheduler.epoch:
            return
        self.last_metrics = metrics
        logger.info("playback epoch=%s finished", handle.epoch)
