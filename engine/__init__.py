"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackScheduler, Recorder, Visualizer
"""

from engine.scheduler import (
    SPEED_PRESETS,
    PATH_SLOWDOWN,
    EventKind,
    Emission,
    PlaybackState,
    PlaybackHandle,
    PlaybackScheduler,
    build_timeline,
    delay_for,
)
from engine.recorder import Recorder, RunMetrics
from engine.session  import Visualizer, PlaybackInProgress

__all__ = [
    "SPEED_PRESETS",
    "PATH_SLOWDOWN",
    "EventKind",
    "Emission",
    "PlaybackState",
    "PlaybackHandle",
    "PlaybackScheduler",
    "build_timeline",
    "delay_for",
    "Recorder",
    "RunMetrics",
    "Visualizer",
    "PlaybackInProgress",
]
