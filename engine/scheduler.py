"""
scheduler.py — Time-Sliced Playback
===================================
Turns a finished SearchResult into an animation: a queue of emissions,
each due at a fixed offset on one logical clock.

Timeline (delay = SPEED_PRESETS[rate], milliseconds):
    visited(cell_i)  at  i * delay
    on_path(cell_j)  at  len(visited) * delay  +  j * delay * PATH_SLOWDOWN
    finished         with the last on_path (or at the path-phase start
                     when there is no path)

State machine (per handle):
    play()  →  PLAYING
    PLAYING →  (finished fired) → FINISHED
    PLAYING →  cancel() / play() again → CANCELLED

Nothing fires on its own.  The owner calls tick() from its event loop
(the browser's poll request, in the web app); tick() fires everything
that is due and returns.  play() never blocks.

Cancellation:
  Every play() / cancel() bumps `epoch` and empties the queue.  Each
  emission also carries the epoch it was scheduled under, and tick()
  drops any whose epoch is no longer current.  Already-fired emissions
  are not rolled back.

Thread safety:
  This class is NOT thread-safe.  The Visualizer serialises access.
"""

import heapq
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from grid import InvalidConfiguration
from algorithms.step import Step

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per exploration step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "fast":   5,
    "normal": 10,
    "slow":   20,
}

# the path phase runs this many times slower than exploration
PATH_SLOWDOWN = 5


def delay_for(rate: str) -> int:
    try:
        return SPEED_PRESETS[rate]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown speed preset {rate!r}; expected one of {sorted(SPEED_PRESETS)}"
        ) from None


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


# ---------------------------------------------------------------------------
# Emissions
# ---------------------------------------------------------------------------
class EventKind(Enum):
    VISITED  = "visited"
    ON_PATH  = "on_path"
    FINISHED = "finished"


@dataclass(frozen=True)
class Emission:
    """
    Attributes:
        at    : Offset (ms) from playback start.
        seq   : Position in the timeline; breaks ties between equal offsets.
        kind  : EventKind.
        row   : Cell row (None for FINISHED).
        col   : Cell column (None for FINISHED).
        epoch : Scheduler epoch this emission belongs to.
    """

    at:    float
    seq:   int
    kind:  EventKind
    row:   Optional[int] = None
    col:   Optional[int] = None
    epoch: int           = 0

    def to_dict(self) -> dict:
        return {"at": self.at, "kind": self.kind.value, "row": self.row, "col": self.col}


def build_timeline(
    visited_order: Sequence[Step],
    path_order: Sequence[Step],
    delay: float,
    epoch: int = 0,
) -> List[Emission]:
    """Pure: lay out both phases on offsets relative to playback start."""
    timeline: List[Emission] = []

    for i, step in enumerate(visited_order):
        timeline.append(Emission(i * delay, len(timeline), EventKind.VISITED, step.row, step.col, epoch))

    # path phase starts one slot after the last exploration emission
    path_start = len(visited_order) * delay
    path_delay = delay * PATH_SLOWDOWN
    last_at = path_start
    for j, step in enumerate(path_order):
        last_at = path_start + j * path_delay
        timeline.append(Emission(last_at, len(timeline), EventKind.ON_PATH, step.row, step.col, epoch))

    timeline.append(Emission(last_at, len(timeline), EventKind.FINISHED, epoch=epoch))
    return timeline


# ---------------------------------------------------------------------------
# Handle
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    PLAYING   = "playing"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


class PlaybackHandle:
    """
    Returned by play().  The caller polls it (`fired`, `events_since`,
    `is_finished`) or registers a done-callback.
    """

    def __init__(self, epoch: int, rate: str, delay: float, timeline: List[Emission], started_at: float):
        self.epoch:      int           = epoch
        self.rate:       str           = rate
        self.delay:      float         = delay
        self.timeline:   List[Emission] = timeline
        self.started_at: float         = started_at
        self.state:      PlaybackState = PlaybackState.PLAYING
        self.fired:      List[Emission] = []
        self._callbacks: List[Callable[["PlaybackHandle"], None]] = []

    @property
    def duration(self) -> float:
        """Offset (ms) of the `finished` emission."""
        return self.timeline[-1].at

    @property
    def is_finished(self) -> bool:
        return self.state == PlaybackState.FINISHED

    @property
    def is_cancelled(self) -> bool:
        return self.state == PlaybackState.CANCELLED

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    def events_since(self, cursor: int) -> List[Emission]:
        return self.fired[max(cursor, 0):]

    def add_done_callback(self, fn: Callable[["PlaybackHandle"], None]) -> None:
        """fn(handle) runs once when `finished` fires (immediately if it already has)."""
        if self.is_finished:
            fn(self)
        else:
            self._callbacks.append(fn)

    # -- internal --
    def _record(self, emission: Emission) -> None:
        self.fired.append(emission)
        if emission.kind is EventKind.FINISHED:
            self.state = PlaybackState.FINISHED
            callbacks, self._callbacks = self._callbacks, []
            for fn in callbacks:
                fn(self)

    def _cancel(self) -> None:
        if self.state == PlaybackState.PLAYING:
            self.state = PlaybackState.CANCELLED
            self._callbacks = []

    def __repr__(self) -> str:
        return (f"PlaybackHandle(epoch={self.epoch}, rate={self.rate}, state={self.state.value}, "
                f"fired={len(self.fired)}/{len(self.timeline)})")


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------
class PlaybackScheduler:
    """
    Attributes:
        epoch    : Generation counter; bumped by play() and cancel().
        active   : Handle of the most recent playback (or None).
        clock    : Zero-arg callable returning the current time in ms.
        on_event : Optional callback(Emission) fired for every emission.
                   The UI hooks its re-render here.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        on_event: Optional[Callable[[Emission], None]] = None,
    ):
        self.clock:    Callable[[], float] = clock or _monotonic_ms
        self.on_event: Optional[Callable[[Emission], None]] = on_event
        self.epoch:    int                      = 0
        self.active:   Optional[PlaybackHandle] = None
        # min-heap: (due_ms, push_counter, emission)
        self._queue:   List[Tuple[float, int, Emission]] = []
        self._pushed:  int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def play(
        self,
        visited_order: Sequence[Step],
        path_order: Sequence[Step],
        rate: str = "normal",
    ) -> PlaybackHandle:
        """Schedule both phases and return immediately."""
        delay = delay_for(rate)
        self._supersede()

        now = self.clock()
        timeline = build_timeline(visited_order, path_order, delay, self.epoch)
        for emission in timeline:
            heapq.heappush(self._queue, (now + emission.at, self._pushed, emission))
            self._pushed += 1

        self.active = PlaybackHandle(self.epoch, rate, delay, timeline, started_at=now)
        logger.info(
            "playback epoch=%s started: %s visited, %s on path, rate=%s, duration=%sms",
            self.epoch, len(visited_order), len(path_order), rate, self.active.duration,
        )
        return self.active

    def cancel(self) -> None:
        """Invalidate every pending emission of the current playback."""
        if self.active is not None and self.active.is_playing:
            logger.info("playback epoch=%s cancelled after %s emissions", self.epoch, len(self.active.fired))
        self._supersede()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> List[Emission]:
        """Fire every emission due at or before `now`, in timeline order."""
        now = self.clock() if now is None else now
        fired: List[Emission] = []

        while self._queue and self._queue[0][0] <= now:
            _, _, emission = heapq.heappop(self._queue)
            if emission.epoch != self.epoch or self.active is None:
                logger.debug("dropping stale emission from epoch %s", emission.epoch)
                continue
            self.active._record(emission)
            fired.append(emission)
            if self.on_event:
                self.on_event(emission)
        return fired

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def pending(self) -> int:
        """Emissions still queued for the current epoch."""
        return sum(1 for _, _, e in self._queue if e.epoch == self.epoch)

    @property
    def is_playing(self) -> bool:
        return self.active is not None and self.active.is_playing

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _supersede(self) -> None:
        if self.active is not None:
            self.active._cancel()
        self.epoch += 1
        self._queue = []
