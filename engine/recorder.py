"""
recorder.py — Run Recorder & Analytics
========================================
Runs one search, times it, and computes the metrics the Analytics panel
shows once the playback has finished.

Usage:
    rec = Recorder()
    metrics = rec.run(grid)          # synchronous search, timed
    rec.result.visited_order         # feed these to the scheduler
    rec.result.path_order
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from grid import Grid
from algorithms import SearchResult, search


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    source:        Tuple[int, int] = (0, 0)
    target:        Tuple[int, int] = (0, 0)
    visited_count: int             = 0
    path_length:   Optional[int]   = None   # edges on the path, None when unreachable
    path_found:    bool            = False
    wall_time_ms:  float           = 0.0    # wall-clock time of the search call

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["source"] = list(self.source)
        data["target"] = list(self.target)
        return data


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : SearchResult of the last run (None before the first).
        metrics : RunMetrics of the last run.
    """

    def __init__(self):
        self.result:  Optional[SearchResult] = None
        self.metrics: Optional[RunMetrics]   = None

    def run(self, grid: Grid) -> RunMetrics:
        start = time.perf_counter()
        result = search(grid)
        wall_ms = (time.perf_counter() - start) * 1000

        self.result = result
        self.metrics = RunMetrics(
            source=result.source,
            target=result.target,
            visited_count=result.visited_count,
            path_length=result.path_length,
            path_found=result.path_found,
            wall_time_ms=round(wall_ms, 2),
        )
        return self.metrics
