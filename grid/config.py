"""
config.py — Grid Configuration
==============================
Dimensions, endpoints and defaults are passed explicitly through
construction.  `GridConfig.from_env()` lets a deployment override them
with PATHVIZ_* environment variables; unparsable values fall back to
the defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

Coord = Tuple[int, int]


@dataclass(frozen=True)
class GridConfig:
    rows:         int   = 20
    cols:         int   = 50
    source:       Coord = (10, 15)
    target:       Coord = (10, 35)
    wall_density: float = 0.3
    speed:        str   = "normal"

    @classmethod
    def from_env(cls) -> "GridConfig":
        default = cls()
        return cls(
            rows=_env_int("PATHVIZ_ROWS", default.rows),
            cols=_env_int("PATHVIZ_COLS", default.cols),
            source=_env_coord("PATHVIZ_SOURCE", default.source),
            target=_env_coord("PATHVIZ_TARGET", default.target),
            wall_density=_env_float("PATHVIZ_WALL_DENSITY", default.wall_density),
            speed=os.getenv("PATHVIZ_SPEED") or default.speed,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (ValueError, TypeError):
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except (ValueError, TypeError):
        return default


def _env_coord(name: str, default: Coord) -> Coord:
    """Parse "row,col"."""
    raw = os.getenv(name)
    parsed = parse_coord(raw) if raw else None
    return parsed if parsed is not None else default


def parse_coord(raw: str) -> Optional[Coord]:
    parts = raw.replace(" ", "").split(",")
    if len(parts) != 2:
        return None
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        return None
