"""
cell.py — Grid Cell
===================
One addressable grid position.  Carries the obstacle flag (owned by the
user / UI shell) and the result fields of the last completed search
(written by the engine once a run ends).

Design decisions:
  - `predecessor` is a (row, col) index into the SAME grid, not a Cell
    reference.  Predecessors form a tree rooted at the source and never
    cross grid instances.
  - Cells are copied, never mutated, when an obstacle is toggled, so a
    grid snapshot that is still being animated keeps its own cells.
"""

from enum import Enum
from typing import Optional, Tuple

UNREACHED = float("inf")


# ---------------------------------------------------------------------------
# Cell State Enum — maps 1-to-1 with the CSS classes of the grid
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY    = "node"
    SOURCE   = "node-start"
    TARGET   = "node-finish"
    OBSTACLE = "node-wall"
    VISITED  = "node-visited"
    PATH     = "node-shortest-path"


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Attributes:
        row, col    : Position in the grid (immutable identity).
        is_obstacle : User-placed wall.  Read-only to the engine.
        distance    : Best-known edge count from the source (UNREACHED = inf).
        visited     : True once the engine has finalised this cell.
        predecessor : (row, col) of the previous cell on the best path.
    """

    __slots__ = ("row", "col", "is_obstacle", "distance", "visited", "predecessor")

    def __init__(self, row: int, col: int, is_obstacle: bool = False):
        self.row: int          = row
        self.col: int          = col
        self.is_obstacle: bool = is_obstacle
        self.distance: float   = UNREACHED
        self.visited: bool     = False
        self.predecessor: Optional[Tuple[int, int]] = None

    # ------------------------------------------------------------------
    # Search-state helpers
    # ------------------------------------------------------------------
    def reset_search_state(self) -> None:
        """Wipe engine scratch fields, keep the obstacle flag."""
        self.distance    = UNREACHED
        self.visited     = False
        self.predecessor = None

    @property
    def reached(self) -> bool:
        return self.distance != UNREACHED

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def with_obstacle(self, is_obstacle: bool) -> "Cell":
        """Fresh copy with a different obstacle flag and clean search state."""
        return Cell(self.row, self.col, is_obstacle=is_obstacle)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        wall = ", wall" if self.is_obstacle else ""
        return f"Cell({self.row}, {self.col}{wall}, dist={self.distance})"
