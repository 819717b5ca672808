"""
step.py — Search Snapshots
==========================
The search generator yields one Step per finalised cell.  A Step is a
frozen-in-time picture of that cell: where it is, the distance it was
finalised with and its position in the sequence.

SearchResult bundles the two ordered sequences the playback layer
consumes:

    • visited_order – every finalised cell, in finalisation order
    • path_order    – source → target inclusive (empty if unreachable)

Design decisions:
  - Both are frozen dataclasses holding tuples.  They are SNAPSHOTS:
    the grid's cells may be reused by the next run, a result never
    changes after it is built.
  - Steps carry coordinates, not Cell references, so a result never
    aliases a grid.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        row, col : Cell position.
        distance : Finalised edge count from the source.
        order    : 0-based index of this step in its sequence.
    """

    row:      int
    col:      int
    distance: float = 0
    order:    int   = 0

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class SearchResult:
    source:        Tuple[int, int]
    target:        Tuple[int, int]
    visited_order: Tuple[Step, ...] = ()
    path_order:    Tuple[Step, ...] = ()

    @property
    def path_found(self) -> bool:
        return bool(self.path_order)

    @property
    def visited_count(self) -> int:
        return len(self.visited_order)

    @property
    def path_length(self) -> Optional[int]:
        """Number of edges on the path, None if the target is unreachable."""
        if not self.path_order:
            return None
        return len(self.path_order) - 1
