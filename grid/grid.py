"""
grid.py — Grid Container
========================
Single source of truth for the board.  The engine reads it, the UI
shell edits it, the renderer draws it.

Responsibilities:
  1. Construction & validation              (create / from_config / reset)
  2. Cell queries                           (cell, in_bounds, neighbours)
  3. Copy-on-write obstacle edits           (toggle_obstacle, randomize)
  4. Reset helpers                          (wipe search state, keep walls)
  5. JSON view for the browser              (to_dict)

Design decisions:
  - Cells live in a list of rows, addressed by (row, col).
  - Editing never mutates an existing Grid.  `toggle_obstacle` copies
    the outer row list and the ONE touched row; every other row object
    is shared with the original.  A grid that is still being animated
    therefore never sees the edit.
  - Source and target are fixed per grid and can never become walls.
"""

import logging
import random
from typing import Iterator, List, Optional, Tuple

from grid.cell import Cell, CellState
from grid.config import Coord, GridConfig
from grid.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# up, down, left, right
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        source     : (row, col) of the start cell.
        target     : (row, col) of the finish cell.
        _cells     : [[Cell, …], …] row-major storage.
    """

    def __init__(self, rows: int, cols: int, source: Coord, target: Coord,
                 cells: Optional[List[List[Cell]]] = None):
        self.rows:   int   = rows
        self.cols:   int   = cols
        self.source: Coord = tuple(source)
        self.target: Coord = tuple(target)
        self._cells: List[List[Cell]] = cells if cells is not None else [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    @classmethod
    def create(cls, rows: int, cols: int, source: Coord, target: Coord) -> "Grid":
        """Validated constructor — every cell empty and unreached."""
        if rows <= 0 or cols <= 0:
            raise InvalidConfiguration(f"Grid dimensions must be positive, got {rows}x{cols}")
        for name, point in (("source", source), ("target", target)):
            if len(point) != 2 or not (0 <= point[0] < rows and 0 <= point[1] < cols):
                raise InvalidConfiguration(f"{name} {tuple(point)} is outside a {rows}x{cols} grid")
        if tuple(source) == tuple(target):
            raise InvalidConfiguration(f"source and target must differ, both are {tuple(source)}")
        return cls(rows, cols, source, target)

    @classmethod
    def from_config(cls, config: GridConfig) -> "Grid":
        return cls.create(config.rows, config.cols, config.source, config.target)

    def reset(self) -> "Grid":
        """Fresh grid: same dimensions and endpoints, no walls."""
        return Grid(self.rows, self.cols, self.source, self.target)

    # ==================================================================
    # QUERIES
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise InvalidConfiguration(f"({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self._cells[row][col]

    def neighbours(self, row: int, col: int) -> Iterator[Cell]:
        """In-bounds 4-neighbours in up / down / left / right order."""
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                yield self._cells[nr][nc]

    def cells(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def is_distinguished(self, row: int, col: int) -> bool:
        return (row, col) == self.source or (row, col) == self.target

    def obstacles(self) -> List[Coord]:
        return [c.coords for c in self.cells() if c.is_obstacle]

    def cell_state(self, row: int, col: int) -> CellState:
        """Static render class (walls and endpoints only — no search overlay)."""
        if (row, col) == self.source:
            return CellState.SOURCE
        if (row, col) == self.target:
            return CellState.TARGET
        if self._cells[row][col].is_obstacle:
            return CellState.OBSTACLE
        return CellState.EMPTY

    # ==================================================================
    # COPY-ON-WRITE EDITS
    # ==================================================================
    def toggle_obstacle(self, row: int, col: int) -> "Grid":
        """
        Return a grid with (row, col)'s wall flag flipped.
        Source / target are left alone and `self` is returned unchanged.
        """
        cell = self.cell(row, col)
        if self.is_distinguished(row, col):
            return self

        new_row = list(self._cells[row])
        new_row[col] = cell.with_obstacle(not cell.is_obstacle)
        new_cells = list(self._cells)
        new_cells[row] = new_row
        return Grid(self.rows, self.cols, self.source, self.target, cells=new_cells)

    def randomize(self, density: float = 0.3, rng: Optional[random.Random] = None) -> "Grid":
        """
        Random maze: start from an empty grid, then wall each
        non-endpoint cell with independent probability `density`.
        """
        if not 0.0 <= density <= 1.0:
            raise InvalidConfiguration(f"Wall density must be within [0, 1], got {density}")
        rng = rng or random.Random()

        fresh = self.reset()
        walls = 0
        for cell in fresh.cells():
            if fresh.is_distinguished(cell.row, cell.col):
                continue
            if rng.random() < density:
                cell.is_obstacle = True
                walls += 1
        logger.info("randomized %sx%s grid: %s walls (density=%s)", self.rows, self.cols, walls, density)
        return fresh

    # ==================================================================
    # RESET (keep walls, wipe search state)
    # ==================================================================
    def reset_search_state(self) -> None:
        for cell in self.cells():
            cell.reset_search_state()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "rows":      self.rows,
            "cols":      self.cols,
            "source":    list(self.source),
            "target":    list(self.target),
            "obstacles": [list(rc) for rc in self.obstacles()],
        }

    # ==================================================================
    # Dunder
    # ==================================================================
    def __repr__(self) -> str:
        return (f"Grid({self.rows}x{self.cols}, source={self.source}, "
                f"target={self.target}, walls={len(self.obstacles())})")
