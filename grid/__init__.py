"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, CellState
    from grid import GridConfig, InvalidConfiguration
"""

from grid.cell   import Cell, CellState, UNREACHED
from grid.config import GridConfig, Coord
from grid.errors import InvalidConfiguration
from grid.grid   import Grid

__all__ = [
    "Cell",       "CellState",  "UNREACHED",
    "GridConfig", "Coord",
    "InvalidConfiguration",
    "Grid",
]
