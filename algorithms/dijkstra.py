"""
dijkstra.py — Uniform-Cost Grid Search
======================================
Dijkstra specialised for a 4-connected grid with unit edge weights.

`dijkstra()` is a generator that yields a Step every time a cell is
FINALISED, i.e. popped with its minimal distance.  `search()` drains
it and reconstructs the path from the predecessor links.

Frontier:
  min-heap of (distance, discovery_seq, row, col).  Ties between equal
  distances go to the cell discovered first, so repeated runs over the
  same grid produce identical visit orders.

Run state:
  dist / parent / visited live in dicts local to one run.  Grid copies
  share untouched Cell objects, so the cells only receive the final
  state once the run completes.  Two runs, even interleaved ones over
  sibling grids, never see each other's progress.

Walls are absent edges: they are never pushed, never popped.
"""

import heapq
import logging
from typing import Dict, Generator, List, Optional, Set, Tuple

from grid import Coord, Grid, InvalidConfiguration
from algorithms.step import SearchResult, Step

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode (help panel)
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, source, target):",          # 0
    "    dist ← {cell: ∞ for cell in grid}",        # 1
    "    dist[source] ← 0",                         # 2
    "    pq ← [(0, source)]",                       # 3
    "    while pq is not empty:",                   # 4
    "        (d, cell) ← pq.pop_min()",             # 5
    "        if cell is visited: continue",         # 6
    "        mark cell visited",                    # 7
    "        if cell == target: return path",       # 8
    "        for nbr in up/down/left/right(cell):", # 9
    "            if nbr is wall: continue",         # 10
    "            if d + 1 < dist[nbr]:",            # 11
    "                dist[nbr] ← d + 1",            # 12
    "                prev[nbr] ← cell",             # 13
    "                pq.push((d + 1, nbr))",        # 14
    "    return NOT FOUND",                         # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    grid: Grid,
    source: Coord,
    target: Coord,
    parent: Optional[Dict[Coord, Coord]] = None,
) -> Generator[Step, None, None]:
    """
    Yield one Step per finalised cell, stop after the target.

    `parent`, when given, is filled with this run's predecessor links.
    """
    INF = float("inf")

    # initialise
    if parent is None:
        parent = {}
    dist:    Dict[Coord, float] = {source: 0}
    visited: Set[Coord]         = set()

    seq = 0
    pq: List[Tuple[float, int, int, int]] = [(0, seq, source[0], source[1])]
    order = 0

    while pq:
        d, _, row, col = heapq.heappop(pq)

        # stale entry
        if (row, col) in visited:
            continue

        visited.add((row, col))
        yield Step(row=row, col=col, distance=d, order=order)
        order += 1

        if (row, col) == target:
            break

        # relax neighbours
        for nbr in grid.neighbours(row, col):
            key = nbr.coords
            if nbr.is_obstacle or key in visited:
                continue
            new_dist = d + 1
            if new_dist < dist.get(key, INF):
                dist[key]   = new_dist
                parent[key] = (row, col)
                seq += 1
                heapq.heappush(pq, (new_dist, seq, nbr.row, nbr.col))

    _publish(grid, dist, parent, visited)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def search(
    grid: Grid,
    source: Optional[Coord] = None,
    target: Optional[Coord] = None,
) -> SearchResult:
    """
    Run the search and return (visited_order, path_order).

    Endpoints default to the grid's own.  Malformed, out-of-bounds,
    coincident or walled endpoints raise InvalidConfiguration; an
    unreachable target just yields an empty path.
    """
    source = _coord("source", source if source is not None else grid.source)
    target = _coord("target", target if target is not None else grid.target)
    _check_endpoints(grid, source, target)

    parent: Dict[Coord, Coord] = {}
    visited = tuple(dijkstra(grid, source, target, parent))
    reached = bool(visited) and visited[-1].coords == target
    path = _reconstruct(parent, source, target) if reached else ()

    logger.debug(
        "search %s -> %s: visited=%s path_edges=%s",
        source, target, len(visited), len(path) - 1 if path else None,
    )
    return SearchResult(source=source, target=target, visited_order=visited, path_order=path)


# ---------------------------------------------------------------------------
def _coord(name: str, point) -> Coord:
    try:
        row, col = point
        return (int(row), int(col))
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{name} must be a (row, col) pair, got {point!r}") from None


def _check_endpoints(grid: Grid, source: Coord, target: Coord) -> None:
    for name, (r, c) in (("source", source), ("target", target)):
        if not grid.in_bounds(r, c):
            raise InvalidConfiguration(f"{name} ({r}, {c}) is outside a {grid.rows}x{grid.cols} grid")
        if grid.cell(r, c).is_obstacle:
            raise InvalidConfiguration(f"{name} ({r}, {c}) is a wall")
    if source == target:
        raise InvalidConfiguration(f"source and target must differ, both are {source}")


def _publish(grid: Grid, dist: Dict[Coord, float], parent: Dict[Coord, Coord], visited: Set[Coord]) -> None:
    """Copy a completed run's state onto the grid's cells."""
    grid.reset_search_state()
    for (r, c), d in dist.items():
        cell = grid.cell(r, c)
        cell.distance    = d
        cell.visited     = (r, c) in visited
        cell.predecessor = parent.get((r, c))


def _reconstruct(parent: Dict[Coord, Coord], source: Coord, target: Coord) -> Tuple[Step, ...]:
    chain, cur = [target], target
    while cur != source:
        cur = parent[cur]
        chain.append(cur)
    chain.reverse()
    return tuple(Step(row=r, col=c, distance=i, order=i) for i, (r, c) in enumerate(chain))
