"""
algorithms/
-----------
Shortest-path engine.

    from algorithms import search, SearchResult, Step

`search(grid)` is synchronous and reentrant: it keeps no state between
calls apart from the scratch fields it resets on the grid's cells.
"""

from algorithms.step     import Step, SearchResult
from algorithms.dijkstra import dijkstra, search, PSEUDOCODE

__all__ = [
    "Step",
    "SearchResult",
    "dijkstra",
    "search",
    "PSEUDOCODE",
]
