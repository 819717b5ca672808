"""
canvas.py — HTML Grid Renderer
==============================
Pure rendering function: Grid → HTML string.

Every cell is a <div id="node-<row>-<col>"> whose class comes from
CellState.  The browser repaints single cells by id while a playback
runs, so the static render only carries walls and endpoints.

Design decisions:
  - NO mutation.  The caller passes the grid and gets back a string.
  - Cell size and palette live in CanvasConfig and are emitted as CSS
    custom properties so the page stylesheet stays static.
"""

from typing import Dict

from grid import Grid, CellState


# ---------------------------------------------------------------------------
# Visual Config — palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    cell_size:   int = 22
    cell_border: str = "#30363d"

    # cell colors (state → fill)
    cell_colors: Dict[str, str] = {
        CellState.EMPTY.value:    "#1c2128",   # dark grey
        CellState.SOURCE.value:   "#22c55e",   # green — start
        CellState.TARGET.value:   "#ef4444",   # red — finish
        CellState.OBSTACLE.value: "#0b0f14",   # near-black wall
        CellState.VISITED.value:  "#0ea5e9",   # cyan — explored
        CellState.PATH.value:     "#facc15",   # yellow — shortest path
    }


CONFIG = CanvasConfig()


def palette_css(config: CanvasConfig = CONFIG) -> str:
    rules = [f".{state} {{ background: {color}; }}" for state, color in config.cell_colors.items()]
    # endpoint colors win over the search overlay
    rules.append(f".node.{CellState.SOURCE.value} {{ background: {config.cell_colors[CellState.SOURCE.value]}; }}")
    rules.append(f".node.{CellState.TARGET.value} {{ background: {config.cell_colors[CellState.TARGET.value]}; }}")
    return "\n".join(rules)


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(grid: Grid, config: CanvasConfig = CONFIG) -> str:
    """
    Returns the grid as nested <div> rows.

    Args:
        grid   : The grid to render.
        config : Visual config.
    """
    parts = [
        f'<div id="grid" class="grid-container" data-rows="{grid.rows}" data-cols="{grid.cols}" '
        f'style="--cell-size: {config.cell_size}px; --cell-border: {config.cell_border};">'
    ]
    for r in range(grid.rows):
        parts.append('  <div class="grid-row">')
        for c in range(grid.cols):
            parts.append(_render_cell(grid, r, c))
        parts.append('  </div>')
    parts.append('</div>')
    return "\n".join(parts)


def _render_cell(grid: Grid, row: int, col: int) -> str:
    state = grid.cell_state(row, col)
    classes = "node" if state is CellState.EMPTY else f"node {state.value}"
    return f'    <div id="node-{row}-{col}" class="{classes}" data-row="{row}" data-col="{col}"></div>'
