"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • toolbar            – speed selector + Random Maze / Visualize / Reset
  • analytics_panel    – path length, cells explored, execution time
  • help_panel         – how Dijkstra works, with pseudocode
  • legend             – color key

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from engine import RunMetrics
from ui.canvas import CanvasConfig, CONFIG

SPEED_LABELS = {
    "fast":   "Fast",
    "normal": "Normal",
    "slow":   "Slow",
}


# ---------------------------------------------------------------------------
# Toolbar
# ---------------------------------------------------------------------------
def toolbar(speed: str = "normal", speeds: Optional[List[str]] = None, running: bool = False) -> str:
    speeds = speeds or list(SPEED_LABELS)
    disabled = "disabled" if running else ""
    options = "".join(
        f'<option value="{s}" {"selected" if s == speed else ""}>{SPEED_LABELS.get(s, s.title())}</option>'
        for s in speeds
    )
    return f"""
    <div class="panel toolbar">
      <label for="speed-selector">Speed:</label>
      <select id="speed-selector" {disabled}>{options}</select>
      <button id="btn-help" class="btn-secondary" title="Show help">❔ Help</button>
      <button id="btn-random" class="btn-maze" {disabled}>🔀 Random Maze</button>
      <button id="btn-run" class="btn-primary" {disabled}>▶ Visualize Path</button>
      <button id="btn-reset" class="btn-secondary" {disabled}>⟲ Reset Grid</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel" id="analytics">
          <h3>📊 Path Analysis</h3>
          <p class="placeholder">Visualize a path to see metrics.</p>
        </div>
        """

    if metrics.path_found:
        path_row = f"<tr><td>Shortest path length:</td><td><strong>{metrics.path_length} steps</strong></td></tr>"
    else:
        path_row = "<tr><td>Shortest path length:</td><td><strong>❌ Unreachable</strong></td></tr>"

    return f"""
    <div class="panel analytics-panel" id="analytics">
      <h3>📊 Path Analysis</h3>
      <table>
        {path_row}
        <tr><td>Nodes explored:</td><td><strong>{metrics.visited_count}</strong></td></tr>
        <tr><td>Algorithm execution time:</td><td><strong>{metrics.wall_time_ms:.2f}ms</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Help Panel
# ---------------------------------------------------------------------------
def help_panel(pseudocode_lines: List[str], show: bool = False) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        # Escape HTML entities
        line_escaped = line.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
        lines_html.append(f'<div class="code-line" data-line="{i}">{line_escaped}</div>')

    style = "" if show else ' style="display: none;"'
    return f"""
    <div class="panel help-panel" id="help"{style}>
      <h3>ℹ️ About Dijkstra's Algorithm</h3>
      <p>Dijkstra's algorithm finds the shortest path between two cells. It keeps
         every unvisited cell at its best-known distance from the start and always
         finalises the closest one next.</p>
      <ul>
        <li>Starts from the source with distance 0, every other cell at infinity</li>
        <li>Visits the unvisited cell with the smallest distance</li>
        <li>Updates the distances of its up / down / left / right neighbours</li>
        <li>Repeats until it reaches the target</li>
      </ul>
      <div class="code-block">
        {''.join(lines_html)}
      </div>
      <ul>
        <li>Click and drag to draw walls</li>
        <li>Use "Random Maze" to generate obstacles</li>
        <li>Adjust visualization speed</li>
      </ul>
    </div>
    """


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def legend(config: CanvasConfig = CONFIG) -> str:
    items = [
        ("node-start", "Start Node"),
        ("node-finish", "Target Node"),
        ("node-wall", "Wall"),
        ("node-visited", "Explored"),
        ("node-shortest-path", "Shortest Path"),
    ]
    entries = "".join(
        f'<div class="legend-item"><span class="swatch" '
        f'style="background: {config.cell_colors[key]};"></span>{label}</div>'
        for key, label in items
    )
    return f"""
    <div class="panel legend">
      <h3>Legend</h3>
      <div class="legend-grid">{entries}</div>
    </div>
    """
