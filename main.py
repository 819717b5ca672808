"""
main.py — Pathfinding Visualizer Flask App
==========================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/grid               – current grid (JSON)
  POST /api/grid/toggle        – flip a wall at {row, col}
  POST /api/grid/reset         – fresh grid, cancels playback
  POST /api/grid/randomize     – random maze, cancels playback
  POST /api/config/speed       – select a speed preset
  POST /api/run                – search + start playback
  GET  /api/playback           – events fired since ?cursor=N

State management:
  One Visualizer per app instance, kept in app.extensions.  It holds
  the grid, the playback scheduler, the selected speed and the metrics
  of the last run.  The browser drives the playback clock by polling
  /api/playback; every poll fires whatever emissions are due.

Running:
  python main.py  or  flask --app main:create_app run
  The app is only built on demand, so PATHVIZ_* settings are read then.
"""

from flask import Flask, render_template_string, request, jsonify, current_app
import logging
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from grid import GridConfig, InvalidConfiguration
from algorithms import PSEUDOCODE
from engine import Visualizer, PlaybackInProgress
from ui import (
    render_grid,
    palette_css,
    toolbar,
    analytics_panel,
    help_panel,
    legend,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config=None, visualizer=None):
    """
    Build the Flask app.  `config` defaults to GridConfig.from_env();
    tests may pass a ready-made Visualizer (e.g. with a fake clock).
    """
    app = Flask(__name__)
    config = config or GridConfig.from_env()
    app.extensions["visualizer"] = visualizer or Visualizer(config)

    app.register_error_handler(InvalidConfiguration, _bad_request)
    app.register_error_handler(PlaybackInProgress, _conflict)

    app.add_url_rule("/", "index", index)
    app.add_url_rule("/api/grid", "api_grid", api_grid, methods=["GET"])
    app.add_url_rule("/api/grid/toggle", "api_grid_toggle", api_grid_toggle, methods=["POST"])
    app.add_url_rule("/api/grid/reset", "api_grid_reset", api_grid_reset, methods=["POST"])
    app.add_url_rule("/api/grid/randomize", "api_grid_randomize", api_grid_randomize, methods=["POST"])
    app.add_url_rule("/api/config/speed", "api_config_speed", api_config_speed, methods=["POST"])
    app.add_url_rule("/api/run", "api_run", api_run, methods=["POST"])
    app.add_url_rule("/api/playback", "api_playback", api_playback, methods=["GET"])
    return app


def get_visualizer() -> Visualizer:
    return current_app.extensions["visualizer"]


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _int_field(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError):
        raise InvalidConfiguration(f"'{key}' must be an integer") from None


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
def _bad_request(err):
    return jsonify({"error": str(err)}), 400


def _conflict(err):
    return jsonify({"error": str(err)}), 409


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
def index():
    viz = get_visualizer()
    running = viz.is_running

    html = render_template_string(INDEX_TEMPLATE,
        palette=palette_css(),
        grid=render_grid(viz.grid),
        toolbar=toolbar(speed=viz.speed, speeds=viz.speeds, running=running),
        analytics=analytics_panel(viz.last_metrics),
        help=help_panel(PSEUDOCODE),
        legend=legend(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Grid
# ---------------------------------------------------------------------------
def api_grid():
    return jsonify(get_visualizer().grid.to_dict())


def api_grid_toggle():
    data = _payload()
    row, col = _int_field(data, "row"), _int_field(data, "col")
    grid = get_visualizer().toggle(row, col)
    return jsonify({
        "row":   row,
        "col":   col,
        "state": grid.cell_state(row, col).value,
    })


def api_grid_reset():
    viz = get_visualizer()
    grid = viz.reset()
    return jsonify({"grid": render_grid(grid), "analytics": analytics_panel(None), "epoch": viz.scheduler.epoch})


def api_grid_randomize():
    data = _payload()
    density = data.get("density")
    if density is not None:
        try:
            density = float(density)
        except (TypeError, ValueError):
            raise InvalidConfiguration("'density' must be a number") from None
    viz = get_visualizer()
    grid = viz.randomize(density)
    return jsonify({"grid": render_grid(grid), "analytics": analytics_panel(None), "epoch": viz.scheduler.epoch})


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
def api_config_speed():
    speed = _payload().get("speed", "normal")
    return jsonify({"speed": get_visualizer().set_speed(speed)})


# ---------------------------------------------------------------------------
# API: Run + Playback
# ---------------------------------------------------------------------------
def api_run():
    viz = get_visualizer()
    handle = viz.run()
    return jsonify({
        "epoch":    handle.epoch,
        "speed":    handle.rate,
        "duration": handle.duration,
        "grid":     render_grid(viz.grid),
    }), 202


def api_playback():
    cursor = request.args.get("cursor", 0, type=int)
    viz = get_visualizer()
    state = viz.poll(cursor)
    if state["finished"]:
        state["analytics"] = analytics_panel(viz.last_metrics)
    return jsonify(state)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Pathfinding Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-purple: #a855f7;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      padding: 24px;
    }

    h1 { font-size: 22px; margin-bottom: 16px; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 12px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    .toolbar { display: flex; align-items: center; gap: 10px; }
    .toolbar label { color: var(--text-secondary); font-size: 13px; }

    button, select {
      padding: 8px 14px;
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      background: var(--bg-dark);
      font-size: 13px;
      cursor: pointer;
    }
    button:disabled, select:disabled { opacity: 0.5; cursor: not-allowed; }
    .btn-primary { background: linear-gradient(135deg, var(--accent-cyan), #0284c7); }
    .btn-maze    { background: linear-gradient(135deg, var(--accent-purple), #7e22ce); }

    .grid-container { display: inline-block; user-select: none; }
    .grid-row { display: flex; }
    .node {
      width: var(--cell-size);
      height: var(--cell-size);
      border: 1px solid var(--cell-border);
    }
    {{ palette|safe }}
    .node-visited { animation: visited 0.6s ease-out; }
    .node-shortest-path { animation: on-path 0.6s ease-out; }
    @keyframes visited { 0% { transform: scale(0.3); border-radius: 50%; } 100% { transform: scale(1); } }
    @keyframes on-path { 0% { transform: scale(0.6); } 50% { transform: scale(1.2); } 100% { transform: scale(1); } }

    .code-block {
      background: var(--bg-darker);
      border-radius: 8px;
      padding: 12px;
      margin: 12px 0;
      font-family: 'JetBrains Mono', 'Courier New', monospace;
      font-size: 13px;
    }
    .help-panel ul { margin-left: 20px; color: var(--text-secondary); line-height: 1.7; }
    .analytics-panel td { padding: 4px 12px 4px 0; color: var(--text-secondary); }
    .placeholder { color: var(--text-secondary); font-size: 13px; }
    .legend-grid { display: flex; gap: 18px; }
    .legend-item { display: flex; align-items: center; gap: 8px; font-size: 13px; }
    .swatch { width: 18px; height: 18px; border-radius: 4px; display: inline-block; }
  </style>
</head>
<body>
  <h1>🧭 Pathfinding Visualizer</h1>
  {{ toolbar|safe }}
  {{ help|safe }}
  <div class="panel" id="grid-panel">{{ grid|safe }}</div>
  <div id="analytics-container">{{ analytics|safe }}</div>
  {{ legend|safe }}

  <script>
    let mousePressed = false;
    let cursor = 0;
    let epoch = null;
    let pollTimer = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function setRunning(running) {
      ['btn-run', 'btn-reset', 'btn-random', 'speed-selector'].forEach(id => {
        document.getElementById(id).disabled = running;
      });
    }

    function replaceGrid(html) {
      document.getElementById('grid-panel').innerHTML = html;
      bindGrid();
    }

    function stopPolling() {
      if (pollTimer) clearInterval(pollTimer);
      pollTimer = null;
    }

    // Wall drawing
    async function toggle(cell) {
      const data = await post('/api/grid/toggle', {row: +cell.dataset.row, col: +cell.dataset.col});
      if (data.state) cell.className = data.state === 'node' ? 'node' : 'node ' + data.state;
    }

    function bindGrid() {
      document.querySelectorAll('#grid .node').forEach(cell => {
        cell.addEventListener('mousedown', () => { mousePressed = true; toggle(cell); });
        cell.addEventListener('mouseenter', () => { if (mousePressed) toggle(cell); });
        cell.addEventListener('mouseup', () => { mousePressed = false; });
        cell.addEventListener('dragstart', e => e.preventDefault());
      });
    }
    document.addEventListener('mouseup', () => { mousePressed = false; });

    // Playback
    async function poll() {
      const res = await fetch('/api/playback?cursor=' + cursor);
      const data = await res.json();
      if (data.epoch !== epoch) { stopPolling(); return; }
      for (const ev of data.events) {
        if (ev.kind === 'finished') continue;
        const cell = document.getElementById(`node-${ev.row}-${ev.col}`);
        if (!cell) continue;
        cell.classList.add(ev.kind === 'visited' ? 'node-visited' : 'node-shortest-path');
      }
      cursor = data.cursor;
      if (data.finished) {
        stopPolling();
        setRunning(false);
        if (data.analytics) document.getElementById('analytics-container').innerHTML = data.analytics;
      }
    }

    document.getElementById('btn-run').addEventListener('click', async () => {
      const data = await post('/api/run', {});
      if (data.error) { alert(data.error); return; }
      replaceGrid(data.grid);
      setRunning(true);
      epoch = data.epoch;
      cursor = 0;
      stopPolling();
      pollTimer = setInterval(poll, 16);
    });

    document.getElementById('btn-reset').addEventListener('click', async () => {
      const data = await post('/api/grid/reset', {});
      stopPolling();
      epoch = data.epoch;
      replaceGrid(data.grid);
      document.getElementById('analytics-container').innerHTML = data.analytics;
    });

    document.getElementById('btn-random').addEventListener('click', async () => {
      const data = await post('/api/grid/randomize', {});
      stopPolling();
      epoch = data.epoch;
      replaceGrid(data.grid);
      document.getElementById('analytics-container').innerHTML = data.analytics;
    });

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    document.getElementById('btn-help').addEventListener('click', () => {
      const help = document.getElementById('help');
      help.style.display = help.style.display === 'none' ? 'block' : 'none';
    });

    bindGrid();
  </script>
</body>
</html>
"""


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Pathfinding Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    create_app().run(debug=True, host="0.0.0.0", port=5000)
