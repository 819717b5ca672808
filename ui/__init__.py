"""
ui/
---
Presentation layer.

    from ui import render_grid
    from ui import toolbar, analytics_panel, …
"""

from ui.canvas import render_grid, palette_css, CanvasConfig

from ui.controls import (
    toolbar,
    analytics_panel,
    help_panel,
    legend,
)

__all__ = [
    "render_grid",
    "palette_css",
    "CanvasConfig",
    "toolbar",
    "analytics_panel",
    "help_panel",
    "legend",
]
