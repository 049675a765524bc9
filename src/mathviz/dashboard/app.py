"""Dash application: syllabus sidebar plus the active module's view.

Launch: mathviz-dashboard   (or: python -m mathviz.dashboard.app)
Runs on port 8050.
"""

from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Dash

from mathviz.bootstrap import create_context
from mathviz.config import get_config
from mathviz.dashboard.callbacks import register_callbacks
from mathviz.dashboard.layout import create_layout
from mathviz.observability import setup_logging
from mathviz.session import AppContext


def create_app(context: AppContext | None = None) -> Dash:
    """Create and configure the Dash application.

    Args:
        context: Application context to serve. When omitted, one is built
            from the default config with the built-in modules registered
            and the persisted position restored.
    """
    if context is None:
        context = create_context()
    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.BOOTSTRAP],
        suppress_callback_exceptions=True,
    )
    app.title = "Math Visualizer"
    app.layout = create_layout(context)
    register_callbacks(app, context)
    return app


def main() -> None:
    """Entry point for the Dash dashboard."""
    cfg = get_config()
    setup_logging(cfg.log_level)
    app = create_app(create_context(cfg))
    app.run(debug=False, host="127.0.0.1", port=8050)


if __name__ == "__main__":
    main()
