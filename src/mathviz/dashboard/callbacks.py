"""Callback registrations for the Dash dashboard.

Organized by interaction pattern:
- Navigation: module link, Back, Home and Reset re-render the whole view
- Parameter edits: merge into the active state, re-render figure + errors

Callbacks go through the injected AppContext only; the view-building
helpers are plain functions so they can be tested without a browser.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import ALL, Dash, Input, Output, State, ctx, html, no_update

from mathviz.dashboard.layout import create_param_editor, render_breadcrumbs
from mathviz.session import ActiveModule, AppContext


def _empty_figure(message: str = "No module selected") -> go.Figure:
    """Create a placeholder figure with a centered message."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper", yref="paper",
        x=0.5, y=0.5,
        showarrow=False,
        font=dict(size=16, color="gray"),
    )
    fig.update_layout(
        template="plotly_white",
        height=300,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
    )
    return fig


def render_errors(errors: Sequence[str]) -> Any:
    if not errors:
        return None
    return dbc.Alert([html.Div(e) for e in errors], color="warning", className="mt-3")


def render_module_figure(active: ActiveModule | None) -> go.Figure:
    """Render the active module, or a placeholder when nothing renderable is active.

    A working state that failed validation is not rendered; the last
    cached (valid) state is shown instead.
    """
    if active is None:
        return _empty_figure()
    state = active.state
    if active.errors:
        cached = active.last_valid_state
        if cached is None:
            return _empty_figure("Fix the parameters to render")
        state = cached
    figure = active.descriptor.render(state, active.on_change)
    return figure if isinstance(figure, go.Figure) else _empty_figure("Module rendered no figure")


def build_view(context: AppContext) -> tuple[Any, ...]:
    """Compute every output of the navigation callback from the context."""
    active = context.active
    breadcrumbs = render_breadcrumbs(context.get_breadcrumbs())
    can_go_back = context.navigation.can_go_back()
    if active is None:
        return (
            "Select a module",
            "Choose a topic from the syllabus on the left.",
            _empty_figure(),
            [],
            None,
            breadcrumbs,
            not can_go_back,
        )
    return (
        active.descriptor.name,
        active.descriptor.description,
        render_module_figure(active),
        create_param_editor(active.state.get("parameters") or {}),
        render_errors(active.errors),
        breadcrumbs,
        not can_go_back,
    )


def parameter_updates(
    active: ActiveModule,
    ids: Sequence[dict[str, Any]],
    values: Sequence[Any],
) -> dict[str, Any]:
    """Merge edited parameter inputs into the active module's parameters.

    Empty number inputs arrive as None and keep the current value.
    """
    parameters = dict(active.state.get("parameters") or {})
    for component_id, value in zip(ids, values):
        if value is None:
            continue
        name = component_id["name"]
        if isinstance(value, float) and value.is_integer() and isinstance(parameters.get(name), int):
            value = int(value)
        parameters[name] = value
    return {"parameters": parameters}


def register_callbacks(app: Dash, context: AppContext) -> None:
    """Register navigation and parameter-editing callbacks."""

    @app.callback(
        Output("module-title", "children"),
        Output("module-description", "children"),
        Output("module-figure", "figure"),
        Output("param-editor", "children"),
        Output("module-errors", "children"),
        Output("breadcrumbs", "children"),
        Output("back-button", "disabled"),
        Input({"type": "module-link", "module": ALL, "strand": ALL, "topic": ALL}, "n_clicks"),
        Input("back-button", "n_clicks"),
        Input("home-button", "n_clicks"),
        Input("reset-button", "n_clicks"),
    )
    def on_navigate(_links, _back, _home, _reset):
        trigger = ctx.triggered_id
        if isinstance(trigger, dict) and trigger.get("type") == "module-link":
            context.activate_module(
                trigger["module"], strand=trigger["strand"], topic=trigger["topic"]
            )
        elif trigger == "back-button":
            context.go_back()
        elif trigger == "home-button":
            context.go_home()
        elif trigger == "reset-button" and context.active is not None:
            context.reset_module(context.active.module_id)
        return build_view(context)

    @app.callback(
        Output("module-figure", "figure", allow_duplicate=True),
        Output("module-errors", "children", allow_duplicate=True),
        Input({"type": "param", "name": ALL}, "value"),
        State({"type": "param", "name": ALL}, "id"),
        prevent_initial_call=True,
    )
    def on_param_change(values, ids):
        active = context.active
        if active is None or not ids:
            return no_update, no_update
        errors = active.on_change(parameter_updates(active, ids, values))
        return render_module_figure(active), render_errors(errors)
