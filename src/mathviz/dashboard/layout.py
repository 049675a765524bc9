"""Layout components for the Dash dashboard.

The sidebar lists strands, their topics and the registered modules for
each topic. The content area shows the active module: title, figure,
a parameter editor built from the module state, and validation errors.
"""

from __future__ import annotations

from typing import Any

import dash_bootstrap_components as dbc
from dash import dcc, html

from mathviz.catalog import ModuleCatalog, ModuleDescriptor
from mathviz.navigation import Breadcrumb
from mathviz.session import AppContext
from mathviz.syllabus import SYLLABUS_STRUCTURE, SyllabusTopic
from mathviz.version import __version__

# ---------------------------------------------------------------------------
# Shared style constants
# ---------------------------------------------------------------------------

_SIDEBAR_STYLE = {
    "width": "300px",
    "minWidth": "300px",
    "padding": "20px",
    "backgroundColor": "#f8f9fa",
    "overflowY": "auto",
    "borderRight": "1px solid #dee2e6",
    "height": "calc(100vh - 56px)",
}

_PAGE_CONTENT_STYLE = {
    "flex": "1",
    "padding": "20px",
    "overflowY": "auto",
    "height": "calc(100vh - 56px)",
}

_FLEX_WRAPPER_STYLE = {
    "display": "flex",
    "overflow": "hidden",
}


def create_navbar(breadcrumbs: list[Breadcrumb], can_go_back: bool) -> dbc.Navbar:
    """Top bar with brand, breadcrumb trail and Back/Home buttons."""
    return dbc.Navbar(
        dbc.Container(
            [
                dbc.NavbarBrand(f"Math Visualizer v{__version__}"),
                html.Div(
                    id="breadcrumbs",
                    children=render_breadcrumbs(breadcrumbs),
                    className="text-light me-auto ms-3",
                ),
                dbc.Button(
                    "← Back",
                    id="back-button",
                    size="sm",
                    color="light",
                    outline=True,
                    disabled=not can_go_back,
                    className="me-2",
                ),
                dbc.Button("Home", id="home-button", size="sm", color="light", outline=True),
            ],
            fluid=True,
        ),
        color="dark",
        dark=True,
        sticky="top",
    )


def render_breadcrumbs(breadcrumbs: list[Breadcrumb]) -> list[Any]:
    """Breadcrumb trail as inline text separated by chevrons."""
    if not breadcrumbs:
        return [html.Span("Home")]
    children: list[Any] = []
    for i, crumb in enumerate(breadcrumbs):
        if i:
            children.append(html.Span(" › ", className="mx-1"))
        children.append(html.Span(crumb.label, title=crumb.path))
    return children


def topic_modules(catalog: ModuleCatalog, topic: SyllabusTopic) -> list[ModuleDescriptor]:
    """Registered modules for a topic: the syllabus list first, then catalog extras."""
    modules: list[ModuleDescriptor] = []
    seen: set[str] = set()
    for module_id in topic.module_ids:
        descriptor = catalog.get(module_id)
        if descriptor is not None and module_id not in seen:
            modules.append(descriptor)
            seen.add(module_id)
    for descriptor in catalog.get_by_topic(topic.id):
        if descriptor.id not in seen:
            modules.append(descriptor)
            seen.add(descriptor.id)
    return modules


def create_sidebar(catalog: ModuleCatalog) -> html.Div:
    """Accordion of strands, each listing its topics and their modules."""
    items = []
    for strand in SYLLABUS_STRUCTURE:
        topic_children = []
        for topic in strand.topics:
            modules = topic_modules(catalog, topic)
            topic_children.append(
                html.Div(topic.name, className="fw-bold small mt-2" if modules else "text-muted small mt-2")
            )
            for descriptor in modules:
                topic_children.append(
                    dbc.Button(
                        descriptor.name,
                        id={
                            "type": "module-link",
                            "module": descriptor.id,
                            "strand": strand.id.value,
                            "topic": topic.id,
                        },
                        color="link",
                        size="sm",
                        className="d-block text-start ps-3",
                    )
                )
        count = len(catalog.get_by_strand(strand.id.value))
        items.append(
            dbc.AccordionItem(
                topic_children,
                title=f"{strand.name} ({count})",
                item_id=strand.id.value,
            )
        )

    return html.Div(
        id="sidebar",
        children=[
            html.H5("Syllabus", className="mb-0"),
            html.Hr(),
            dbc.Accordion(items, start_collapsed=True, always_open=True, flush=True),
        ],
        style=_SIDEBAR_STYLE,
    )


def create_param_editor(parameters: dict[str, Any]) -> list[Any]:
    """One labelled input per scalar parameter; nested values are not editable here."""
    children: list[Any] = []
    for name, value in parameters.items():
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            continue
        children.append(dbc.Label(name, className="fw-bold small mb-0"))
        children.append(
            dcc.Input(
                id={"type": "param", "name": name},
                type="text" if isinstance(value, str) else "number",
                value=value,
                debounce=True,
                className="form-control form-control-sm mb-2",
            )
        )
    return children


def create_content() -> html.Div:
    """Content area placeholders filled in by the navigation callback."""
    return html.Div(
        id="page-content",
        children=[
            html.H3(id="module-title", children="Select a module"),
            html.P(id="module-description", className="text-muted"),
            dbc.Row(
                [
                    dbc.Col(dcc.Graph(id="module-figure"), md=9),
                    dbc.Col(
                        [
                            html.H6("Parameters"),
                            html.Div(id="param-editor"),
                            dbc.Button(
                                "Reset",
                                id="reset-button",
                                size="sm",
                                color="secondary",
                                outline=True,
                                className="mt-2",
                            ),
                        ],
                        md=3,
                    ),
                ]
            ),
            html.Div(id="module-errors"),
        ],
        style=_PAGE_CONTENT_STYLE,
    )


def create_layout(context: AppContext) -> html.Div:
    """Full page: navbar over sidebar + content."""
    return html.Div(
        [
            create_navbar(context.get_breadcrumbs(), context.navigation.can_go_back()),
            html.Div(
                [create_sidebar(context.catalog), create_content()],
                style=_FLEX_WRAPPER_STYLE,
            ),
        ]
    )
