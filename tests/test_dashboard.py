"""Tests for dashboard layout builders and callback helpers."""
# pyright: reportArgumentType=false

import plotly.graph_objects as go
import pytest
from dash import Dash, dcc, html

from mathviz.bootstrap import register_builtin_modules
from mathviz.catalog import ModuleCatalog
from mathviz.dashboard.app import create_app
from mathviz.dashboard.callbacks import (
    build_view,
    parameter_updates,
    render_errors,
    render_module_figure,
)
from mathviz.dashboard.layout import (
    create_param_editor,
    create_sidebar,
    render_breadcrumbs,
    topic_modules,
)
from mathviz.navigation import Breadcrumb
from mathviz.session import AppContext
from mathviz.syllabus import get_topic


@pytest.fixture
def context():
    catalog = ModuleCatalog()
    register_builtin_modules(catalog)
    return AppContext(catalog=catalog)


class TestLayout:
    """Tests for sidebar, breadcrumbs and parameter editor."""

    def test_breadcrumbs_home(self):
        children = render_breadcrumbs([])
        assert len(children) == 1
        assert children[0].children == "Home"

    def test_breadcrumbs_separated(self):
        crumbs = [
            Breadcrumb("Vectors", "/strand/pure-math-vectors", "strand"),
            Breadcrumb("Dot & Cross Product", "/topic/vectors-3d-products", "topic"),
        ]
        children = render_breadcrumbs(crumbs)

        assert [c.children for c in children] == ["Vectors", " › ", "Dot & Cross Product"]
        assert children[0].title == "/strand/pure-math-vectors"

    def test_topic_modules_include_catalog_extras(self, context, make_descriptor):
        context.catalog.register(make_descriptor("extra.module", topic="permutations"))

        ids = [d.id for d in topic_modules(context.catalog, get_topic("permutations"))]

        assert ids == ["combinatorics.slot-method", "extra.module"]

    def test_topic_modules_skip_unregistered(self, context):
        assert topic_modules(context.catalog, get_topic("complex-arithmetic")) == []

    def test_sidebar_has_module_links(self, context):
        sidebar = create_sidebar(context.catalog)
        accordion = sidebar.children[-1]

        assert len(accordion.children) == 6
        links = [
            child.id
            for item in accordion.children
            for child in item.children
            if isinstance(getattr(child, "id", None), dict)
        ]
        assert {"type": "module-link", "module": "complex.roots-of-unity",
                "strand": "pure-math-complex", "topic": "complex-roots"} in links

    def test_param_editor_skips_non_scalars(self):
        children = create_param_editor({"n": 5, "operation": "dot", "flag": True, "nested": {"a": 1}})
        inputs = [c for c in children if isinstance(c, dcc.Input)]

        assert [i.id["name"] for i in inputs] == ["n", "operation"]
        assert inputs[0].type == "number"
        assert inputs[1].type == "text"


class TestCallbackHelpers:
    """Tests for view building and parameter merging."""

    def test_build_view_without_module(self, context):
        title, _description, figure, editor, errors, breadcrumbs, back_disabled = build_view(context)

        assert title == "Select a module"
        assert isinstance(figure, go.Figure)
        assert editor == []
        assert errors is None
        assert breadcrumbs[0].children == "Home"
        assert back_disabled is True

    def test_build_view_with_module(self, context):
        context.activate_module("complex.roots-of-unity", strand="pure-math-complex", topic="complex-roots")

        title, _description, figure, editor, errors, breadcrumbs, _ = build_view(context)

        assert title == "Roots of Unity"
        assert figure.layout.title.text == "The 5 roots of z^5 = 1"
        assert any(isinstance(c, dcc.Input) for c in editor)
        assert errors is None
        assert isinstance(breadcrumbs[0], html.Span)

    def test_back_enabled_after_two_visits(self, context):
        context.activate_module("complex.roots-of-unity")
        context.activate_module("combinatorics.slot-method")

        assert build_view(context)[-1] is False

    def test_parameter_updates_coerce_integral_floats(self, context):
        active = context.activate_module("combinatorics.slot-method")
        ids = [{"type": "param", "name": "n"}, {"type": "param", "name": "r"}]

        updates = parameter_updates(active, ids, [7.0, None])

        assert updates == {"parameters": {"n": 7, "r": 3}}
        assert isinstance(updates["parameters"]["n"], int)

    def test_invalid_edit_renders_last_valid_state(self, context):
        active = context.activate_module("combinatorics.slot-method")
        errors = active.on_change({"parameters": {"n": 2, "r": 3}})

        figure = render_module_figure(active)

        assert errors == ["r cannot exceed n"]
        assert figure.layout.title.text.startswith("5P3")
        assert render_errors(errors) is not None

    def test_render_errors_empty(self):
        assert render_errors([]) is None


class TestApp:
    def test_create_app(self, context):
        app = create_app(context)

        assert isinstance(app, Dash)
        assert app.title == "Math Visualizer"
        assert app.layout is not None
