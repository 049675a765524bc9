"""Tests for the built-in visualization modules and their startup registration."""

from __future__ import annotations

import logging

import numpy as np
import plotly.graph_objects as go
import pytest

from mathviz.bootstrap import BUILTIN_MODULES, create_context, register_builtin_modules
from mathviz.catalog import ModuleCatalog, RegistrationResult
from mathviz.config import AppConfig
from mathviz.navigation import NavigationPosition, PositionStore
from mathviz.syllabus import get_topic
from mathviz.visualizations import dot_cross_product, roots_of_unity, slot_method

MODULES = [slot_method, dot_cross_product, roots_of_unity]


class TestBuiltinRegistration:
    def test_all_register(self):
        catalog = ModuleCatalog()
        results = register_builtin_modules(catalog)

        assert all(r.success for r in results)
        assert catalog.get_all_ids() == [
            "combinatorics.slot-method",
            "vectors.dot-cross-product",
            "complex.roots-of-unity",
        ]

    def test_order_follows_registration_list(self):
        catalog = ModuleCatalog()
        register_builtin_modules(catalog, reversed(BUILTIN_MODULES))
        assert catalog.get_all_ids()[0] == "complex.roots-of-unity"

    def test_failure_is_reported_and_others_register(self, caplog):
        def broken(catalog):
            return catalog.register({"id": "broken.module"})

        catalog = ModuleCatalog()
        with caplog.at_level(logging.WARNING, logger="mathviz.bootstrap"):
            results = register_builtin_modules(catalog, [broken, slot_method.register])

        assert [r.success for r in results] == [False, True]
        assert catalog.get_all_ids() == ["combinatorics.slot-method"]
        assert "broken.module failed to register" in caplog.text

    @pytest.mark.parametrize("module", MODULES)
    def test_syllabus_lists_module_under_its_topic(self, module):
        descriptor = module.build_descriptor()
        topic = get_topic(descriptor.topic)

        assert topic is not None
        assert descriptor.id in topic.module_ids

    def test_create_context_restores_position(self, tmp_path):
        config = AppConfig(project_root=tmp_path, state_dir=tmp_path, app_name="app")
        PositionStore(tmp_path, "app").save(NavigationPosition(current_module="complex.roots-of-unity"))

        context = create_context(config)

        assert len(context.catalog) == 3
        assert context.active.module_id == "complex.roots-of-unity"

    def test_create_context_without_restore(self, tmp_path):
        config = AppConfig(project_root=tmp_path, state_dir=tmp_path, app_name="app")
        PositionStore(tmp_path, "app").save(NavigationPosition(current_module="complex.roots-of-unity"))

        context = create_context(config, restore=False)

        assert context.navigation.position.is_home
        assert context.active is None


class TestModuleContracts:
    @pytest.mark.parametrize("module", MODULES)
    def test_initial_state_is_valid(self, module):
        state = module.get_initial_state()
        assert state["topic_id"] == module.MODULE_ID
        assert module.validate_state(state) == []

    @pytest.mark.parametrize("module", MODULES)
    def test_initial_state_renders_figure(self, module):
        assert isinstance(module.render(module.get_initial_state()), go.Figure)

    @pytest.mark.parametrize("module", MODULES)
    def test_register_returns_result(self, module):
        result = module.register(ModuleCatalog())
        assert isinstance(result, RegistrationResult)
        assert result.success


class TestSlotMethod:
    def test_slot_counts(self):
        assert slot_method.slot_counts(5, 3) == [5, 4, 3]

    def test_title_shows_permutation_count(self):
        fig = slot_method.render({"parameters": {"n": 5, "r": 3}})
        assert fig.layout.title.text == "5P3 = 5 x 4 x 3 = 60"

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"n": 3, "r": 4}, "r cannot exceed n"),
            ({"n": 0, "r": 1}, "n must be a whole number between 1 and 12"),
            ({"n": 5, "r": 2.5}, "r must be a positive whole number"),
            ({"n": True, "r": 1}, "n must be a whole number between 1 and 12"),
        ],
    )
    def test_invalid_parameters(self, params, message):
        assert message in slot_method.validate_state({"parameters": params})


class TestDotCrossProduct:
    def _state(self, **params):
        state = dot_cross_product.get_initial_state()
        state["parameters"].update(params)
        return state

    def test_dot_title(self):
        fig = dot_cross_product.render(self._state())
        assert fig.layout.title.text.startswith("A . B = 8,")

    def test_cross_adds_parallelogram(self):
        fig = dot_cross_product.render(self._state(operation="cross"))

        assert any(isinstance(trace, go.Mesh3d) for trace in fig.data)
        assert fig.layout.title.text.startswith("A x B = (-2, 1, 1)")

    def test_zero_vector_renders(self):
        fig = dot_cross_product.render(self._state(bx=0, by=0, bz=0))
        assert "angle = 0.0" in fig.layout.title.text

    def test_validation(self):
        errors = dot_cross_product.validate_state(self._state(operation="wedge", ax=9, by="2"))

        assert "operation must be one of ['dot', 'cross']" in errors
        assert "ax must be between -5 and 5" in errors
        assert "by must be a number" in errors


class TestRootsOfUnity:
    def test_roots_lie_on_unit_circle(self):
        roots = roots_of_unity.roots_of_unity(6)

        np.testing.assert_allclose(np.abs(roots), 1.0)
        np.testing.assert_allclose(roots**6, 1.0, atol=1e-9)

    @pytest.mark.parametrize("n", [1, 25, 3.0, None])
    def test_degree_out_of_range(self, n):
        assert roots_of_unity.validate_state({"parameters": {"n": n}}) == [
            "n must be a whole number between 2 and 24"
        ]
