"""Shared fixtures: descriptor factory and fresh core instances per test."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mathviz.catalog import ModuleCatalog, ModuleDescriptor, ModuleMetadata, SyllabusRef
from mathviz.navigation import NavigationController
from mathviz.state import ModuleStateCache


def _validate_value(state: dict[str, Any]) -> list[str]:
    value = state.get("parameters", {}).get("value")
    if not isinstance(value, int) or value < 0:
        return ["value must be a non-negative integer"]
    return []


def build_descriptor(
    module_id: str = "test.module",
    strand: str = "pure-math-vectors",
    topic: str = "test-topic",
    tags: list[str] | None = None,
    difficulty: str | None = None,
    engine: str = "plotly",
    **overrides: Any,
) -> ModuleDescriptor:
    """A valid descriptor whose state holds a single integer parameter."""
    fields: dict[str, Any] = dict(
        id=module_id,
        name=f"Module {module_id}",
        description=f"Test module {module_id}",
        syllabus_ref=SyllabusRef(strand=strand, topic=topic),
        engine=engine,
        render=lambda state, on_change: {"rendered": state["parameters"]["value"]},
        get_initial_state=lambda: {"topic_id": module_id, "parameters": {"value": 1}},
        validate_state=_validate_value,
        metadata=ModuleMetadata(version="1.0.0", tags=list(tags or []), difficulty=difficulty),
    )
    fields.update(overrides)
    return ModuleDescriptor(**fields)


@pytest.fixture
def make_descriptor() -> Callable[..., ModuleDescriptor]:
    return build_descriptor


@pytest.fixture
def catalog() -> ModuleCatalog:
    """A fresh, empty catalog."""
    return ModuleCatalog()


@pytest.fixture
def navigation() -> NavigationController:
    """A controller with a small history bound and a deterministic clock."""
    ticks = iter(range(1, 10_000))
    return NavigationController(max_history_length=5, clock=lambda: float(next(ticks)))


@pytest.fixture
def cache() -> ModuleStateCache:
    return ModuleStateCache()
