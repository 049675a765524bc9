"""Permutations by the slot method.

Each of r slots is filled in turn from the items not yet placed, so the
slot counts are n, n-1, ..., n-r+1 and their product is nPr.
"""

from __future__ import annotations

import math

import plotly.graph_objects as go

from mathviz.catalog import (
    DifficultyLevel,
    ModuleCatalog,
    ModuleDescriptor,
    ModuleMetadata,
    ModuleState,
    RegistrationResult,
    StateChangeCallback,
    SyllabusRef,
    SyllabusStrand,
    VisualizationEngine,
)

MODULE_ID = "combinatorics.slot-method"
MAX_ITEMS = 12


def get_initial_state() -> ModuleState:
    return {
        "topic_id": MODULE_ID,
        "parameters": {"n": 5, "r": 3},
        "inputs": {},
        "visualization": {"show_labels": True},
    }


def validate_state(state: ModuleState) -> list[str]:
    errors: list[str] = []
    params = state.get("parameters") or {}
    n, r = params.get("n"), params.get("r")
    if not isinstance(n, int) or isinstance(n, bool) or not 1 <= n <= MAX_ITEMS:
        errors.append(f"n must be a whole number between 1 and {MAX_ITEMS}")
    if not isinstance(r, int) or isinstance(r, bool) or r < 1:
        errors.append("r must be a positive whole number")
    elif isinstance(n, int) and r > n:
        errors.append("r cannot exceed n")
    return errors


def slot_counts(n: int, r: int) -> list[int]:
    """Number of choices available for each slot, left to right."""
    return [n - i for i in range(r)]


def render(state: ModuleState, on_change: StateChangeCallback | None = None) -> go.Figure:
    """Render one bar per slot labelled with its number of choices."""
    n = state["parameters"]["n"]
    r = state["parameters"]["r"]
    counts = slot_counts(n, r)
    show_labels = state.get("visualization", {}).get("show_labels", True)

    fig = go.Figure(
        go.Bar(
            x=[f"Slot {i + 1}" for i in range(r)],
            y=counts,
            text=[str(c) for c in counts] if show_labels else None,
            textposition="outside",
            marker_color="#636efa",
        )
    )
    expression = " x ".join(str(c) for c in counts)
    fig.update_layout(
        title=f"{n}P{r} = {expression} = {math.perm(n, r)}",
        template="plotly_white",
        height=400,
        yaxis=dict(title="Choices", range=[0, MAX_ITEMS + 1]),
    )
    return fig


def build_descriptor() -> ModuleDescriptor:
    return ModuleDescriptor(
        id=MODULE_ID,
        name="Slot Method",
        description="Count arrangements of r items chosen from n by filling slots one at a time.",
        syllabus_ref=SyllabusRef(strand=SyllabusStrand.PROBABILITY.value, topic="permutations"),
        engine=VisualizationEngine.PLOTLY.value,
        render=render,
        get_initial_state=get_initial_state,
        validate_state=validate_state,
        metadata=ModuleMetadata(
            version="1.0.0",
            tags=["combinatorics", "permutations", "slot-method", "counting"],
            difficulty=DifficultyLevel.BASIC.value,
            prerequisites=["combinatorics.multiplicative-principle"],
            estimated_time=15,
            learning_objectives=[
                "Apply the multiplicative principle slot by slot",
                "Relate the slot product to nPr = n! / (n - r)!",
            ],
        ),
    )


def register(catalog: ModuleCatalog) -> RegistrationResult:
    return catalog.register(build_descriptor())
