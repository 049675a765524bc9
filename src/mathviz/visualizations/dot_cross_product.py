"""Dot & cross product of two 3D vectors.

Dot mode shows the projection of A onto B; cross mode shows A x B
together with the parallelogram spanned by A and B.
"""

from __future__ import annotations

from typing import Any

import numpy as np
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

MODULE_ID = "vectors.dot-cross-product"
COMPONENT_LIMIT = 5
OPERATIONS = ("dot", "cross")
_COMPONENTS = ("ax", "ay", "az", "bx", "by", "bz")


def get_initial_state() -> ModuleState:
    return {
        "topic_id": MODULE_ID,
        "parameters": {
            "operation": "dot",
            "ax": 2, "ay": 3, "az": 1,
            "bx": 1, "by": 2, "bz": 0,
        },
        "inputs": {"active_tab": "dot"},
        "visualization": {"show_grid": True, "show_axes": True, "show_labels": True},
    }


def validate_state(state: ModuleState) -> list[str]:
    errors: list[str] = []
    params = state.get("parameters") or {}
    if params.get("operation") not in OPERATIONS:
        errors.append(f"operation must be one of {list(OPERATIONS)}")
    for name in _COMPONENTS:
        value = params.get(name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            errors.append(f"{name} must be a number")
        elif abs(value) > COMPONENT_LIMIT:
            errors.append(f"{name} must be between -{COMPONENT_LIMIT} and {COMPONENT_LIMIT}")
    return errors


def _vectors(params: dict[str, Any]) -> tuple[np.ndarray, np.ndarray]:
    a = np.array([params["ax"], params["ay"], params["az"]], dtype=float)
    b = np.array([params["bx"], params["by"], params["bz"]], dtype=float)
    return a, b


def _arrow(vector: np.ndarray, name: str, color: str, origin: np.ndarray | None = None) -> go.Scatter3d:
    start = origin if origin is not None else np.zeros(3)
    end = start + vector
    return go.Scatter3d(
        x=[start[0], end[0]],
        y=[start[1], end[1]],
        z=[start[2], end[2]],
        mode="lines+markers",
        marker=dict(size=[2, 6], color=color),
        line=dict(width=6, color=color),
        name=name,
    )


def render(state: ModuleState, on_change: StateChangeCallback | None = None) -> go.Figure:
    """Render both vectors and the product for the selected operation."""
    params = state["parameters"]
    a, b = _vectors(params)
    fig = go.Figure()
    fig.add_trace(_arrow(a, "A", "#1f77b4"))
    fig.add_trace(_arrow(b, "B", "#d62728"))

    if params["operation"] == "cross":
        cross = np.cross(a, b)
        corners = np.array([np.zeros(3), a, a + b, b])
        fig.add_trace(
            go.Mesh3d(
                x=corners[:, 0], y=corners[:, 1], z=corners[:, 2],
                i=[0, 0], j=[1, 2], k=[2, 3],
                opacity=0.3, color="#2ca02c", name="A, B parallelogram",
            )
        )
        fig.add_trace(_arrow(cross, "A x B", "#2ca02c"))
        title = f"A x B = ({cross[0]:g}, {cross[1]:g}, {cross[2]:g}), area = {np.linalg.norm(cross):.2f}"
    else:
        dot = float(np.dot(a, b))
        b_norm_sq = float(np.dot(b, b))
        projection = (dot / b_norm_sq) * b if b_norm_sq else np.zeros(3)
        fig.add_trace(_arrow(projection, "proj_B(A)", "#ff7f0e"))
        denom = float(np.linalg.norm(a) * np.linalg.norm(b))
        angle = float(np.degrees(np.arccos(np.clip(dot / denom, -1.0, 1.0)))) if denom else 0.0
        title = f"A . B = {dot:g}, angle = {angle:.1f} deg"

    extent = COMPONENT_LIMIT * 2
    show_grid = state.get("visualization", {}).get("show_grid", True)
    axis = dict(range=[-extent, extent], showgrid=show_grid, zeroline=True)
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=500,
        scene=dict(xaxis=axis, yaxis=axis, zaxis=axis, aspectmode="cube"),
        margin=dict(l=0, r=0, t=50, b=0),
    )
    return fig


def build_descriptor() -> ModuleDescriptor:
    return ModuleDescriptor(
        id=MODULE_ID,
        name="Dot & Cross Product",
        description=(
            "Visualize dot product (scalar result with projection) and cross product "
            "(vector result with parallelogram area) in 3D."
        ),
        syllabus_ref=SyllabusRef(
            strand=SyllabusStrand.VECTORS.value,
            topic="vectors-3d-products",
            subtopic="products",
        ),
        engine=VisualizationEngine.PLOTLY_3D.value,
        render=render,
        get_initial_state=get_initial_state,
        validate_state=validate_state,
        metadata=ModuleMetadata(
            version="1.0.0",
            tags=["vectors", "3d", "dot-product", "cross-product", "scalar-product", "vector-product"],
            difficulty=DifficultyLevel.INTERMEDIATE.value,
            prerequisites=["vectors.3d-operations"],
            estimated_time=20,
            learning_objectives=[
                "Calculate dot product using component formula",
                "Understand dot product as projection and angle measure",
                "Calculate cross product using determinant formula",
                "Visualize cross product as area of parallelogram",
            ],
        ),
    )


def register(catalog: ModuleCatalog) -> RegistrationResult:
    return catalog.register(build_descriptor())
