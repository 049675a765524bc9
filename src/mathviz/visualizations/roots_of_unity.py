"""The n-th roots of unity on an Argand diagram."""

from __future__ import annotations

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

MODULE_ID = "complex.roots-of-unity"
MIN_DEGREE = 2
MAX_DEGREE = 24


def get_initial_state() -> ModuleState:
    return {
        "topic_id": MODULE_ID,
        "parameters": {"n": 5},
        "inputs": {},
        "visualization": {"show_axes": True, "show_labels": True},
    }


def validate_state(state: ModuleState) -> list[str]:
    n = (state.get("parameters") or {}).get("n")
    if not isinstance(n, int) or isinstance(n, bool) or not MIN_DEGREE <= n <= MAX_DEGREE:
        return [f"n must be a whole number between {MIN_DEGREE} and {MAX_DEGREE}"]
    return []


def roots_of_unity(n: int) -> np.ndarray:
    return np.exp(2j * np.pi * np.arange(n) / n)


def render(state: ModuleState, on_change: StateChangeCallback | None = None) -> go.Figure:
    """Plot the roots, the polygon they form and the unit circle."""
    n = state["parameters"]["n"]
    roots = roots_of_unity(n)
    show_labels = state.get("visualization", {}).get("show_labels", True)
    theta = np.linspace(0, 2 * np.pi, 200)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=np.cos(theta), y=np.sin(theta), mode="lines", name="|z| = 1",
                   line=dict(color="lightgray", dash="dot"))
    )
    polygon = np.append(roots, roots[0])
    fig.add_trace(
        go.Scatter(
            x=polygon.real,
            y=polygon.imag,
            mode="lines+markers+text" if show_labels else "lines+markers",
            text=[f"w^{k}" for k in range(n)] + [""] if show_labels else None,
            textposition="top center",
            marker=dict(size=9, color="#ef553b"),
            name=f"z^{n} = 1",
        )
    )
    fig.update_layout(
        title=f"The {n} roots of z^{n} = 1",
        template="plotly_white",
        height=500,
        xaxis=dict(title="Re", range=[-1.4, 1.4], scaleanchor="y"),
        yaxis=dict(title="Im", range=[-1.4, 1.4]),
    )
    return fig


def build_descriptor() -> ModuleDescriptor:
    return ModuleDescriptor(
        id=MODULE_ID,
        name="Roots of Unity",
        description="Place the n-th roots of unity as a regular polygon on the unit circle.",
        syllabus_ref=SyllabusRef(strand=SyllabusStrand.COMPLEX.value, topic="complex-roots"),
        engine=VisualizationEngine.PLOTLY.value,
        render=render,
        get_initial_state=get_initial_state,
        validate_state=validate_state,
        metadata=ModuleMetadata(
            version="1.0.0",
            tags=["complex", "roots", "argand", "de-moivre"],
            difficulty=DifficultyLevel.ADVANCED.value,
            prerequisites=["complex.arithmetic"],
            estimated_time=15,
        ),
    )


def register(catalog: ModuleCatalog) -> RegistrationResult:
    return catalog.register(build_descriptor())
