"""Protocol definitions for the callables a module descriptor carries."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

# Module state is opaque to the core apart from its "topic_id" key.
ModuleState = dict[str, Any]

# Receives a partial update, returns the validation errors for the merged state.
StateChangeCallback = Callable[[Mapping[str, Any]], list[str]]


@runtime_checkable
class RenderEntryPoint(Protocol):
    """Capability a module's UI entry point must provide.

    The rendering layer invokes it with the current module state and a
    state-change callback, and receives something it knows how to
    display (a Plotly figure or a Dash component tree for the built-in
    modules). The catalog only stores and hands back the value.
    """

    def __call__(self, state: ModuleState, on_change: StateChangeCallback) -> Any: ...


@runtime_checkable
class InitialStateFactory(Protocol):
    """Zero-argument factory producing a fresh module state."""

    def __call__(self) -> ModuleState: ...


@runtime_checkable
class StateValidator(Protocol):
    """Maps a module state to human-readable errors (empty means valid)."""

    def __call__(self, state: ModuleState) -> list[str]: ...


@runtime_checkable
class StateMigrator(Protocol):
    """Upgrades a state saved by an older module version."""

    def __call__(self, old_state: Any, from_version: str) -> ModuleState: ...
