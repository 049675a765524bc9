"""MathViz: interactive math visualizations organized by syllabus.

The core is the module catalog plus navigation and state preservation:
modules are registered into a ModuleCatalog at startup, the
NavigationController tracks where the user is, and the ModuleStateCache
keeps each visited module's working state so it can be resumed.

Quick start:
    from mathviz import create_context

    ctx = create_context()
    for module in ctx.catalog.get_by_strand("pure-math-vectors"):
        print(module.id, module.name)

    active = ctx.activate_module("vectors.dot-cross-product")
    fig = active.render()
    active.on_change({"parameters": {**active.state["parameters"], "ax": 4}})
"""

from __future__ import annotations

from mathviz.bootstrap import BUILTIN_MODULES, create_context, register_builtin_modules
from mathviz.catalog import ModuleCatalog, ModuleDescriptor, RegistrationResult
from mathviz.config import AppConfig, get_config
from mathviz.navigation import NavigationController, NavigationPosition, PositionStore
from mathviz.session import ActiveModule, AppContext
from mathviz.state import ModuleStateCache, ProgressTracker
from mathviz.version import __version__

__all__ = [
    "BUILTIN_MODULES",
    "ActiveModule",
    "AppConfig",
    "AppContext",
    "ModuleCatalog",
    "ModuleDescriptor",
    "ModuleStateCache",
    "NavigationController",
    "NavigationPosition",
    "PositionStore",
    "ProgressTracker",
    "RegistrationResult",
    "__version__",
    "create_context",
    "get_config",
    "register_builtin_modules",
]
