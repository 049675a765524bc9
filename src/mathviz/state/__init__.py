"""Session-scoped module state and progress."""

from mathviz.state.cache import ModuleStateCache
from mathviz.state.progress import ModuleProgress, ProgressTracker

__all__ = ["ModuleProgress", "ModuleStateCache", "ProgressTracker"]
