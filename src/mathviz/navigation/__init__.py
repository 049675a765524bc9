"""Navigation position, bounded visit history and position persistence."""

from mathviz.navigation.controller import (
    DEFAULT_MAX_HISTORY_LENGTH,
    Breadcrumb,
    HistoryEntry,
    NavigationController,
    NavigationPosition,
)
from mathviz.navigation.persistence import PositionStore

__all__ = [
    "DEFAULT_MAX_HISTORY_LENGTH",
    "Breadcrumb",
    "HistoryEntry",
    "NavigationController",
    "NavigationPosition",
    "PositionStore",
]
