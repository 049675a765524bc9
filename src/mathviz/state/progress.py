"""Per-module learning progress for the current session.

Progress is not persisted: a restart starts from zero, the same as the
module state cache.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ModuleProgress:
    """Progress snapshot for one module.

    Attributes:
        module_id: The module this snapshot belongs to
        completed: Whether the module has been completed
        last_visited: Timestamp (seconds) of the most recent activity
        time_spent: Accumulated time in the module, in seconds
        completion_percentage: 0-100
    """

    module_id: str
    completed: bool = False
    last_visited: float | None = None
    time_spent: float = 0.0
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "moduleId": self.module_id,
            "completed": self.completed,
            "lastVisited": self.last_visited,
            "timeSpent": self.time_spent,
            "completionPercentage": self.completion_percentage,
        }


class ProgressTracker:
    """Tracks visits, completion and time spent per module."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._progress: dict[str, ModuleProgress] = {}
        self._total_time_spent = 0.0
        self.last_activity = clock()

    def _current(self, module_id: str) -> ModuleProgress:
        return self._progress.get(module_id) or ModuleProgress(module_id=module_id)

    def _store(self, progress: ModuleProgress) -> ModuleProgress:
        self._progress[progress.module_id] = progress
        self.last_activity = progress.last_visited or self._clock()
        return progress

    def visit_module(self, module_id: str) -> ModuleProgress:
        """Record a visit, keeping existing completion and time spent."""
        return self._store(replace(self._current(module_id), last_visited=self._clock()))

    def complete_module(self, module_id: str) -> ModuleProgress:
        return self._store(
            replace(
                self._current(module_id),
                completed=True,
                completion_percentage=100.0,
                last_visited=self._clock(),
            )
        )

    def update_module_progress(self, module_id: str, percentage: float) -> ModuleProgress:
        """Set completion percentage, clamped to 0-100; 100 marks the module completed."""
        clamped = min(100.0, max(0.0, float(percentage)))
        return self._store(
            replace(
                self._current(module_id),
                completion_percentage=clamped,
                completed=clamped >= 100.0,
                last_visited=self._clock(),
            )
        )

    def add_time_spent(self, module_id: str, seconds: float) -> ModuleProgress:
        current = self._current(module_id)
        self._total_time_spent += seconds
        return self._store(
            replace(current, time_spent=current.time_spent + seconds, last_visited=self._clock())
        )

    def get_module_progress(self, module_id: str) -> ModuleProgress | None:
        return self._progress.get(module_id)

    def get_stats(self) -> dict[str, Any]:
        """Return visited/completed counts and total time spent."""
        return {
            "totalModulesVisited": len(self._progress),
            "totalModulesCompleted": sum(1 for p in self._progress.values() if p.completed),
            "totalTimeSpent": self._total_time_spent,
        }

    def reset_progress(self) -> None:
        self._progress.clear()
        self._total_time_spent = 0.0
        self.last_activity = self._clock()
