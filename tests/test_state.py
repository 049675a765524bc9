"""Tests for the module state cache and progress tracking."""

from __future__ import annotations

import itertools

import pytest

from mathviz.state import ModuleProgress, ModuleStateCache, ProgressTracker


class TestModuleStateCache:
    def test_get_without_save_returns_none(self, cache):
        assert cache.get_module_state("a.one") is None
        assert not cache.has_module_state("a.one")

    def test_save_overwrites(self, cache):
        cache.save_module_state("a.one", {"topic_id": "a.one", "v": 1})
        cache.save_module_state("a.one", {"topic_id": "a.one", "v": 2})

        assert cache.get_module_state("a.one") == {"topic_id": "a.one", "v": 2}
        assert len(cache) == 1

    def test_does_not_validate(self, cache):
        """Whatever is saved is returned; validation is the caller's job."""
        cache.save_module_state("a.one", {"garbage": True})
        assert cache.get_module_state("a.one") == {"garbage": True}

    def test_clear_one(self, cache):
        cache.save_module_state("a.one", {"topic_id": "a.one"})
        cache.save_module_state("b.two", {"topic_id": "b.two"})

        assert cache.clear_module_state("a.one") is True
        assert cache.clear_module_state("a.one") is False
        assert "a.one" not in cache
        assert "b.two" in cache

    def test_reset_all(self, cache):
        cache.save_module_state("a.one", {"topic_id": "a.one"})
        cache.save_module_state("b.two", {"topic_id": "b.two"})

        cache.reset_all_states()

        assert len(cache) == 0
        assert cache.get_module_state("b.two") is None

    def test_module_ids_in_first_save_order(self):
        cache = ModuleStateCache()
        for module_id in ("c.three", "a.one", "c.three", "b.two"):
            cache.save_module_state(module_id, {})

        assert cache.module_ids() == ["c.three", "a.one", "b.two"]


@pytest.fixture
def tracker():
    ticks = itertools.count(100)
    return ProgressTracker(clock=lambda: float(next(ticks)))


class TestProgressTracker:
    def test_unvisited_module_has_no_progress(self, tracker):
        assert tracker.get_module_progress("a.one") is None

    def test_visit_records_timestamp(self, tracker):
        progress = tracker.visit_module("a.one")

        assert progress.last_visited == 101.0
        assert progress.completed is False
        assert tracker.last_activity == 101.0

    def test_visit_keeps_completion(self, tracker):
        tracker.complete_module("a.one")
        progress = tracker.visit_module("a.one")

        assert progress.completed is True
        assert progress.completion_percentage == 100.0

    @pytest.mark.parametrize(
        "percentage, expected, completed",
        [(-10, 0.0, False), (40, 40.0, False), (100, 100.0, True), (250, 100.0, True)],
    )
    def test_update_progress_clamps(self, tracker, percentage, expected, completed):
        progress = tracker.update_module_progress("a.one", percentage)

        assert progress.completion_percentage == expected
        assert progress.completed is completed

    def test_time_spent_accumulates(self, tracker):
        tracker.add_time_spent("a.one", 30)
        tracker.add_time_spent("a.one", 15)
        tracker.add_time_spent("b.two", 5)

        assert tracker.get_module_progress("a.one").time_spent == 45
        assert tracker.get_stats()["totalTimeSpent"] == 50

    def test_stats(self, tracker):
        tracker.visit_module("a.one")
        tracker.visit_module("b.two")
        tracker.complete_module("b.two")

        assert tracker.get_stats() == {
            "totalModulesVisited": 2,
            "totalModulesCompleted": 1,
            "totalTimeSpent": 0.0,
        }

    def test_reset(self, tracker):
        tracker.complete_module("a.one")
        tracker.add_time_spent("a.one", 10)

        tracker.reset_progress()

        assert tracker.get_module_progress("a.one") is None
        assert tracker.get_stats()["totalModulesVisited"] == 0
        assert tracker.get_stats()["totalTimeSpent"] == 0.0

    def test_to_dict(self):
        progress = ModuleProgress(module_id="a.one", completed=True, completion_percentage=100.0)
        assert progress.to_dict()["moduleId"] == "a.one"
        assert progress.to_dict()["completionPercentage"] == 100.0
