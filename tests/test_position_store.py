"""Tests for persisting the navigation position."""

from __future__ import annotations

import json

import pytest

from mathviz.navigation import NavigationPosition, PositionStore


@pytest.fixture
def store(tmp_path):
    return PositionStore(tmp_path / "state", "math-viz-navigation")


class TestPositionStore:
    def test_path_keyed_by_app_name(self, store, tmp_path):
        assert store.path == tmp_path / "state" / "math-viz-navigation.json"

    def test_save_then_load(self, store):
        position = NavigationPosition("pure-math-vectors", "vectors-3d-products", "vectors.dot-cross-product")
        store.save(position)

        assert store.load() == position

    def test_file_layout(self, store):
        store.save(NavigationPosition(current_strand="s"))

        with open(store.path) as f:
            payload = json.load(f)
        assert payload == {
            "state": {"currentStrand": "s", "currentTopic": None, "currentModule": None},
            "version": 0,
        }

    def test_missing_file_loads_home(self, store):
        assert store.load().is_home

    @pytest.mark.parametrize("content", [b"{not json", b"\xff\xfe\x00garbage"])
    def test_corrupt_file_loads_home(self, store, content, caplog):
        """Invalid JSON and invalid UTF-8 both fall back to Home with a warning."""
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(content)

        assert store.load().is_home
        assert "unreadable navigation state" in caplog.text

    @pytest.mark.parametrize("payload", [[], {"version": 0}, {"state": "nope"}])
    def test_malformed_payload_loads_home(self, store, payload):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(payload))

        assert store.load().is_home

    def test_save_replaces_previous(self, store):
        store.save(NavigationPosition(current_module="a.one"))
        store.save(NavigationPosition(current_module="b.two"))

        assert store.load().current_module == "b.two"

    def test_clear(self, store):
        store.save(NavigationPosition(current_module="a.one"))
        store.clear()
        store.clear()

        assert not store.path.exists()
        assert store.load().is_home

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        store = PositionStore(blocker / "nested", "app")

        with pytest.raises(OSError):
            store.save(NavigationPosition(current_module="a.one"))
