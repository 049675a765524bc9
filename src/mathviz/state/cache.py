"""Session-scoped store of in-progress module states.

Entries are keyed by module id and hold the last known state for that
module. The cache does not interpret or validate states, and nothing
evicts an entry except clear_module_state() or reset_all_states(). It is
independent of navigation history, so going home keeps in-progress work.
"""

from __future__ import annotations

import logging

from mathviz.catalog.protocols import ModuleState

logger = logging.getLogger(__name__)


class ModuleStateCache:
    """Keyed store of the last known state for every touched module."""

    def __init__(self) -> None:
        self._states: dict[str, ModuleState] = {}

    def save_module_state(self, module_id: str, state: ModuleState) -> None:
        """Overwrite the cached state for a module."""
        self._states[module_id] = state

    def get_module_state(self, module_id: str) -> ModuleState | None:
        """Return the cached state, or None if the module has none."""
        return self._states.get(module_id)

    def has_module_state(self, module_id: str) -> bool:
        return module_id in self._states

    def clear_module_state(self, module_id: str) -> bool:
        """Evict one module's state.

        Returns:
            True if a state was cached for the module
        """
        removed = self._states.pop(module_id, None) is not None
        if removed:
            logger.debug("Cleared state for %s", module_id, extra={"module_id": module_id})
        return removed

    def reset_all_states(self) -> None:
        """Evict every cached state."""
        self._states.clear()
        logger.info("Reset all module states")

    def module_ids(self) -> list[str]:
        """Ids of modules with cached state, in first-save order."""
        return list(self._states.keys())

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._states
