"""Persistence of the navigation position across restarts.

Only the current strand, topic and module are written. History and
module states are session-scoped and start empty after a restart.

File layout ({state_dir}/{app_name}.json):
    {"state": {"currentStrand": ..., "currentTopic": ..., "currentModule": ...},
     "version": 0}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mathviz.navigation.controller import NavigationPosition

logger = logging.getLogger(__name__)

STORE_VERSION = 0


class PositionStore:
    """Key-value store for the navigation position, keyed by application name.

    Args:
        state_dir: Directory holding the store file (created on first save)
        app_name: Fixed application name used as the store key
    """

    def __init__(self, state_dir: Path | str, app_name: str) -> None:
        self._state_dir = Path(state_dir)
        self._app_name = app_name

    @property
    def path(self) -> Path:
        return self._state_dir / f"{self._app_name}.json"

    def load(self) -> NavigationPosition:
        """Read the persisted position.

        Returns:
            The stored position, or the Home position when nothing is
            stored or the file cannot be read or parsed.
        """
        if not self.path.exists():
            return NavigationPosition()

        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable navigation state %s: %s", self.path, e)
            return NavigationPosition()

        state = payload.get("state") if isinstance(payload, dict) else None
        if not isinstance(state, dict):
            logger.warning("Ignoring malformed navigation state in %s", self.path)
            return NavigationPosition()
        return NavigationPosition.from_dict(state)

    def save(self, position: NavigationPosition) -> Path:
        """Write the position, replacing any previous value.

        Returns:
            Path to the written file

        Raises:
            OSError: If the directory or file cannot be written
        """
        payload = {"state": position.to_dict(), "version": STORE_VERSION}
        try:
            self._state_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.error("Failed to persist navigation state to %s: %s", self.path, e)
            raise
        return self.path

    def clear(self) -> None:
        """Delete the stored position if present."""
        self.path.unlink(missing_ok=True)
