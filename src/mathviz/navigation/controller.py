"""Navigation through the strand -> topic -> module hierarchy.

The controller holds the current position and a bounded history of
module visits. Selecting a strand clears topic and module, selecting a
topic clears the module, and selecting a module is the only transition
that appends to history. It does not check that a module belongs to the
selected topic; callers own that consistency.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY_LENGTH = 50


@dataclass(frozen=True)
class NavigationPosition:
    """Current location; each field is None when not selected."""

    current_strand: str | None = None
    current_topic: str | None = None
    current_module: str | None = None

    @property
    def is_home(self) -> bool:
        return self.current_strand is None and self.current_topic is None and self.current_module is None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "currentStrand": self.current_strand,
            "currentTopic": self.current_topic,
            "currentModule": self.current_module,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NavigationPosition:
        """Build a position from to_dict() output, ignoring non-string values."""

        def _field(name: str) -> str | None:
            value = data.get(name)
            return value if isinstance(value, str) and value else None

        return cls(
            current_strand=_field("currentStrand"),
            current_topic=_field("currentTopic"),
            current_module=_field("currentModule"),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One module visit, recorded with the strand and topic active at the time."""

    strand: str | None
    topic: str | None
    module: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "strand": self.strand,
            "topic": self.topic,
            "module": self.module,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Breadcrumb:
    """One element of the breadcrumb trail."""

    label: str
    path: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "path": self.path, "type": self.type}


class NavigationController:
    """Tracks the current position and a bounded visit history.

    Args:
        max_history_length: Maximum number of history entries; the
            oldest entry is evicted first once the bound is reached
        clock: Timestamp source for history entries (seconds)
    """

    def __init__(
        self,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_history_length < 1:
            raise ValueError(f"max_history_length must be at least 1, got {max_history_length}")
        self._max_history_length = max_history_length
        self._clock = clock
        self._position = NavigationPosition()
        self._history: deque[HistoryEntry] = deque(maxlen=max_history_length)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def position(self) -> NavigationPosition:
        return self._position

    @property
    def current_strand(self) -> str | None:
        return self._position.current_strand

    @property
    def current_topic(self) -> str | None:
        return self._position.current_topic

    @property
    def current_module(self) -> str | None:
        return self._position.current_module

    @property
    def max_history_length(self) -> int:
        return self._max_history_length

    @property
    def history(self) -> list[HistoryEntry]:
        """Visit history, oldest first."""
        return list(self._history)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def navigate_to_strand(self, strand_id: str) -> None:
        """Select a strand; topic and module are cleared."""
        self._position = NavigationPosition(current_strand=strand_id)
        logger.debug("Navigated to strand %s", strand_id, extra={"strand": strand_id})

    def navigate_to_topic(self, topic_id: str) -> None:
        """Select a topic within the current strand; module is cleared."""
        self._position = NavigationPosition(
            current_strand=self._position.current_strand,
            current_topic=topic_id,
        )
        logger.debug("Navigated to topic %s", topic_id)

    def navigate_to_module(self, module_id: str) -> None:
        """Select a module and record the visit in history."""
        entry = HistoryEntry(
            strand=self._position.current_strand,
            topic=self._position.current_topic,
            module=module_id,
            timestamp=self._clock(),
        )
        # deque(maxlen=...) evicts from the left before appending.
        self._history.append(entry)
        self._position = NavigationPosition(
            current_strand=self._position.current_strand,
            current_topic=self._position.current_topic,
            current_module=module_id,
        )
        logger.debug("Navigated to module %s", module_id, extra={"module_id": module_id})

    def go_back(self) -> None:
        """Return to the previous module visit.

        No-op when history holds fewer than two entries. Otherwise the
        most recent entry is dropped and the position is restored from
        the entry before it, which becomes current.
        """
        if len(self._history) <= 1:
            return
        self._history.pop()
        previous = self._history[-1]
        self._position = NavigationPosition(
            current_strand=previous.strand,
            current_topic=previous.topic,
            current_module=previous.module,
        )
        logger.debug("Went back to module %s", previous.module)

    def go_home(self) -> None:
        """Clear the position and the history."""
        self._position = NavigationPosition()
        self._history.clear()
        logger.debug("Navigated home")

    def restore(self, position: NavigationPosition) -> None:
        """Set the position directly, e.g. from persisted state; history is untouched."""
        self._position = position

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def can_go_back(self) -> bool:
        return len(self._history) > 1

    def get_breadcrumbs(self) -> list[Breadcrumb]:
        """Project the current position to strand, topic, module breadcrumbs."""
        crumbs: list[Breadcrumb] = []
        if self._position.current_strand:
            strand = self._position.current_strand
            crumbs.append(Breadcrumb(label=strand, path=f"/strand/{strand}", type="strand"))
        if self._position.current_topic:
            topic = self._position.current_topic
            crumbs.append(Breadcrumb(label=topic, path=f"/topic/{topic}", type="topic"))
        if self._position.current_module:
            module = self._position.current_module
            crumbs.append(Breadcrumb(label=module, path=f"/module/{module}", type="module"))
        return crumbs
