"""Application context wiring the catalog, navigation and state cache.

AppContext is the explicitly constructed replacement for process-wide
singletons: tests and the dashboard each build their own. It implements
the activation contract between the core and the rendering layer:

    ctx = AppContext.from_config(get_config())
    register_builtin_modules(ctx.catalog)

    active = ctx.activate_module("vectors.dot-cross-product")
    figure = active.render()              # render entry point gets (state, on_change)
    errors = active.on_change({"parameters": {...}})
    ctx.go_back()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mathviz.catalog.descriptor import ModuleDescriptor
from mathviz.catalog.protocols import ModuleState
from mathviz.catalog.registry import ModuleCatalog
from mathviz.config import AppConfig
from mathviz.navigation.controller import Breadcrumb, NavigationController, NavigationPosition
from mathviz.navigation.persistence import PositionStore
from mathviz.state.cache import ModuleStateCache
from mathviz.state.progress import ProgressTracker
from mathviz.syllabus import get_strand, get_topic

logger = logging.getLogger(__name__)


class ActiveModule:
    """A module bound to its current state, as handed to the rendering layer.

    Holds the working state, which may be invalid while the user is
    editing; only states that pass the module's validator are written to
    the cache.
    """

    def __init__(
        self,
        descriptor: ModuleDescriptor,
        state: ModuleState,
        cache: ModuleStateCache,
    ) -> None:
        self._descriptor = descriptor
        self._state = state
        self._cache = cache
        self._errors: list[str] = []

    @property
    def descriptor(self) -> ModuleDescriptor:
        return self._descriptor

    @property
    def module_id(self) -> str:
        return self._descriptor.id

    @property
    def state(self) -> ModuleState:
        return self._state

    @property
    def last_valid_state(self) -> ModuleState | None:
        """The most recent state that passed validation (the cached one)."""
        return self._cache.get_module_state(self.module_id)

    @property
    def errors(self) -> list[str]:
        """Validation errors from the most recent state change."""
        return list(self._errors)

    def on_change(self, updates: Mapping[str, Any]) -> list[str]:
        """Merge a partial update into the state and validate it.

        Top-level keys of ``updates`` replace those of the current state.
        The merged state always becomes the working state; it is saved to
        the cache only when the validator returns no errors.

        Returns:
            The validation errors for the merged state
        """
        new_state = {**self._state, **updates}
        errors = self._descriptor.validate(new_state)
        self._state = new_state
        self._errors = errors
        if not errors:
            self._cache.save_module_state(self.module_id, new_state)
        return list(errors)

    def render(self) -> Any:
        """Invoke the module's render entry point with (state, on_change)."""
        return self._descriptor.render(self._state, self.on_change)

    def reset(self) -> ModuleState:
        """Replace the state with a fresh initial state and cache it."""
        self._state = self._descriptor.create_initial_state()
        self._errors = []
        self._cache.save_module_state(self.module_id, self._state)
        return self._state


class AppContext:
    """Holds one catalog, navigation controller, state cache and progress tracker.

    Args:
        catalog: Module catalog (a fresh empty one if omitted)
        navigation: Navigation controller (default history bound if omitted)
        cache: Module state cache
        progress: Session progress tracker
        position_store: Optional store the navigation position is
            written to after every transition
    """

    def __init__(
        self,
        catalog: ModuleCatalog | None = None,
        navigation: NavigationController | None = None,
        cache: ModuleStateCache | None = None,
        progress: ProgressTracker | None = None,
        position_store: PositionStore | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else ModuleCatalog()
        self.navigation = navigation if navigation is not None else NavigationController()
        self.cache = cache if cache is not None else ModuleStateCache()
        self.progress = progress if progress is not None else ProgressTracker()
        self.position_store = position_store
        self._active: ActiveModule | None = None

    @classmethod
    def from_config(cls, config: AppConfig, catalog: ModuleCatalog | None = None) -> AppContext:
        """Build a context using the configured history bound and position store."""
        return cls(
            catalog=catalog,
            navigation=NavigationController(max_history_length=config.max_history_length),
            position_store=PositionStore(config.state_dir, config.app_name),
        )

    @property
    def active(self) -> ActiveModule | None:
        """The module currently handed to the rendering layer, if any."""
        return self._active

    # ------------------------------------------------------------------
    # Module activation
    # ------------------------------------------------------------------

    def activate_module(
        self,
        module_id: str,
        *,
        strand: str | None = None,
        topic: str | None = None,
    ) -> ActiveModule | None:
        """Navigate to a module and bind it to its cached or initial state.

        When ``strand`` or ``topic`` is given the controller navigates to
        them first. The module is not cross-checked against the topic.

        Returns:
            The ActiveModule, or None if the id is not registered (in
            which case navigation and the cache are left untouched)
        """
        descriptor = self.catalog.get(module_id)
        if descriptor is None:
            logger.warning("Cannot activate unregistered module %s", module_id)
            return None

        if strand is not None:
            self.navigation.navigate_to_strand(strand)
        if topic is not None:
            self.navigation.navigate_to_topic(topic)
        self.navigation.navigate_to_module(module_id)
        self._persist()
        return self._open(descriptor)

    def _open(self, descriptor: ModuleDescriptor) -> ActiveModule:
        """Bind a descriptor to its cached state, or to a fresh one saved immediately."""
        state = self.cache.get_module_state(descriptor.id)
        if state is not None:
            errors = descriptor.validate(state)
            if errors:
                logger.warning(
                    "Cached state for %s is invalid, using initial state: %s",
                    descriptor.id,
                    "; ".join(errors),
                    extra={"module_id": descriptor.id},
                )
                state = None
        if state is None:
            state = descriptor.create_initial_state()
            self.cache.save_module_state(descriptor.id, state)

        self.progress.visit_module(descriptor.id)
        self._active = ActiveModule(descriptor, state, self.cache)
        return self._active

    def _reopen_current(self) -> ActiveModule | None:
        module_id = self.navigation.current_module
        descriptor = self.catalog.get(module_id) if module_id else None
        if descriptor is None:
            self._active = None
            return None
        return self._open(descriptor)

    def reset_module(self, module_id: str) -> None:
        """Forget a module's cached state; the next activation starts fresh."""
        self.cache.clear_module_state(module_id)
        if self._active is not None and self._active.module_id == module_id:
            self._active.reset()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate_to_strand(self, strand_id: str) -> None:
        self.navigation.navigate_to_strand(strand_id)
        self._active = None
        self._persist()

    def navigate_to_topic(self, topic_id: str) -> None:
        self.navigation.navigate_to_topic(topic_id)
        self._active = None
        self._persist()

    def go_back(self) -> ActiveModule | None:
        """Go back one module visit and re-open that module with its cached state."""
        if not self.navigation.can_go_back():
            return self._active
        self.navigation.go_back()
        self._persist()
        return self._reopen_current()

    def go_home(self) -> None:
        """Clear position and history; cached module states are kept."""
        self.navigation.go_home()
        self._active = None
        self._persist()

    def restore_position(self) -> NavigationPosition:
        """Load the persisted position and re-open its module, if registered.

        History and the state cache are not persisted, so a restored
        module starts from its initial state. A restored registered module
        becomes the first history entry, so Back returns to it after the
        next module is opened.
        """
        if self.position_store is None:
            return self.navigation.position
        position = self.position_store.load()
        self.navigation.restore(position)
        if self._reopen_current() is not None:
            self.navigation.navigate_to_module(position.current_module)
        return position

    def get_breadcrumbs(self) -> list[Breadcrumb]:
        """Breadcrumbs for the current position, labelled with display names."""
        crumbs = []
        for crumb in self.navigation.get_breadcrumbs():
            crumbs.append(Breadcrumb(label=self._label(crumb), path=crumb.path, type=crumb.type))
        return crumbs

    def _label(self, crumb: Breadcrumb) -> str:
        if crumb.type == "strand":
            strand = get_strand(crumb.label)
            return strand.name if strand else crumb.label
        if crumb.type == "topic":
            topic = get_topic(crumb.label)
            return topic.name if topic else crumb.label
        descriptor = self.catalog.get(crumb.label)
        return descriptor.name if descriptor else crumb.label

    def _persist(self) -> None:
        if self.position_store is None:
            return
        try:
            self.position_store.save(self.navigation.position)
        except OSError:
            logger.warning("Navigation position not persisted; continuing with in-memory state")
