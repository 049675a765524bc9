"""ModuleCatalog for registering and looking up visualization modules."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mathviz.catalog.descriptor import ModuleDescriptor, validate_descriptor
from mathviz.catalog.types import CatalogStats, RegistrationResult

logger = logging.getLogger(__name__)


class UnknownModuleError(KeyError):
    """Raised by ModuleCatalog.require() for an unregistered id."""


class ModuleCatalog:
    """Registry of visualization modules with strand, topic and tag indexes.

    The primary table maps module id -> descriptor. Each index maps a
    strand, topic or tag to the set of ids filed under it; buckets are
    created on first use. Every registered id is reachable through its
    strand, its topic and each of its tags until it is unregistered.
    """

    def __init__(self) -> None:
        self._modules: dict[str, ModuleDescriptor] = {}
        self._by_strand: dict[str, set[str]] = {}
        self._by_topic: dict[str, set[str]] = {}
        self._by_tag: dict[str, set[str]] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def register(self, descriptor: ModuleDescriptor | Mapping[str, Any]) -> RegistrationResult:
        """Validate a descriptor and add it to the catalog.

        Registering an id that is already present replaces the existing
        entry (last write wins) and reports a warning. A descriptor with
        any validation error is rejected and the catalog is left as it was.

        Args:
            descriptor: A ModuleDescriptor, or a plain mapping with the
                same field names

        Returns:
            RegistrationResult with success flag, errors and warnings
        """
        if isinstance(descriptor, Mapping):
            descriptor = ModuleDescriptor.from_mapping(descriptor)
        elif not isinstance(descriptor, ModuleDescriptor):
            module_id = getattr(descriptor, "id", None) or ""
            errors = [f"Module {module_id or 'unknown'} is not a module descriptor"]
            logger.warning("Rejected module %s: %s", module_id or "unknown", "; ".join(errors))
            return RegistrationResult(success=False, module_id=str(module_id), errors=errors)

        module_id = descriptor.id
        # Malformed ids are reported by validation; only a string can be a key.
        is_str_id = isinstance(module_id, str)
        warnings: list[str] = []
        if is_str_id and module_id in self._modules:
            warnings.append(
                f'Module "{module_id}" is already registered. Overwriting with new version.'
            )

        errors = validate_descriptor(descriptor)
        if errors:
            label = module_id if is_str_id and module_id else "unknown"
            logger.warning(
                "Rejected module %s: %s",
                label,
                "; ".join(errors),
                extra={"module_id": label},
            )
            return RegistrationResult(
                success=False,
                module_id=module_id if is_str_id else "",
                errors=errors,
                warnings=warnings,
            )

        for warning in warnings:
            logger.warning(warning, extra={"module_id": module_id})

        # Work out every bucket before touching any table, then commit.
        entries = self._index_entries(descriptor)
        previous = self._modules.get(module_id)
        if previous is not None:
            for index, key in self._index_entries(previous):
                index.get(key, set()).discard(module_id)

        self._modules[module_id] = descriptor
        for index, key in entries:
            index.setdefault(key, set()).add(module_id)

        logger.info(
            "Registered module: %s (%s)",
            module_id,
            descriptor.name,
            extra={"module_id": module_id, "strand": descriptor.strand},
        )
        return RegistrationResult(success=True, module_id=module_id, warnings=warnings)

    def unregister(self, module_id: str) -> bool:
        """Remove a module and prune it from every index bucket.

        Returns:
            True if the module was registered and has been removed
        """
        descriptor = self._modules.pop(module_id, None)
        if descriptor is None:
            return False
        for index, key in self._index_entries(descriptor):
            index.get(key, set()).discard(module_id)
        logger.info("Unregistered module: %s", module_id, extra={"module_id": module_id})
        return True

    def clear(self) -> None:
        """Drop all descriptors and indexes."""
        self._modules.clear()
        self._by_strand.clear()
        self._by_topic.clear()
        self._by_tag.clear()
        logger.info("Cleared all modules from catalog")

    def _index_entries(self, descriptor: ModuleDescriptor) -> list[tuple[dict[str, set[str]], str]]:
        """(index, key) pairs for every bucket a descriptor is filed under."""
        entries = [
            (self._by_strand, _key(descriptor.strand)),
            (self._by_topic, descriptor.topic),
        ]
        entries.extend((self._by_tag, tag) for tag in descriptor.tags)
        return entries

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, module_id: str) -> ModuleDescriptor | None:
        """Look up a module by id, returning None if it is not registered."""
        return self._modules.get(module_id)

    def require(self, module_id: str) -> ModuleDescriptor:
        """Look up a module by id.

        Raises:
            UnknownModuleError: If the id is not registered, with a message
                listing the available ids.
        """
        if module_id not in self._modules:
            available = sorted(self._modules.keys())
            raise UnknownModuleError(f"Unknown module '{module_id}'. Available modules: {available}")
        return self._modules[module_id]

    def has(self, module_id: str) -> bool:
        return module_id in self._modules

    def get_by_strand(self, strand: str) -> list[ModuleDescriptor]:
        """Return all modules filed under a strand."""
        return self._resolve(self._by_strand, _key(strand))

    def get_by_topic(self, topic: str) -> list[ModuleDescriptor]:
        """Return all modules filed under a topic."""
        return self._resolve(self._by_topic, topic)

    def get_by_tag(self, tag: str) -> list[ModuleDescriptor]:
        """Return all modules carrying a tag."""
        return self._resolve(self._by_tag, tag)

    def get_all(self) -> list[ModuleDescriptor]:
        """Return all modules in registration order."""
        return list(self._modules.values())

    def get_all_ids(self) -> list[str]:
        """Return all module ids in registration order."""
        return list(self._modules.keys())

    def search(self, text: str) -> list[ModuleDescriptor]:
        """Case-insensitive substring search over id, name, description and tags."""
        needle = text.strip().lower()
        if not needle:
            return self.get_all()
        return [
            descriptor
            for descriptor in self._modules.values()
            if needle in descriptor.id.lower()
            or needle in descriptor.name.lower()
            or needle in descriptor.description.lower()
            or any(needle in tag.lower() for tag in descriptor.tags)
        ]

    def _resolve(self, index: dict[str, set[str]], key: str) -> list[ModuleDescriptor]:
        """Map an index bucket back to descriptors, skipping ids with no primary entry."""
        module_ids = index.get(key)
        if not module_ids:
            return []
        # Registration order keeps results stable across calls.
        return [d for module_id, d in self._modules.items() if module_id in module_ids]

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_stats(self) -> CatalogStats:
        """Count modules overall and by strand, engine and difficulty."""
        by_engine: dict[str, int] = {}
        by_difficulty: dict[str, int] = {}
        for descriptor in self._modules.values():
            engine = _key(descriptor.engine)
            by_engine[engine] = by_engine.get(engine, 0) + 1
            difficulty = _key(descriptor.metadata.difficulty or "unknown")
            by_difficulty[difficulty] = by_difficulty.get(difficulty, 0) + 1

        return CatalogStats(
            total_modules=len(self._modules),
            modules_by_strand={strand: len(ids) for strand, ids in self._by_strand.items() if ids},
            modules_by_engine=by_engine,
            modules_by_difficulty=by_difficulty,
        )

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules


def _key(value: Any) -> str:
    """Normalize enum members to their string value for index keys."""
    return getattr(value, "value", value)
