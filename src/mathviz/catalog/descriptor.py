"""Module descriptor value object and its registration-time validation.

A ModuleDescriptor is the unit of registration: identity, syllabus
placement, the render entry point, the initial-state factory and the
state validator of one visualization module.

validate_descriptor() collects every problem it finds rather than
stopping at the first, and smoke-tests the initial-state factory once.
It never raises; exceptions from the factory become error strings.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mathviz.catalog.protocols import (
    InitialStateFactory,
    ModuleState,
    RenderEntryPoint,
    StateMigrator,
    StateValidator,
)
from mathviz.catalog.types import ModuleMetadata, SyllabusRef

# Dotted path, each segment lowercase alphanumerics joined by single hyphens.
MODULE_ID_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*(\.[a-z0-9]+(-[a-z0-9]+)*)+$")

REQUIRED_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "description",
    "syllabus_ref",
    "engine",
    "render",
    "get_initial_state",
    "validate_state",
    "metadata",
)

_CALLABLE_FIELDS: tuple[str, ...] = ("render", "get_initial_state", "validate_state")

_STRING_FIELDS: tuple[str, ...] = ("name", "description", "engine")


@dataclass(frozen=True)
class ModuleDescriptor:
    """Declarative record describing one pluggable visualization module.

    Attributes:
        id: Globally unique dotted id (e.g., "vectors.dot-cross-product")
        name: Display name shown in the sidebar
        description: Brief description of what the module demonstrates
        syllabus_ref: Strand/topic placement
        engine: Rendering technology tag (see VisualizationEngine)
        render: Entry point invoked by the rendering layer with
            (state, on_change). Never called by the catalog.
        get_initial_state: Zero-argument factory for a fresh state mapping whose
            "topic_id" names this module
        validate_state: State -> list of error strings
        metadata: Version, tags and descriptive extras
        migrate_state: Optional upgrade hook for states saved by an older
            module version
    """

    id: str
    name: str
    description: str
    syllabus_ref: SyllabusRef
    engine: str
    render: RenderEntryPoint
    get_initial_state: InitialStateFactory
    validate_state: StateValidator
    metadata: ModuleMetadata
    migrate_state: StateMigrator | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ModuleDescriptor:
        """Build a descriptor from a plain mapping without validating it.

        Missing keys become None so that validate_descriptor() can report
        them; nested "syllabus_ref" and "metadata" mappings are converted
        to their dataclasses.
        """
        syllabus_ref = data.get("syllabus_ref")
        if isinstance(syllabus_ref, Mapping):
            syllabus_ref = SyllabusRef(
                strand=syllabus_ref.get("strand"),  # type: ignore[arg-type]
                topic=syllabus_ref.get("topic"),  # type: ignore[arg-type]
                subtopic=syllabus_ref.get("subtopic"),
            )

        metadata = data.get("metadata")
        if isinstance(metadata, Mapping):
            metadata = ModuleMetadata(
                version=metadata.get("version"),  # type: ignore[arg-type]
                tags=metadata.get("tags"),  # type: ignore[arg-type]
                author=metadata.get("author"),
                difficulty=metadata.get("difficulty"),
                prerequisites=metadata.get("prerequisites") or [],  # type: ignore[arg-type]
                estimated_time=metadata.get("estimated_time"),
                learning_objectives=metadata.get("learning_objectives") or [],  # type: ignore[arg-type]
            )

        return cls(
            id=data.get("id"),  # type: ignore[arg-type]
            name=data.get("name"),  # type: ignore[arg-type]
            description=data.get("description"),  # type: ignore[arg-type]
            syllabus_ref=syllabus_ref,  # type: ignore[arg-type]
            engine=data.get("engine"),  # type: ignore[arg-type]
            render=data.get("render"),  # type: ignore[arg-type]
            get_initial_state=data.get("get_initial_state"),  # type: ignore[arg-type]
            validate_state=data.get("validate_state"),  # type: ignore[arg-type]
            metadata=metadata,  # type: ignore[arg-type]
            migrate_state=data.get("migrate_state"),
        )

    @property
    def strand(self) -> str:
        return self.syllabus_ref.strand

    @property
    def topic(self) -> str:
        return self.syllabus_ref.topic

    @property
    def tags(self) -> list[str]:
        return list(self.metadata.tags)

    def create_initial_state(self) -> ModuleState:
        """Produce a fresh state from the module's factory."""
        return self.get_initial_state()

    def validate(self, state: ModuleState) -> list[str]:
        """Run the module's validator, returning its errors as a list."""
        return list(self.validate_state(state))


def is_valid_module_id(module_id: Any) -> bool:
    """Check a module id against the dotted-path format.

    Args:
        module_id: Candidate id (non-strings are never valid)

    Returns:
        True if the id has at least two dot-separated segments, each
        matching [a-z0-9]+(-[a-z0-9]+)*
    """
    return isinstance(module_id, str) and MODULE_ID_PATTERN.match(module_id) is not None


def state_topic_id(state: Any) -> str | None:
    """Read the "topic_id" key of a module state; None for non-mappings."""
    if isinstance(state, Mapping):
        return state.get("topic_id")
    return None


def validate_descriptor(descriptor: ModuleDescriptor) -> list[str]:
    """Collect all registration errors for a descriptor.

    Checks required fields, id format, that the entry point, factory and
    validator are callable, the syllabus reference, the metadata, and
    finally invokes the initial-state factory once as a smoke test.

    Args:
        descriptor: The descriptor to validate; may be malformed

    Returns:
        List of error strings, empty if the descriptor is valid
    """
    errors: list[str] = []
    module_id = getattr(descriptor, "id", None)
    label = module_id if isinstance(module_id, str) and module_id else "unknown"

    for field_name in REQUIRED_FIELDS:
        if getattr(descriptor, field_name, None) is None:
            errors.append(f"Module {label} missing required field: {field_name}")

    if module_id is not None and not is_valid_module_id(module_id):
        errors.append(
            f'Module ID "{module_id}" invalid. Expected a dotted path such as '
            '"strand.topic" or "topic.visualization"'
        )

    for field_name in _STRING_FIELDS:
        value = getattr(descriptor, field_name, None)
        if value is not None and not isinstance(value, str):
            errors.append(f"Module {label} {field_name} must be a string")

    for field_name in _CALLABLE_FIELDS:
        value = getattr(descriptor, field_name, None)
        if value is not None and not callable(value):
            errors.append(f"Module {label} {field_name} must be callable")

    migrate_state = getattr(descriptor, "migrate_state", None)
    if migrate_state is not None and not callable(migrate_state):
        errors.append(f"Module {label} migrate_state must be callable")

    syllabus_ref = getattr(descriptor, "syllabus_ref", None)
    if syllabus_ref is not None:
        # Strand and topic become index keys, so they must be strings
        # (SyllabusStrand members are str).
        for part in ("strand", "topic"):
            value = getattr(syllabus_ref, part, None)
            if value is None or (isinstance(value, str) and not value):
                errors.append(f"Module {label} missing syllabus_ref.{part}")
            elif not isinstance(value, str):
                errors.append(f"Module {label} syllabus_ref.{part} must be a string")

    metadata = getattr(descriptor, "metadata", None)
    if metadata is not None:
        if not getattr(metadata, "version", None):
            errors.append(f"Module {label} missing metadata.version")
        tags = getattr(metadata, "tags", None)
        if not isinstance(tags, (list, tuple)):
            errors.append(f"Module {label} metadata.tags must be a list")
        elif not all(isinstance(tag, str) for tag in tags):
            errors.append(f"Module {label} metadata.tags must contain only strings")

    factory = getattr(descriptor, "get_initial_state", None)
    if callable(factory):
        errors.extend(_smoke_test_initial_state(label, factory))

    return errors


def _smoke_test_initial_state(label: str, factory: Any) -> list[str]:
    """Invoke the factory once and check the shape of what it returns."""
    try:
        state = factory()
    except Exception as e:
        return [f"Module {label} get_initial_state() raised an error: {e}"]

    if not isinstance(state, Mapping):
        return [f"Module {label} get_initial_state() must return a module state object"]
    if not state_topic_id(state):
        return [f"Module {label} initial state missing topic_id"]
    return []
