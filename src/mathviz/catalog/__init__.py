"""Module catalog: descriptors, validation and the indexed registry.

Key concepts:
- ModuleDescriptor: declarative record describing one visualization module
- ModuleCatalog: registry with strand, topic and tag indexes
- validate_descriptor: collect-all registration validation

Example usage:
    from mathviz.catalog import ModuleCatalog

    catalog = ModuleCatalog()
    result = catalog.register(descriptor)
    if not result.success:
        print(result.errors)

    for module in catalog.get_by_strand("pure-math-vectors"):
        print(module.id, module.name)
"""

from mathviz.catalog.descriptor import (
    MODULE_ID_PATTERN,
    REQUIRED_FIELDS,
    ModuleDescriptor,
    is_valid_module_id,
    state_topic_id,
    validate_descriptor,
)
from mathviz.catalog.protocols import (
    InitialStateFactory,
    ModuleState,
    RenderEntryPoint,
    StateChangeCallback,
    StateMigrator,
    StateValidator,
)
from mathviz.catalog.registry import ModuleCatalog, UnknownModuleError
from mathviz.catalog.types import (
    CatalogStats,
    DifficultyLevel,
    ModuleMetadata,
    RegistrationResult,
    SyllabusRef,
    SyllabusStrand,
    VisualizationEngine,
)

__all__ = [
    # Protocols
    "InitialStateFactory",
    "ModuleState",
    "RenderEntryPoint",
    "StateChangeCallback",
    "StateMigrator",
    "StateValidator",
    # Classes
    "ModuleCatalog",
    "ModuleDescriptor",
    "UnknownModuleError",
    # Types
    "CatalogStats",
    "DifficultyLevel",
    "ModuleMetadata",
    "RegistrationResult",
    "SyllabusRef",
    "SyllabusStrand",
    "VisualizationEngine",
    # Validation
    "MODULE_ID_PATTERN",
    "REQUIRED_FIELDS",
    "is_valid_module_id",
    "state_topic_id",
    "validate_descriptor",
]
