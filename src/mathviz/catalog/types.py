"""Type definitions for visualization module descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SyllabusStrand(str, Enum):
    """The six strands of the syllabus hierarchy.

    The set is closed: a descriptor whose strand is not one of these
    values is still indexed under the raw string it declares, but the
    sidebar only renders these six.
    """

    FUNCTIONS = "pure-math-functions"
    CALCULUS = "pure-math-calculus"
    VECTORS = "pure-math-vectors"
    COMPLEX = "pure-math-complex"
    PROBABILITY = "statistics-probability"
    DISTRIBUTIONS = "statistics-distributions"


class VisualizationEngine(str, Enum):
    """Rendering technology a module's entry point expects.

    Informational only: the catalog counts modules per engine but never
    branches on it.
    """

    PLOTLY = "plotly"
    PLOTLY_3D = "plotly-3d"
    SVG = "svg"
    HTML = "html"


class DifficultyLevel(str, Enum):
    """Difficulty levels for modules."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class SyllabusRef:
    """Placement of a module in the strand/topic hierarchy.

    Attributes:
        strand: One of the SyllabusStrand values
        topic: Free-form topic identifier used for secondary indexing
        subtopic: Optional finer-grained placement
    """

    strand: str
    topic: str
    subtopic: str | None = None


@dataclass(frozen=True)
class ModuleMetadata:
    """Descriptive metadata carried by every module.

    Attributes:
        version: Module version string (semver)
        tags: Free-form tags for search and categorization
        author: Optional author information
        difficulty: Optional difficulty level
        prerequisites: Ids of modules that should be completed first
        estimated_time: Estimated time to complete, in minutes
        learning_objectives: Learning objectives addressed by the module
    """

    version: str
    tags: list[str] = field(default_factory=list)
    author: str | None = None
    difficulty: str | None = None
    prerequisites: list[str] = field(default_factory=list)
    estimated_time: int | None = None
    learning_objectives: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a single ModuleCatalog.register() call."""

    success: bool
    module_id: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "moduleId": self.module_id}
        if self.errors:
            result["errors"] = list(self.errors)
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


@dataclass(frozen=True)
class CatalogStats:
    """Counts over the registered modules.

    Attributes:
        total_modules: Number of registered modules
        modules_by_strand: Strand -> module count (only strands with a bucket)
        modules_by_engine: Engine tag -> module count
        modules_by_difficulty: Difficulty -> module count, "unknown" when absent
    """

    total_modules: int
    modules_by_strand: dict[str, int]
    modules_by_engine: dict[str, int]
    modules_by_difficulty: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalModules": self.total_modules,
            "modulesByStrand": dict(self.modules_by_strand),
            "modulesByEngine": dict(self.modules_by_engine),
            "modulesByDifficulty": dict(self.modules_by_difficulty),
        }
