"""Static syllabus hierarchy: six strands, each with its topics.

This structure drives the sidebar. Each topic lists the module ids the
syllabus expects to cover it; the sidebar shows whichever of those (plus
anything filed under the topic in the catalog) is actually registered.
Nothing here enforces an order of study.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mathviz.catalog.types import SyllabusStrand


@dataclass(frozen=True)
class SyllabusTopic:
    """A topic within a strand."""

    id: str
    name: str
    description: str
    module_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SyllabusStrandDef:
    """A strand and its topics."""

    id: SyllabusStrand
    name: str
    description: str
    icon: str
    color: str
    topics: tuple[SyllabusTopic, ...] = field(default_factory=tuple)


def _topic(topic_id: str, name: str, description: str, *module_ids: str) -> SyllabusTopic:
    return SyllabusTopic(id=topic_id, name=name, description=description, module_ids=module_ids)


SYLLABUS_STRUCTURE: tuple[SyllabusStrandDef, ...] = (
    SyllabusStrandDef(
        id=SyllabusStrand.FUNCTIONS,
        name="Functions & Graphs",
        description="Functions, transformations, and graphing techniques",
        icon="function",
        color="blue",
        topics=(
            _topic("functions-domain-range", "Domain & Range", "Finding domain and range of functions", "functions.basics"),
            _topic("functions-composite", "Composite Functions", "Function composition and properties", "functions.basics"),
            _topic("functions-inverse", "Inverse Functions", "Finding and working with inverse functions", "functions.basics"),
            _topic("graphs-transformations-basic", "Transformations", "Translations, reflections, and scaling", "functions.transformations"),
            _topic("graphs-rational", "Rational Functions", "Graphing rational functions and asymptotes", "functions.rational"),
        ),
    ),
    SyllabusStrandDef(
        id=SyllabusStrand.CALCULUS,
        name="Calculus",
        description="Differentiation and integration techniques",
        icon="integral",
        color="green",
        topics=(
            _topic("differentiation-basic", "Basic Differentiation", "Power rule, product rule, quotient rule, chain rule", "calculus.differentiation"),
            _topic("differentiation-implicit", "Implicit Differentiation", "Differentiating implicit functions", "calculus.differentiation"),
            _topic("differentiation-applications", "Applications of Differentiation", "Tangents, normals, maxima, minima, optimization", "calculus.differentiation"),
            _topic("integration-basic", "Basic Integration", "Standard integrals and substitution", "calculus.integration"),
            _topic("integration-parts", "Integration by Parts", "Integration by parts technique", "calculus.integration"),
            _topic("integration-applications", "Applications of Integration", "Area under curve, volume of revolution", "calculus.integration"),
            _topic("differential-equations", "Differential Equations", "First-order differential equations", "calculus.differential-equations"),
        ),
    ),
    SyllabusStrandDef(
        id=SyllabusStrand.VECTORS,
        name="Vectors",
        description="2D and 3D vectors, dot product, cross product",
        icon="vector",
        color="purple",
        topics=(
            _topic("vectors-2d-operations", "2D Vector Operations", "Addition, subtraction, scalar multiplication", "vectors.2d-vectors"),
            _topic("vectors-2d-dot-product", "2D Dot Product", "Dot product and applications", "vectors.2d-vectors"),
            _topic("vectors-3d-operations", "3D Vector Operations", "Addition, subtraction, scalar multiplication in 3D", "vectors.3d-operations"),
            _topic("vectors-3d-products", "Dot & Cross Product", "Dot product, cross product, and applications", "vectors.dot-cross-product"),
            _topic("vectors-3d-geometry", "Lines & Planes", "Equations of lines and planes in 3D", "vectors.lines-planes"),
        ),
    ),
    SyllabusStrandDef(
        id=SyllabusStrand.COMPLEX,
        name="Complex Numbers",
        description="Complex number operations and Argand diagram",
        icon="complex",
        color="orange",
        topics=(
            _topic("complex-arithmetic", "Arithmetic", "Addition, subtraction, multiplication, division", "complex.arithmetic"),
            _topic("complex-modulus-argument", "Modulus & Argument", "Modulus-argument form and conversions", "complex.arithmetic"),
            _topic("complex-argand", "Argand Diagram", "Geometric representation of complex numbers", "complex.arithmetic"),
            _topic("complex-roots", "Roots of Unity", "Finding nth roots of complex numbers", "complex.roots-of-unity"),
        ),
    ),
    SyllabusStrandDef(
        id=SyllabusStrand.PROBABILITY,
        name="Probability",
        description="Counting principles, probability theory",
        icon="dice",
        color="red",
        topics=(
            _topic("fundamental-principles", "Fundamental Principles", "Additive and multiplicative principles", "combinatorics.additive-principle", "combinatorics.multiplicative-principle"),
            _topic("permutations", "Permutations", "Arrangements with order", "combinatorics.slot-method"),
            _topic("combinations", "Combinations", "Selection without order"),
            _topic("counting-restrictions", "Restricted Arrangements", "Arrangements with restrictions", "combinatorics.non-adjacent", "combinatorics.adjacent"),
            _topic("advanced-cases", "Advanced Cases", "Complex problems combining multiple principles", "combinatorics.advanced-cases"),
            _topic("probability-fundamentals", "Basic Concepts", "Sample space, events, and calculating probabilities", "probability.basic-concepts"),
            _topic("probability-rules", "Probability Rules", "Addition rule, multiplication rule, and special cases", "probability.rules"),
            _topic("probability-conditional", "Conditional Probability & Bayes", "Conditional probability and Bayes' Theorem", "probability.conditional"),
            _topic("probability-venn-diagrams", "Venn Diagrams", "Set operations and probability with Venn diagrams", "probability.venn-diagrams"),
            _topic("probability-tree-diagrams", "Tree Diagrams", "Sequential probability using tree diagrams", "probability.tree-diagrams"),
            _topic("probability-independence", "Independence", "Independent and mutually exclusive events"),
        ),
    ),
    SyllabusStrandDef(
        id=SyllabusStrand.DISTRIBUTIONS,
        name="Distributions",
        description="Probability distributions and statistical inference",
        icon="chart",
        color="teal",
        topics=(
            _topic("general-discrete-rv", "Discrete Random Variables", "Probability distributions, expectation, and variance", "statistics.discrete-rv"),
            _topic("distribution-binomial", "Binomial Distribution", "Binomial probability distribution", "statistics.binomial-distribution"),
            _topic("distribution-poisson", "Poisson Distribution", "Poisson probability distribution"),
            _topic("distribution-normal", "Normal Distribution", "Normal probability distribution and Z-scores", "statistics.normal-distribution"),
            _topic("sampling-distributions", "Sampling Distributions", "Central Limit Theorem and sampling distributions", "statistics.sampling"),
            _topic("hypothesis-testing", "Hypothesis Testing", "Testing hypotheses about population parameters", "statistics.hypothesis-testing"),
            _topic("correlation-regression", "Correlation & Regression", "Analyzing relationships between variables", "statistics.correlation-regression"),
        ),
    ),
)


def get_strand(strand_id: str) -> SyllabusStrandDef | None:
    """Look up a strand by id (plain string or SyllabusStrand)."""
    for strand in SYLLABUS_STRUCTURE:
        if strand.id == strand_id:
            return strand
    return None


def get_topic(topic_id: str) -> SyllabusTopic | None:
    """Look up a topic by id across all strands."""
    for strand in SYLLABUS_STRUCTURE:
        for topic in strand.topics:
            if topic.id == topic_id:
                return topic
    return None


def get_strand_for_topic(topic_id: str) -> SyllabusStrandDef | None:
    """Return the strand containing a topic."""
    for strand in SYLLABUS_STRUCTURE:
        if any(topic.id == topic_id for topic in strand.topics):
            return strand
    return None


def get_topics_for_strand(strand_id: str) -> list[SyllabusTopic]:
    strand = get_strand(strand_id)
    return list(strand.topics) if strand is not None else []


def get_all_topics() -> list[SyllabusTopic]:
    """Return every topic, flattened in strand order."""
    return [topic for strand in SYLLABUS_STRUCTURE for topic in strand.topics]
