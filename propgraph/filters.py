"""
Vertex Filtering

Select vertices by an injected predicate over one of their attributes. The
predicate is a first-class value: a plain callable or an ``IVertexPredicate``.
"""

from typing import Any, Callable, List, Sequence, Tuple, Union

from loguru import logger

from .errors import EngineError, SchemaError
from .frames import PropertyGraph, collect
from .interfaces import IVertexPredicate

Predicate = Union[Callable[[Any], bool], IVertexPredicate]


class ThresholdPredicate(IVertexPredicate):
    """Keep values strictly greater than a threshold (or >= when inclusive)."""

    def __init__(self, threshold: Any, inclusive: bool = False):
        self.threshold = threshold
        self.inclusive = inclusive

    def __call__(self, value: Any) -> bool:
        if self.inclusive:
            return value >= self.threshold
        return value > self.threshold

    def describe(self) -> str:
        return f"{'>=' if self.inclusive else '>'} {self.threshold}"


class RangePredicate(IVertexPredicate):
    """Keep values inside the closed range ``[low, high]``."""

    def __init__(self, low: Any, high: Any):
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")
        self.low = low
        self.high = high

    def __call__(self, value: Any) -> bool:
        return self.low <= value <= self.high

    def describe(self) -> str:
        return f"in [{self.low}, {self.high}]"


def older_than(age: int) -> IVertexPredicate:
    return ThresholdPredicate(age)


def age_between(low: int, high: int) -> IVertexPredicate:
    return RangePredicate(low, high)


def _describe(predicate: Predicate) -> str:
    if isinstance(predicate, IVertexPredicate):
        return predicate.describe()
    return getattr(predicate, "__name__", repr(predicate))


def filter_vertices(
    graph: PropertyGraph,
    predicate: Predicate,
    attribute: str = "age",
    columns: Sequence[str] = ("name", "age"),
) -> List[Tuple]:
    """Return the vertices whose ``attribute`` satisfies ``predicate``.

    Args:
        graph: Graph to filter
        predicate: Function of one attribute value returning a bool
        attribute: Vertex column the predicate is applied to
        columns: Vertex columns projected into the result

    Returns:
        List of tuples over ``columns``; order is unspecified

    Raises:
        SchemaError: If ``attribute`` or a projected column does not exist
        EngineError: If the predicate raises
    """
    vertices = graph.vertices
    missing = [c for c in (attribute, *columns) if c not in vertices.columns]
    if missing:
        raise SchemaError(f"Vertex frame has no column(s) {missing}")

    if len(vertices) == 0:
        return []

    try:
        mask = vertices[attribute].map(lambda value: bool(predicate(value)))
    except Exception as e:
        logger.error(f"Vertex filter failed: {e}")
        raise EngineError("filter", f"Predicate {_describe(predicate)} failed: {e}") from e

    matched = vertices[mask.astype(bool)]
    logger.debug(
        f"Filter {attribute} {_describe(predicate)} kept {len(matched)}/{len(vertices)} vertices"
    )
    return collect(matched, columns)


def vertices_older_than(graph: PropertyGraph, age: int) -> List[Tuple]:
    """Fixed-threshold form of ``filter_vertices``: vertices with age > ``age``."""
    return filter_vertices(graph, older_than(age))
