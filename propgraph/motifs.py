"""
Motif Finding

A small declarative pattern language over a ``PropertyGraph``:

    (a)-[e]->(b)              every edge with both endpoints
    (a)-[e]->(b); (b)-[]->(c) two-hop paths through b
    (a)-[]->()                edges out of a, anonymous edge and destination
    (a)                       every vertex

Terms are separated by ``;``. A name used in several terms refers to the same
vertex. Named vertices must exist in the vertex frame; anonymous vertices only
constrain the edge. The result has one flattened column per attribute of every
named element, e.g. ``a.id``, ``a.name``, ``e.relationship``.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
from loguru import logger

from .errors import EngineError, PatternSyntaxError
from .frames import PropertyGraph

_NAME = r"\s*([A-Za-z_]\w*)?\s*"
_EDGE_TERM = re.compile(rf"^\({_NAME}\)\s*-\s*\[{_NAME}\]\s*->\s*\({_NAME}\)$")
_VERTEX_TERM = re.compile(rf"^\({_NAME}\)$")

_HIDDEN = "__"


@dataclass(frozen=True)
class MotifTerm:
    """One ``(src)-[edge]->(dst)`` or ``(vertex)`` term; empty names are anonymous."""

    src: Optional[str]
    edge: Optional[str] = None
    dst: Optional[str] = None
    is_edge: bool = True

    @property
    def vertex_names(self) -> List[str]:
        names = [self.src] if not self.is_edge else [self.src, self.dst]
        return [n for n in names if n]


def parse_pattern(pattern: str) -> List[MotifTerm]:
    """Parse a motif pattern into terms.

    Raises:
        PatternSyntaxError: If the pattern is empty, a term is malformed, or a
            name is reused inconsistently
    """
    if not pattern or not pattern.strip():
        raise PatternSyntaxError(pattern, "pattern is empty")

    terms: List[MotifTerm] = []
    offset = 0
    for raw in pattern.split(";"):
        text = raw.strip()
        position = offset + (len(raw) - len(raw.lstrip()))
        offset += len(raw) + 1

        if not text:
            raise PatternSyntaxError(pattern, "empty term", position)

        match = _EDGE_TERM.match(text)
        if match:
            src, edge, dst = match.groups()
            terms.append(MotifTerm(src=src, edge=edge, dst=dst))
            continue

        match = _VERTEX_TERM.match(text)
        if match:
            (name,) = match.groups()
            if not name:
                raise PatternSyntaxError(
                    pattern, "a vertex-only term must name its vertex", position
                )
            terms.append(MotifTerm(src=name, is_edge=False))
            continue

        raise PatternSyntaxError(pattern, f"cannot parse term {text!r}", position)

    _check_names(pattern, terms)
    return terms


def _check_names(pattern: str, terms: List[MotifTerm]) -> None:
    vertex_names = {n for term in terms for n in term.vertex_names}
    edge_names = [term.edge for term in terms if term.is_edge and term.edge]

    duplicated = {n for n in edge_names if edge_names.count(n) > 1}
    if duplicated:
        raise PatternSyntaxError(
            pattern, f"edge name(s) used more than once: {sorted(duplicated)}"
        )
    clash = vertex_names & set(edge_names)
    if clash:
        raise PatternSyntaxError(
            pattern, f"name(s) used for both a vertex and an edge: {sorted(clash)}"
        )
    hidden = {n for n in vertex_names | set(edge_names) if n.startswith(_HIDDEN)}
    if hidden:
        raise PatternSyntaxError(pattern, f"names may not start with '{_HIDDEN}'")


def _prefixed(frame: pd.DataFrame, name: str) -> pd.DataFrame:
    return frame.rename(columns=lambda column: f"{name}.{column}")


def _match_term(
    graph: PropertyGraph, term: MotifTerm, index: int, bound: set
) -> pd.DataFrame:
    """Match one term; vertices already bound by earlier terms only get an id column."""
    vertices = graph.vertices

    if not term.is_edge:
        if term.src in bound:
            return _prefixed(vertices[["id"]], term.src)
        return _prefixed(vertices, term.src)

    edge_name = term.edge or f"{_HIDDEN}e{index}"
    frame = _prefixed(graph.edges, edge_name)
    joined = set()

    for vertex_name, endpoint in ((term.src, "src"), (term.dst, "dst")):
        if not vertex_name:
            continue
        endpoint_column = f"{edge_name}.{endpoint}"
        id_column = f"{vertex_name}.id"

        if vertex_name in joined:
            # (a)-[e]->(a): the same vertex on both ends
            frame = frame[frame[endpoint_column] == frame[id_column]]
        elif vertex_name in bound:
            frame = frame.assign(**{id_column: frame[endpoint_column]})
        else:
            frame = frame.merge(
                _prefixed(vertices, vertex_name),
                left_on=endpoint_column,
                right_on=id_column,
                how="inner",
            )
        joined.add(vertex_name)

    return frame


def find(graph: PropertyGraph, pattern: str) -> pd.DataFrame:
    """Find all occurrences of ``pattern`` in ``graph``.

    Args:
        graph: Graph to search
        pattern: Motif pattern, see module docstring

    Returns:
        DataFrame with one row per match and ``<name>.<attribute>`` columns

    Raises:
        PatternSyntaxError: If the pattern cannot be parsed
        EngineError: If evaluation fails in the dataframe engine
    """
    terms = parse_pattern(pattern)

    try:
        result: Optional[pd.DataFrame] = None
        bound: set = set()
        for index, term in enumerate(terms):
            frame = _match_term(graph, term, index, bound)
            if result is None:
                result = frame
            else:
                shared = [f"{n}.id" for n in dict.fromkeys(term.vertex_names) if n in bound]
                if shared:
                    result = result.merge(frame, on=shared, how="inner")
                else:
                    result = result.merge(frame, how="cross")
            bound.update(term.vertex_names)
    except PatternSyntaxError:
        raise
    except Exception as e:
        logger.error(f"Motif evaluation failed for {pattern!r}: {e}")
        raise EngineError("pattern", f"Evaluation of {pattern!r} failed: {e}") from e

    visible = [c for c in result.columns if not c.startswith(_HIDDEN)]
    result = result[visible].reset_index(drop=True)
    logger.debug(f"Motif {pattern!r} matched {len(result)} row(s)")
    return result
