"""
Graph Construction

This module builds the dataframe-backed property graph: a vertex frame whose
first column is ``id`` and an edge frame carrying ``src`` and ``dst``. The
resulting ``PropertyGraph`` is read-only; every query builds new frames.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import pandas as pd
from loguru import logger

from .errors import EngineError, SchemaError

VERTEX_COLUMNS = ("id", "name", "age")
EDGE_COLUMNS = ("src", "dst", "relationship")


def collect(frame: pd.DataFrame, columns: Optional[Sequence[str]] = None) -> List[Tuple]:
    """Materialize a frame (or a projection of it) as a list of plain tuples."""
    if columns is not None:
        frame = frame[list(columns)]
    return list(frame.itertuples(index=False, name=None))


class PropertyGraph:
    """Immutable pairing of a vertex frame and an edge frame.

    The frames handed in are copied, and the ``vertices``/``edges`` properties
    return copies, so no caller can change the graph after construction.

    Example:
        g = build_graph([("1", "Alice", 28)], [("1", "1", 3)])
        g.vertices.columns.tolist()  # ['id', 'name', 'age']
    """

    def __init__(self, vertices: pd.DataFrame, edges: pd.DataFrame):
        _check_schema(vertices, edges)
        self._vertices = vertices.reset_index(drop=True).copy()
        self._edges = edges.reset_index(drop=True).copy()
        self._cached = False
        self._adjacency: Optional[Dict[Hashable, List[Hashable]]] = None

    @classmethod
    def from_frames(cls, vertices: pd.DataFrame, edges: pd.DataFrame) -> "PropertyGraph":
        """Wrap existing frames, validating the required columns."""
        return cls(vertices, edges)

    @property
    def vertices(self) -> pd.DataFrame:
        return self._vertices.copy()

    @property
    def edges(self) -> pd.DataFrame:
        return self._edges.copy()

    @property
    def vertex_attributes(self) -> List[str]:
        """Vertex columns other than ``id``."""
        return [c for c in self._vertices.columns if c != "id"]

    @property
    def edge_attributes(self) -> List[str]:
        """Edge columns other than ``src`` and ``dst``."""
        return [c for c in self._edges.columns if c not in ("src", "dst")]

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def is_cached(self) -> bool:
        return self._cached

    def cache(self) -> "PropertyGraph":
        """Mark the graph for reuse across queries.

        Once set the flag is never cleared; derived indexes are kept after
        their first computation.
        """
        self._cached = True
        return self

    def out_degrees(self) -> pd.DataFrame:
        """Number of outgoing edges per source vertex (columns ``id``, ``outDegree``)."""
        return self._degrees("src", "outDegree")

    def in_degrees(self) -> pd.DataFrame:
        """Number of incoming edges per destination vertex (columns ``id``, ``inDegree``)."""
        return self._degrees("dst", "inDegree")

    def _degrees(self, column: str, name: str) -> pd.DataFrame:
        counts = self._edges.groupby(column, sort=False).size()
        return counts.rename(name).rename_axis("id").reset_index()

    def adjacency(self) -> Dict[Hashable, List[Hashable]]:
        """Out-neighbour lists keyed by vertex id, in vertex order.

        Only edges whose endpoints are both vertices of the graph are included.
        Parallel edges appear once per edge.
        """
        if self._adjacency is not None:
            return self._adjacency

        adjacency: Dict[Hashable, List[Hashable]] = {v: [] for v in self._vertices["id"]}
        for src, dst in zip(self._edges["src"], self._edges["dst"]):
            if src in adjacency and dst in adjacency:
                adjacency[src].append(dst)

        if self._cached:
            self._adjacency = adjacency
        return adjacency

    def find(self, pattern: str) -> pd.DataFrame:
        """Evaluate a motif pattern such as ``"(a)-[e]->(b)"``."""
        from .motifs import find

        return find(self, pattern)

    def triplets(self) -> pd.DataFrame:
        """All ``(src)-[edge]->(dst)`` matches of the graph."""
        return self.find("(src)-[edge]->(dst)")

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export to a networkx multigraph, keeping vertex and edge attributes."""
        graph = nx.MultiDiGraph()
        for record in self._vertices.to_dict("records"):
            vertex_id = record.pop("id")
            graph.add_node(vertex_id, **record)
        for record in self._edges.to_dict("records"):
            src = record.pop("src")
            dst = record.pop("dst")
            graph.add_edge(src, dst, **record)
        return graph

    def __repr__(self) -> str:
        return (
            f"PropertyGraph(vertices={self.num_vertices}, edges={self.num_edges}, "
            f"cached={self._cached})"
        )


def _check_schema(vertices: pd.DataFrame, edges: pd.DataFrame) -> None:
    if len(vertices.columns) == 0 or vertices.columns[0] != "id":
        raise SchemaError(
            f"Vertex frame must have 'id' as its first column, got {list(vertices.columns)}"
        )
    missing = [c for c in ("src", "dst") if c not in edges.columns]
    if missing:
        raise SchemaError(
            f"Edge frame is missing required column(s) {missing}, got {list(edges.columns)}"
        )


def _to_frame(rows: Iterable[Sequence[Any]], columns: Sequence[str], kind: str) -> pd.DataFrame:
    try:
        rows = [tuple(row) for row in rows]
    except TypeError as e:
        raise SchemaError(f"{kind} rows must be sequences of fields: {e}") from e
    for position, row in enumerate(rows):
        if len(row) != len(columns):
            raise SchemaError(
                f"{kind} row {position} has {len(row)} field(s), expected {len(columns)} "
                f"for columns {list(columns)}"
            )
    try:
        return pd.DataFrame(rows, columns=list(columns))
    except Exception as e:
        logger.error(f"Building the {kind.lower()} frame failed: {e}")
        raise EngineError("construction", f"Could not build {kind.lower()} frame: {e}") from e


def validate_graph(graph: PropertyGraph) -> None:
    """Fail fast on duplicate vertex ids or edges pointing at unknown vertices.

    Raises:
        SchemaError: If either check fails
    """
    vertices = graph.vertices
    edges = graph.edges

    duplicated = vertices.loc[vertices["id"].duplicated(), "id"].tolist()
    if duplicated:
        raise SchemaError(f"Duplicate vertex id(s): {duplicated}")

    known = vertices["id"]
    dangling = edges[~edges["src"].isin(known) | ~edges["dst"].isin(known)]
    if len(dangling):
        pairs = list(zip(dangling["src"], dangling["dst"]))
        raise SchemaError(f"Edge(s) reference unknown vertices: {pairs}")


def build_graph(
    vertex_rows: Iterable[Sequence[Any]],
    edge_rows: Iterable[Sequence[Any]],
    vertex_columns: Sequence[str] = VERTEX_COLUMNS,
    edge_columns: Sequence[str] = EDGE_COLUMNS,
    cache: bool = True,
    validate: bool = False,
) -> PropertyGraph:
    """Build a property graph from raw vertex and edge tuples.

    Args:
        vertex_rows: Tuples projected onto ``vertex_columns``
        edge_rows: Tuples projected onto ``edge_columns``
        vertex_columns: Vertex column names; the first must be ``id``
        edge_columns: Edge column names; must include ``src`` and ``dst``
        cache: Mark the graph for reuse by several queries
        validate: Reject duplicate vertex ids and dangling edges

    Returns:
        PropertyGraph over the projected frames

    Raises:
        SchemaError: If required columns are missing, a row does not match
            its column list, or validation is enabled and fails
        EngineError: If the engine cannot build a frame (stage ``construction``)
    """
    vertices = _to_frame(vertex_rows, vertex_columns, "Vertex")
    edges = _to_frame(edge_rows, edge_columns, "Edge")

    graph = PropertyGraph(vertices, edges)
    if validate:
        validate_graph(graph)
    if cache:
        graph.cache()

    logger.debug(
        f"Built graph with {graph.num_vertices} vertices and {graph.num_edges} edges"
    )
    return graph
