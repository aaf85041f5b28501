"""
Triplet Reconstruction

Two interchangeable ways of joining every edge with its endpoint vertices:

    - JoinTripletStrategy: two explicit inner joins of edges against vertices
    - PatternTripletStrategy: the ``(a)-[e]->(b)`` motif query

Both drop edges whose source or destination vertex does not exist, and both
return the same multiset of triplets for any graph.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from .errors import EngineError, GraphError
from .frames import PropertyGraph, collect
from .interfaces import ITripletStrategy
from .motifs import find


@dataclass(frozen=True)
class Triplet:
    """Logical triplet: source name, edge relationship, destination name."""

    src_name: Any
    relationship: Any
    dst_name: Any


class JoinTripletStrategy(ITripletStrategy):
    """Triplets via two inner joins of the edge frame against the vertex frame."""

    def __init__(self, relationship: str = "relationship", name: str = "name"):
        self.relationship = relationship
        self.name = name

    def frame(self, graph: PropertyGraph) -> pd.DataFrame:
        """Join edges with source and destination vertex attributes.

        Vertex attributes are suffixed ``_src`` and ``_dst``.

        Returns:
            DataFrame with ``src``, ``dst``, the edge attributes, then the
            suffixed source and destination vertex attributes
        """
        vertices = graph.vertices
        edges = graph.edges
        attributes = graph.vertex_attributes
        suffixed = [f"{a}_{side}" for side in ("src", "dst") for a in attributes]
        clash = [c for c in graph.edge_attributes if c in suffixed]
        if clash:
            raise EngineError(
                "join", f"Edge attribute(s) {clash} collide with suffixed vertex columns"
            )

        columns = (
            ["src", "dst"]
            + graph.edge_attributes
            + [f"{a}_src" for a in attributes]
            + [f"{a}_dst" for a in attributes]
        )

        try:
            src_side = vertices.rename(
                columns={"id": "src", **{a: f"{a}_src" for a in attributes}}
            )
            only_src = edges.merge(src_side, on="src", how="inner")

            dst_side = vertices.rename(
                columns={"id": "dst", **{a: f"{a}_dst" for a in attributes}}
            )
            joined = only_src.merge(dst_side, on="dst", how="inner")
            return joined[columns].reset_index(drop=True)
        except Exception as e:
            logger.error(f"Triplet join failed: {e}")
            raise EngineError("join", f"Edge/vertex join failed: {e}") from e

    def reconstruct(self, graph: PropertyGraph) -> List[Triplet]:
        frame = self.frame(graph)
        rows = collect(
            frame, [f"{self.name}_src", self.relationship, f"{self.name}_dst"]
        )
        return [Triplet(*row) for row in rows]

    def get_strategy_metadata(self) -> Dict[str, Any]:
        return {"strategy": "join", "joins": ["edges.src = vertices.id", "dst = id"]}


class PatternTripletStrategy(ITripletStrategy):
    """Triplets via a declarative directed-edge motif."""

    PATTERN = "(a)-[e]->(b)"

    def __init__(self, relationship: str = "relationship", name: str = "name"):
        self.relationship = relationship
        self.name = name

    def frame(self, graph: PropertyGraph) -> pd.DataFrame:
        """Project the motif matches onto ``src_name``, ``dst_name``, ``likes``."""
        matches = find(graph, self.PATTERN)
        try:
            return matches[
                [f"a.{self.name}", f"b.{self.name}", f"e.{self.relationship}"]
            ].set_axis(["src_name", "dst_name", "likes"], axis=1)
        except KeyError as e:
            raise EngineError("pattern", f"Missing motif column: {e}") from e

    def reconstruct(self, graph: PropertyGraph) -> List[Triplet]:
        rows = collect(self.frame(graph), ["src_name", "likes", "dst_name"])
        return [Triplet(*row) for row in rows]

    def get_strategy_metadata(self) -> Dict[str, Any]:
        return {"strategy": "pattern", "pattern": self.PATTERN}


class TripletStrategyFactory:
    """Factory for triplet reconstruction strategies."""

    @staticmethod
    def create_join_strategy(**kwargs) -> ITripletStrategy:
        return JoinTripletStrategy(**kwargs)

    @staticmethod
    def create_pattern_strategy(**kwargs) -> ITripletStrategy:
        return PatternTripletStrategy(**kwargs)

    @staticmethod
    def create_strategy(name: str, **kwargs) -> ITripletStrategy:
        """Create a strategy by name (``"join"`` or ``"pattern"``).

        Raises:
            ValueError: If the name is unknown
        """
        creators = {
            "join": TripletStrategyFactory.create_join_strategy,
            "pattern": TripletStrategyFactory.create_pattern_strategy,
        }
        if name not in creators:
            raise ValueError(
                f"Unknown triplet strategy {name!r}; expected one of {sorted(creators)}"
            )
        return creators[name](**kwargs)

    @staticmethod
    def create_default_strategy() -> ITripletStrategy:
        return PatternTripletStrategy()


def reconstruct_triplets(
    graph: PropertyGraph, strategy: Optional[ITripletStrategy] = None
) -> List[Triplet]:
    """Reconstruct triplets with the given strategy (pattern by default)."""
    strategy = strategy or TripletStrategyFactory.create_default_strategy()
    try:
        return strategy.reconstruct(graph)
    except GraphError:
        raise
    except KeyError as e:
        stage = "pattern" if isinstance(strategy, PatternTripletStrategy) else "join"
        raise EngineError(stage, f"Missing column: {e}") from e


def triplets_by_join(graph: PropertyGraph) -> List[Tuple]:
    """Rows of ``(name_src, age_src, relationship, name_dst, age_dst)``."""
    frame = JoinTripletStrategy().frame(graph)
    try:
        return collect(
            frame, ["name_src", "age_src", "relationship", "name_dst", "age_dst"]
        )
    except KeyError as e:
        raise EngineError("join", f"Missing column: {e}") from e


def triplets_by_pattern(graph: PropertyGraph) -> List[Tuple]:
    """Rows of ``(src_name, dst_name, likes)``."""
    return collect(PatternTripletStrategy().frame(graph))
