"""
PageRank Centrality

Fixed-iteration PageRank over a ``PropertyGraph``, expressed as synchronous
send-then-aggregate rounds on an in-memory score map.

Each round, every vertex sends ``(1 - reset) * score / out_degree`` along each
outgoing edge. Vertices without outgoing edges spread their ``(1 - reset)``
share evenly over all vertices, so the scores always sum to 1.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional

import pandas as pd
from loguru import logger

from .config import PageRankConfig
from .errors import EngineError
from .frames import PropertyGraph
from .interfaces import ICentralityAlgorithm


@dataclass(frozen=True)
class RankedVertex:
    id: Hashable
    name: Any
    pagerank: float


def _check_parameters(max_iterations: int, reset_probability: float) -> None:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise ValueError("max_iterations must be an integer")
    if max_iterations < 1:
        raise ValueError("max_iterations must be >= 1")
    if not 0.0 <= reset_probability <= 1.0:
        raise ValueError("reset_probability must be in [0, 1]")


def page_rank(
    graph: PropertyGraph, max_iterations: int, reset_probability: float
) -> Dict[Hashable, float]:
    """Compute PageRank scores for every vertex.

    Runs exactly ``max_iterations`` rounds, with no convergence check.

    Args:
        graph: Graph to rank
        max_iterations: Number of rounds, >= 1
        reset_probability: Teleport probability in [0, 1]

    Returns:
        Mapping of vertex id to score; empty for an empty graph

    Raises:
        ValueError: If a parameter is out of range
        EngineError: If the computation fails
    """
    _check_parameters(max_iterations, reset_probability)

    try:
        adjacency = graph.adjacency()
    except Exception as e:
        logger.error(f"PageRank failed to index the graph: {e}")
        raise EngineError("pagerank", f"Could not build adjacency index: {e}") from e

    n = len(adjacency)
    if n == 0:
        return {}

    follow = 1.0 - reset_probability
    scores = {vertex: 1.0 / n for vertex in adjacency}

    for _ in range(max_iterations):
        dangling = sum(scores[v] for v, targets in adjacency.items() if not targets)
        base = reset_probability / n + follow * dangling / n

        incoming = {vertex: base for vertex in adjacency}
        for vertex, targets in adjacency.items():
            if not targets:
                continue
            share = follow * scores[vertex] / len(targets)
            for target in targets:
                incoming[target] += share
        scores = incoming

    logger.debug(
        f"PageRank ran {max_iterations} iteration(s) over {n} vertices "
        f"(reset={reset_probability})"
    )
    return scores


def rank_vertices(
    graph: PropertyGraph, scores: Dict[Hashable, float], name: str = "name"
) -> List[RankedVertex]:
    """Vertices sorted by descending score; ties keep vertex order."""
    vertices = graph.vertices
    names = dict(zip(vertices["id"], vertices[name])) if name in vertices else {}
    ranked = [
        RankedVertex(id=vertex, name=names.get(vertex), pagerank=score)
        for vertex, score in scores.items()
    ]
    ranked.sort(key=lambda item: item.pagerank, reverse=True)
    return ranked


class PageRank(ICentralityAlgorithm):
    """Configurable PageRank runner.

    Example:
        ranks = PageRank().max_iter(3).reset_probability(0.15).run(g)
        ranks[["pagerank", "name"]].sort_values("pagerank", ascending=False, kind="stable")
    """

    def __init__(self, config: Optional[PageRankConfig] = None):
        config = config or PageRankConfig()
        self._max_iterations = config.max_iterations
        self._reset_probability = config.reset_probability

    def max_iter(self, value: int) -> "PageRank":
        _check_parameters(value, self._reset_probability)
        self._max_iterations = value
        return self

    def reset_probability(self, value: float) -> "PageRank":
        _check_parameters(self._max_iterations, value)
        self._reset_probability = value
        return self

    def get_parameters(self) -> Dict[str, Any]:
        return {
            "max_iterations": self._max_iterations,
            "reset_probability": self._reset_probability,
        }

    def scores(self, graph: PropertyGraph) -> Dict[Hashable, float]:
        return page_rank(graph, self._max_iterations, self._reset_probability)

    def run(self, graph: PropertyGraph) -> pd.DataFrame:
        """Vertex frame with an added ``pagerank`` column.

        Only vertex scores are returned; per-edge weights are not exposed.
        """
        scores = self.scores(graph)
        vertices = graph.vertices
        return vertices.assign(pagerank=vertices["id"].map(scores).astype(float))

    def ranked(self, graph: PropertyGraph) -> List[RankedVertex]:
        return rank_vertices(graph, self.scores(graph))
