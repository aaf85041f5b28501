#------------------------------------------------------------------------------
# demo.py
#
# Walkthrough of the property graph queries on a small social graph: vertex
# filtering, triplets (join and motif), and PageRank.
#------------------------------------------------------------------------------

import sys
from typing import Optional

from loguru import logger

from .config import GraphConfig, load_graph_config
from .display import describe_triplet, describe_vertex, render
from .errors import GraphError
from .filters import filter_vertices
from .frames import PropertyGraph, build_graph
from .ranking import PageRank
from .triplets import TripletStrategyFactory

VERTEX_ROWS = [
    ("1", "Alice", 28),
    ("2", "Bob", 27),
    ("3", "Charlie", 65),
    ("4", "David", 42),
    ("5", "Ed", 55),
    ("6", "Fran", 50),
]

EDGE_ROWS = [
    ("2", "1", 7),
    ("2", "4", 2),
    ("3", "2", 4),
    ("3", "6", 3),
    ("4", "1", 1),
    ("5", "2", 2),
    ("5", "3", 8),
    ("5", "6", 3),
]


def configure_logging(config: GraphConfig) -> None:
    logger.remove()
    logger.add(sys.stderr, level=config.logging.level)


def load_sample_graph(config: GraphConfig) -> PropertyGraph:
    return build_graph(
        VERTEX_ROWS,
        EDGE_ROWS,
        cache=config.graph.cache,
        validate=config.graph.validate_input,
    )


def run(config: GraphConfig, strategy: str = "pattern") -> None:
    print("\n[Loading graph]")
    g = load_sample_graph(config)
    print(render(g.vertices, config=config.display))
    print(render(g.edges, config=config.display))

    print("\n[Older than 40]")
    for name, age in filter_vertices(g, lambda age: age > 40):
        print(describe_vertex(name, age))

    print("\n[Triplets]")
    for triplet in TripletStrategyFactory.create_strategy(strategy).reconstruct(g):
        print(describe_triplet(triplet))

    print("\n[User PageRank]")
    ranks = PageRank(config.pagerank).run(g)
    ranks = ranks[["pagerank", "name"]].sort_values(
        "pagerank", ascending=False, kind="stable"
    )
    print(render(ranks, config=config.display))


def main(argv: Optional[list] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    strategy = argv[0] if argv else "pattern"

    config = load_graph_config()
    configure_logging(config)
    logger.info(config.display_summary())

    try:
        run(config, strategy)
    except (GraphError, ValueError) as e:
        logger.error(f"Graph demo failed: {e}")
        return 1
    return 0
