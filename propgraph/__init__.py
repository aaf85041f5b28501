"""
Property Graph Package

A dataframe-backed property graph with a small set of queries:

Construction:
    - frames: build_graph and the immutable PropertyGraph handle

Queries:
    - filters: predicate-based vertex filtering
    - motifs: declarative motif patterns such as "(a)-[e]->(b)"
    - triplets: triplet reconstruction by explicit join or by motif
    - ranking: fixed-iteration PageRank

Support:
    - config: configuration management and validation
    - errors: SchemaError / EngineError hierarchy
    - display: console rendering of results
"""

from .config import GraphConfig, load_graph_config
from .errors import EngineError, GraphError, PatternSyntaxError, SchemaError
from .filters import filter_vertices, vertices_older_than
from .frames import PropertyGraph, build_graph
from .motifs import find
from .ranking import PageRank, page_rank, rank_vertices
from .triplets import (
    JoinTripletStrategy,
    PatternTripletStrategy,
    Triplet,
    TripletStrategyFactory,
    reconstruct_triplets,
    triplets_by_join,
    triplets_by_pattern,
)

__version__ = "1.0.0"

__all__ = [
    "GraphConfig",
    "load_graph_config",
    "GraphError",
    "SchemaError",
    "EngineError",
    "PatternSyntaxError",
    "PropertyGraph",
    "build_graph",
    "filter_vertices",
    "vertices_older_than",
    "find",
    "Triplet",
    "JoinTripletStrategy",
    "PatternTripletStrategy",
    "TripletStrategyFactory",
    "reconstruct_triplets",
    "triplets_by_join",
    "triplets_by_pattern",
    "PageRank",
    "page_rank",
    "rank_vertices",
]
