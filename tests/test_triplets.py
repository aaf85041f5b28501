"""
Tests for Triplet Reconstruction

Both strategies are run against shared fixtures and must agree on the
multiset of (src_name, relationship, dst_name) triplets.
"""

from collections import Counter

import pytest

from propgraph.errors import EngineError, GraphError
from propgraph.frames import build_graph
from propgraph.interfaces import ITripletStrategy
from propgraph.triplets import (
    JoinTripletStrategy,
    PatternTripletStrategy,
    Triplet,
    TripletStrategyFactory,
    reconstruct_triplets,
    triplets_by_join,
    triplets_by_pattern,
)

STRATEGIES = [JoinTripletStrategy, PatternTripletStrategy]
GRAPHS = ["social_graph", "dangling_graph", "irregular_graph", "empty_graph"]


class TestJoinStrategy:
    """Tests for the explicit two-join strategy."""

    def test_rows(self, social_graph):
        rows = triplets_by_join(social_graph)
        assert len(rows) == 8
        assert ("Bob", 27, 7, "Alice", 28) in rows
        assert ("Ed", 55, 8, "Charlie", 65) in rows

    def test_frame_columns(self, social_graph):
        frame = JoinTripletStrategy().frame(social_graph)
        assert frame.columns.tolist() == [
            "src",
            "dst",
            "relationship",
            "name_src",
            "age_src",
            "name_dst",
            "age_dst",
        ]

    def test_drops_dangling_edges(self, dangling_graph):
        rows = triplets_by_join(dangling_graph)
        assert len(rows) == 8
        assert all(row[0] is not None and row[3] is not None for row in rows)

    def test_empty_graph(self, empty_graph):
        assert triplets_by_join(empty_graph) == []

    def test_mismatched_id_types(self):
        g = build_graph([(1, "Ann", 30)], [("1", "1", 1)])
        with pytest.raises(EngineError) as info:
            triplets_by_join(g)
        assert info.value.stage == "join"

    def test_edge_attribute_colliding_with_vertex_column(self):
        """An edge column named like a suffixed vertex column fails in the join stage."""
        g = build_graph(
            [("1", "Ann", 30), ("2", "Bob", 40)],
            [("1", "2", "Ann")],
            edge_columns=("src", "dst", "name_src"),
        )
        with pytest.raises(EngineError, match="collide") as info:
            JoinTripletStrategy(relationship="name_src").frame(g)
        assert info.value.stage == "join"
        with pytest.raises(GraphError):
            triplets_by_join(g)


class TestPatternStrategy:
    """Tests for the motif strategy."""

    def test_rows(self, social_graph):
        rows = triplets_by_pattern(social_graph)
        assert len(rows) == 8
        assert ("Bob", "Alice", 7) in rows

    def test_frame_columns(self, social_graph):
        frame = PatternTripletStrategy().frame(social_graph)
        assert frame.columns.tolist() == ["src_name", "dst_name", "likes"]

    def test_missing_attribute(self, social_graph):
        strategy = PatternTripletStrategy(relationship="weight")
        with pytest.raises(EngineError, match="weight") as info:
            strategy.reconstruct(social_graph)
        assert info.value.stage == "pattern"


class TestStrategyEquivalence:
    """Both strategies implement one contract."""

    @pytest.mark.parametrize("graph_name", GRAPHS)
    def test_same_multiset(self, request, graph_name):
        graph = request.getfixturevalue(graph_name)
        by_join = JoinTripletStrategy().reconstruct(graph)
        by_pattern = PatternTripletStrategy().reconstruct(graph)
        assert Counter(by_join) == Counter(by_pattern)

    @pytest.mark.parametrize("graph_name", GRAPHS)
    def test_module_functions_agree(self, request, graph_name):
        graph = request.getfixturevalue(graph_name)
        by_join = Counter((r[0], r[2], r[3]) for r in triplets_by_join(graph))
        by_pattern = Counter((r[0], r[2], r[1]) for r in triplets_by_pattern(graph))
        assert by_join == by_pattern

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_reference_triplet(self, social_graph, strategy_class):
        triplets = strategy_class().reconstruct(social_graph)
        assert Triplet("Bob", 7, "Alice") in triplets
        assert len(triplets) == 8

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_parallel_edges_kept(self, irregular_graph, strategy_class):
        triplets = Counter(strategy_class().reconstruct(irregular_graph))
        assert triplets[Triplet("Ben", 5, "Cat")] == 2

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_dangling_edges_excluded(self, dangling_graph, strategy_class):
        triplets = strategy_class().reconstruct(dangling_graph)
        assert len(triplets) == 8
        assert Triplet("Bob", 5, None) not in triplets


class TestFactory:
    """Tests for TripletStrategyFactory and reconstruct_triplets."""

    def test_create_by_name(self):
        assert isinstance(TripletStrategyFactory.create_strategy("join"), JoinTripletStrategy)
        assert isinstance(
            TripletStrategyFactory.create_strategy("pattern"), PatternTripletStrategy
        )

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown triplet strategy"):
            TripletStrategyFactory.create_strategy("sql")

    def test_default_strategy(self):
        strategy = TripletStrategyFactory.create_default_strategy()
        assert isinstance(strategy, ITripletStrategy)
        assert strategy.get_strategy_metadata()["pattern"] == "(a)-[e]->(b)"

    def test_reconstruct_triplets_default(self, social_graph):
        assert Counter(reconstruct_triplets(social_graph)) == Counter(
            reconstruct_triplets(social_graph, JoinTripletStrategy())
        )

    def test_reconstruct_triplets_wraps_missing_columns(self, social_graph):
        with pytest.raises(EngineError) as info:
            reconstruct_triplets(social_graph, JoinTripletStrategy(name="title"))
        assert info.value.stage == "join"
