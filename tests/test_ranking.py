"""
Tests for PageRank

Scores are checked by hand for one round, for mass conservation and
determinism, and against networkx once both have converged.
"""

import math

import networkx as nx
import pytest

from propgraph.config import PageRankConfig
from propgraph.errors import EngineError
from propgraph.frames import build_graph
from propgraph.interfaces import ICentralityAlgorithm
from propgraph.ranking import PageRank, RankedVertex, page_rank, rank_vertices


class TestPageRank:
    """Tests for page_rank."""

    def test_one_iteration_by_hand(self, social_graph):
        scores = page_rank(social_graph, 1, 0.15)
        # Alice and Fran have no outgoing edges: 2/6 of the mass is spread evenly
        base = 0.15 / 6 + 0.85 * (2 / 6) / 6
        assert scores["5"] == pytest.approx(base)
        assert scores["1"] == pytest.approx(base + 0.85 / 12 + 0.85 / 6)
        assert scores["4"] == pytest.approx(base + 0.85 / 12)

    @pytest.mark.parametrize("iterations", [1, 2, 3, 10, 50])
    @pytest.mark.parametrize("reset", [0.0, 0.15, 0.5, 1.0])
    def test_mass_is_conserved(self, social_graph, iterations, reset):
        scores = page_rank(social_graph, iterations, reset)
        assert math.fsum(scores.values()) == pytest.approx(1.0)

    def test_mass_conserved_with_dangling_edges(self, dangling_graph):
        scores = page_rank(dangling_graph, 5, 0.15)
        assert set(scores) == {"1", "2", "3", "4", "5", "6"}
        assert math.fsum(scores.values()) == pytest.approx(1.0)

    def test_scores_in_unit_interval(self, social_graph):
        scores = page_rank(social_graph, 3, 0.15)
        assert all(0.0 < s <= 1.0 for s in scores.values())

    def test_full_reset_is_uniform(self, social_graph):
        scores = page_rank(social_graph, 3, 1.0)
        assert all(s == pytest.approx(1 / 6) for s in scores.values())

    def test_deterministic(self, social_graph, vertex_rows, edge_rows):
        first = page_rank(social_graph, 3, 0.15)
        second = page_rank(build_graph(vertex_rows, edge_rows), 3, 0.15)
        assert first == second

    def test_matches_networkx_at_convergence(self, social_graph, edge_rows):
        reference = nx.DiGraph()
        reference.add_nodes_from(str(i) for i in range(1, 7))
        reference.add_edges_from((src, dst) for src, dst, _ in edge_rows)
        expected = nx.pagerank(reference, alpha=0.85, tol=1e-12, max_iter=1000)

        scores = page_rank(social_graph, 200, 0.15)
        for vertex, score in expected.items():
            assert scores[vertex] == pytest.approx(score, abs=1e-9)

    def test_empty_graph(self, empty_graph):
        assert page_rank(empty_graph, 3, 0.15) == {}

    @pytest.mark.parametrize(
        "iterations, reset, message",
        [
            (0, 0.15, "max_iterations must be >= 1"),
            (-1, 0.15, "max_iterations must be >= 1"),
            (2.5, 0.15, "must be an integer"),
            (True, 0.15, "must be an integer"),
            (3, -0.1, r"reset_probability must be in \[0, 1\]"),
            (3, 1.5, r"reset_probability must be in \[0, 1\]"),
        ],
    )
    def test_invalid_parameters(self, social_graph, iterations, reset, message):
        with pytest.raises(ValueError, match=message):
            page_rank(social_graph, iterations, reset)

    def test_index_failure_is_engine_error(self, social_graph, monkeypatch):
        def broken():
            raise MemoryError("out of memory")

        monkeypatch.setattr(social_graph, "adjacency", broken)
        with pytest.raises(EngineError, match=r"\[pagerank\]") as info:
            page_rank(social_graph, 3, 0.15)
        assert info.value.stage == "pagerank"


class TestRankVertices:
    """Tests for ranked presentation."""

    def test_sorted_descending(self, social_graph):
        ranked = rank_vertices(social_graph, page_rank(social_graph, 3, 0.15))
        scores = [r.pagerank for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0].name == "Alice"
        assert {r.name for r in ranked} == {
            "Alice",
            "Bob",
            "Charlie",
            "David",
            "Ed",
            "Fran",
        }

    def test_ties_keep_vertex_order(self, social_graph):
        ranked = rank_vertices(social_graph, page_rank(social_graph, 3, 1.0))
        assert [r.id for r in ranked] == ["1", "2", "3", "4", "5", "6"]

    def test_records(self, social_graph):
        ranked = rank_vertices(social_graph, {"2": 0.5})
        assert ranked == [RankedVertex(id="2", name="Bob", pagerank=0.5)]


class TestPageRankRunner:
    """Tests for the PageRank class."""

    def test_defaults_from_config(self):
        runner = PageRank()
        assert isinstance(runner, ICentralityAlgorithm)
        assert runner.get_parameters() == {"max_iterations": 3, "reset_probability": 0.15}

    def test_fluent_setters(self):
        runner = PageRank().max_iter(7).reset_probability(0.3)
        assert runner.get_parameters() == {"max_iterations": 7, "reset_probability": 0.3}

    def test_setters_validate(self):
        with pytest.raises(ValueError):
            PageRank().max_iter(0)
        with pytest.raises(ValueError):
            PageRank().reset_probability(2.0)

    def test_run_adds_pagerank_column(self, social_graph):
        frame = PageRank(PageRankConfig(max_iterations=3)).run(social_graph)
        assert frame.columns.tolist() == ["id", "name", "age", "pagerank"]
        expected = page_rank(social_graph, 3, 0.15)
        assert dict(zip(frame["id"], frame["pagerank"])) == pytest.approx(expected)

    def test_run_does_not_touch_graph(self, social_graph):
        PageRank().run(social_graph)
        assert "pagerank" not in social_graph.vertices.columns

    def test_ranked(self, social_graph):
        ranked = PageRank().ranked(social_graph)
        assert ranked == rank_vertices(social_graph, page_rank(social_graph, 3, 0.15))
