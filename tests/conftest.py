"""
Pytest configuration and fixtures for propgraph tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for imports like `propgraph.*`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from propgraph.frames import build_graph  # noqa: E402

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


@pytest.fixture
def vertex_rows():
    return list(VERTEX_ROWS)


@pytest.fixture
def edge_rows():
    return list(EDGE_ROWS)


@pytest.fixture
def social_graph():
    """The six-person reference graph."""
    return build_graph(VERTEX_ROWS, EDGE_ROWS)


@pytest.fixture
def empty_graph():
    return build_graph([], [])


@pytest.fixture
def dangling_graph():
    """Reference graph plus edges pointing at a vertex that does not exist."""
    return build_graph(VERTEX_ROWS, EDGE_ROWS + [("2", "99", 5), ("99", "1", 1)])


@pytest.fixture
def irregular_graph():
    """Graph with a self loop, parallel edges and a mutual pair."""
    vertices = [(1, "Ann", 30), (2, "Ben", 41), (3, "Cat", 19), (4, "Dan", 41)]
    edges = [
        (1, 2, 1),
        (2, 1, 2),
        (2, 3, 5),
        (2, 3, 5),
        (3, 3, 9),
        (4, 1, 1),
    ]
    return build_graph(vertices, edges)
