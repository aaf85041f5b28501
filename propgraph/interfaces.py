"""
Graph Query Interfaces

This module defines abstract base classes for the pluggable parts of the graph
query layer. Each interface captures one contract so that alternative
implementations can be swapped in and tested against shared fixtures.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Hashable, List

if TYPE_CHECKING:
    import pandas as pd

    from .frames import PropertyGraph
    from .triplets import Triplet


class ITripletStrategy(ABC):
    """Interface for triplet reconstruction strategies.

    A triplet is one edge joined with both of its endpoint vertices. All
    strategies must return the same multiset of triplets for a given graph.
    """

    @abstractmethod
    def reconstruct(self, graph: "PropertyGraph") -> List["Triplet"]:
        """Reconstruct the triplets of a graph.

        Args:
            graph: Graph to read edges and vertices from

        Returns:
            List of triplets, one per edge whose endpoints both exist
        """
        pass

    @abstractmethod
    def get_strategy_metadata(self) -> Dict[str, Any]:
        """Get metadata describing how the strategy evaluates the graph."""
        pass


class IVertexPredicate(ABC):
    """Interface for vertex attribute predicates.

    Lets callers pass stateful or composed predicates where a plain function
    would not do.
    """

    @abstractmethod
    def __call__(self, value: Any) -> bool:
        """Return True when the attribute value should be kept."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description used in log lines."""
        pass


class ICentralityAlgorithm(ABC):
    """Interface for vertex centrality algorithms."""

    @abstractmethod
    def scores(self, graph: "PropertyGraph") -> Dict[Hashable, float]:
        """Compute a score for every vertex of the graph."""
        pass

    @abstractmethod
    def run(self, graph: "PropertyGraph") -> "pd.DataFrame":
        """Compute scores and return the vertex frame with a score column."""
        pass


class IConfiguration(ABC):
    """Interface for configuration management.

    Handles loading, validation, and access to configuration settings.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        pass

    @abstractmethod
    def validate(self) -> bool:
        """Validate the configuration."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        pass
