"""
Graph Errors

Exception hierarchy for graph construction and query stages. Every query stage
is independent, so engine failures carry the name of the stage that raised them.
"""

from typing import Optional

STAGES = ("construction", "filter", "join", "pattern", "pagerank")


class GraphError(Exception):
    """Base class for all propgraph errors."""


class SchemaError(GraphError):
    """Required columns are missing or input rows do not fit the declared schema."""


class EngineError(GraphError):
    """A query failed inside the dataframe engine.

    Attributes:
        stage: Name of the stage that failed (one of ``STAGES``)
    """

    def __init__(self, stage: str, message: str):
        if stage not in STAGES:
            raise ValueError(f"Unknown stage: {stage}")
        self.stage = stage
        super().__init__(f"[{stage}] {message}")


class PatternSyntaxError(EngineError):
    """A motif pattern could not be parsed."""

    def __init__(self, pattern: str, reason: str, position: Optional[int] = None):
        self.pattern = pattern
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__("pattern", f"Invalid pattern {pattern!r}{where}: {reason}")
