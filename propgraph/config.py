"""
Configuration Management

This module provides configuration management for graph construction, PageRank
and result display, with validation on every section.
"""

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .interfaces import IConfiguration

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PageRankConfig:
    """PageRank parameters."""

    max_iterations: int = 3
    reset_probability: float = 0.15

    def __post_init__(self):
        """Validate PageRank configuration values."""
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError("max_iterations must be an integer")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if isinstance(self.reset_probability, bool) or not isinstance(
            self.reset_probability, (int, float)
        ):
            raise ValueError("reset_probability must be a number")
        if not 0.0 <= self.reset_probability <= 1.0:
            raise ValueError("reset_probability must be in [0, 1]")


@dataclass
class GraphBuildConfig:
    """Graph construction settings."""

    cache: bool = True
    validate_input: bool = False


@dataclass
class DisplayConfig:
    """Console display settings."""

    max_rows: int = 10
    truncate: bool = True

    def __post_init__(self):
        """Validate display configuration."""
        if isinstance(self.max_rows, bool) or not isinstance(self.max_rows, int):
            raise ValueError("max_rows must be an integer")
        if self.max_rows < 1:
            raise ValueError("max_rows must be >= 1")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"

    def __post_init__(self):
        """Validate logging configuration."""
        if not isinstance(self.level, str):
            raise ValueError(f"level must be a string, got {self.level!r}")
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() == "true"


class GraphConfig(IConfiguration):
    """Main configuration class for graph processing.

    Example:
        config = GraphConfig.from_environment()
        iterations = config.pagerank.max_iterations
        rows = config.get("display.max_rows", 20)
    """

    def __init__(
        self,
        pagerank: Optional[PageRankConfig] = None,
        graph: Optional[GraphBuildConfig] = None,
        display: Optional[DisplayConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ):
        self.pagerank = pagerank or PageRankConfig()
        self.graph = graph or GraphBuildConfig()
        self.display = display or DisplayConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphConfig":
        """Create configuration from a nested dictionary (e.g. parsed YAML).

        Unknown sections are ignored.
        """
        return cls(
            pagerank=PageRankConfig(**(data.get("pagerank") or {})),
            graph=GraphBuildConfig(**(data.get("graph") or {})),
            display=DisplayConfig(**(data.get("display") or {})),
            logging=LoggingConfig(**(data.get("logging") or {})),
        )

    @classmethod
    def from_environment(cls, base: Optional["GraphConfig"] = None) -> "GraphConfig":
        """Create configuration from environment variables.

        Values missing from the environment fall back to ``base`` (or the
        defaults when no base is given). A ``.env`` file is loaded first.

        Returns:
            GraphConfig instance populated from environment
        """
        load_dotenv(find_dotenv())
        base = base or cls()

        pagerank = PageRankConfig(
            max_iterations=int(
                os.getenv("PROPGRAPH_MAX_ITERATIONS", str(base.pagerank.max_iterations))
            ),
            reset_probability=float(
                os.getenv(
                    "PROPGRAPH_RESET_PROBABILITY", str(base.pagerank.reset_probability)
                )
            ),
        )

        graph = GraphBuildConfig(
            cache=_env_bool("PROPGRAPH_CACHE", base.graph.cache),
            validate_input=_env_bool(
                "PROPGRAPH_VALIDATE_INPUT", base.graph.validate_input
            ),
        )

        display = DisplayConfig(
            max_rows=int(os.getenv("PROPGRAPH_MAX_ROWS", str(base.display.max_rows))),
            truncate=_env_bool("PROPGRAPH_TRUNCATE", base.display.truncate),
        )

        logging = LoggingConfig(
            level=os.getenv("PROPGRAPH_LOG_LEVEL", base.logging.level),
        )

        return cls(pagerank, graph, display, logging)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'pagerank.max_iterations')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj = self
        try:
            for part in key.split("."):
                obj = getattr(obj, part)
            return obj
        except AttributeError:
            return default

    def validate(self) -> bool:
        """Validate all configuration sections.

        Raises:
            ValueError: If any configuration is invalid
        """
        # Re-create to trigger __post_init__ checks
        PageRankConfig(**asdict(self.pagerank))
        GraphBuildConfig(**asdict(self.graph))
        DisplayConfig(**asdict(self.display))
        LoggingConfig(**asdict(self.logging))
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "pagerank": asdict(self.pagerank),
            "graph": asdict(self.graph),
            "display": asdict(self.display),
            "logging": asdict(self.logging),
        }

    def display_summary(self) -> str:
        """Generate a human-readable configuration summary."""
        lines = [
            "Graph Configuration:",
            f"   - PageRank iterations: {self.pagerank.max_iterations}",
            f"   - Reset probability: {self.pagerank.reset_probability}",
            f"   - Cache graph: {self.graph.cache}",
            f"   - Validate input: {self.graph.validate_input}",
            f"   - Display rows: {self.display.max_rows}",
            f"   - Log level: {self.logging.level}",
        ]
        return "\n".join(lines)


def _load_yaml(path: str) -> Dict[str, Any]:
    if not path or not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def load_graph_config(explicit_path: Optional[str] = None) -> GraphConfig:
    """Load graph configuration from YAML and environment.

    Precedence:
    1) Explicit path argument
    2) Env var PROPGRAPH_CONFIG_PATH
    3) Default ./config/propgraph.yaml if exists
    Environment variables (PROPGRAPH_*) override values read from YAML.
    """
    load_dotenv(find_dotenv())
    candidate_path = explicit_path or os.getenv("PROPGRAPH_CONFIG_PATH")
    if not candidate_path:
        default_path = os.path.abspath(
            os.path.join(os.getcwd(), "config", "propgraph.yaml")
        )
        candidate_path = default_path if os.path.exists(default_path) else None

    yaml_data = _load_yaml(candidate_path) if candidate_path else {}
    return GraphConfig.from_environment(base=GraphConfig.from_dict(yaml_data))
