"""Configuration classes for SeamCut components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from seamcut.algorithms.types import SearchStrategy
from seamcut.image.seeds import SeedRegion


@dataclass
class ParallelSearchConfig:
    """Configuration for the concurrent frontier search."""

    # Number of threads expanding frontier chunks
    worker_count: int = 10

    # Deepest layer that is still expanded; None means unbounded
    max_depth: Optional[int] = 3

    def __post_init__(self) -> None:
        if isinstance(self.worker_count, bool) or not isinstance(
            self.worker_count, int
        ):
            raise ValueError(f"worker_count must be an integer, got {self.worker_count!r}")
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be positive, got {self.worker_count}")
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 0
        ):
            raise ValueError(
                f"max_depth must be a non-negative integer or None, got {self.max_depth!r}"
            )


# Global configuration instance
DEFAULT_PARALLEL_CONFIG = ParallelSearchConfig()

_SEAM_KEYS = {
    "source_seed",
    "sink_seed",
    "strategy",
    "worker_count",
    "max_depth",
    "mode",
    "exhaustive_fallback",
}


@dataclass
class SeamConfig:
    """Everything needed to compute one seam, apart from the images.

    Attributes:
        source_seed: Pixels tied to the source terminal.
        sink_seed: Pixels tied to the sink terminal.
        strategy: Path search used by the solver.
        parallel: Settings for ``SearchStrategy.PARALLEL``.
        mode: Compositor classification mode name ("adjacency" or "reachability").
        exhaustive_fallback: Confirm a failed concurrent search with BFS.
    """

    source_seed: SeedRegion
    sink_seed: SeedRegion
    strategy: SearchStrategy = SearchStrategy.BFS
    parallel: ParallelSearchConfig = field(default_factory=ParallelSearchConfig)
    mode: str = "adjacency"
    exhaustive_fallback: bool = True

    def __post_init__(self) -> None:
        if self.mode not in ("adjacency", "reachability"):
            raise ValueError(
                f"mode must be 'adjacency' or 'reachability', got {self.mode!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SeamConfig:
        """Build a config from a plain mapping such as parsed YAML.

        Seeds accept either ``"x0,y0,x1,y1"`` strings or four-item lists.

        Raises:
            ValueError: On unknown keys, missing seeds or invalid values.
        """
        unknown = set(data) - _SEAM_KEYS
        if unknown:
            raise ValueError(f"Unrecognized config keys: {sorted(unknown)}")
        for key in ("source_seed", "sink_seed"):
            if key not in data:
                raise ValueError(f"Config is missing '{key}'")

        parallel = ParallelSearchConfig(
            worker_count=data.get("worker_count", DEFAULT_PARALLEL_CONFIG.worker_count),
            max_depth=data.get("max_depth", DEFAULT_PARALLEL_CONFIG.max_depth),
        )
        return cls(
            source_seed=SeedRegion.coerce(data["source_seed"]),
            sink_seed=SeedRegion.coerce(data["sink_seed"]),
            strategy=SearchStrategy.from_name(data.get("strategy", "bfs")),
            parallel=parallel,
            mode=str(data.get("mode", "adjacency")).lower(),
            exhaustive_fallback=bool(data.get("exhaustive_fallback", True)),
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> SeamConfig:
        """Parse a YAML document into a `SeamConfig`.

        Raises:
            ValueError: If the document is not a mapping or fails validation.
        """
        return cls.from_dict(load_yaml_mapping(yaml_str))


def load_yaml_mapping(yaml_str: str) -> Dict[str, Any]:
    """Parse YAML whose top level must be a mapping; keys become strings.

    Raises:
        ValueError: If the document is malformed or not a mapping.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    return {str(k): v for k, v in data.items()}
