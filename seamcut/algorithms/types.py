"""Types and data structures for max-flow analytics.

Defines the search strategy and solver state enums and the immutable
`FlowSummary` returned after a solve.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, List, Optional

from seamcut.graph.residual_graph import Edge, NodeID

# Predecessor map: slot ``v`` holds the edge through which ``v`` was reached,
# or None when ``v`` is unvisited.
PredMap = List[Optional[Edge]]


class SearchStrategy(IntEnum):
    """Augmenting path search used by the solver."""

    #: Sequential breadth-first search; shortest paths, Edmonds-Karp bound.
    BFS = 1
    #: Layered frontier search on a thread pool, optionally depth bounded.
    PARALLEL = 2

    @classmethod
    def from_name(cls, name: str | SearchStrategy) -> SearchStrategy:
        """Resolve a strategy from its case-insensitive name.

        Raises:
            ValueError: If the name is unknown.
        """
        if isinstance(name, SearchStrategy):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(
                f"Unknown search strategy '{name}'. Expected one of: {valid}"
            ) from None


class SolverState(IntEnum):
    """Phases of the Edmonds-Karp driver."""

    SEARCHING = 1
    AUGMENTING = 2
    DONE = 3


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        augmentations: Number of augmenting paths applied.
        saturated: Forward edges with positive capacity and zero residual.
        reachable: Nodes reachable from the source in the final residual graph.
        min_cut: Forward edges leaving ``reachable``.
        cut_capacity: Sum of original capacities of ``min_cut``.
        strategy: Search strategy the solver ran with.
    """

    total_flow: int
    augmentations: int
    saturated: List[Edge]
    reachable: FrozenSet[NodeID]
    min_cut: List[Edge]
    cut_capacity: int
    strategy: SearchStrategy
