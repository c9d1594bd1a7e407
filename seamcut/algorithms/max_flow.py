"""Maximum-flow computation via shortest augmenting paths (Edmonds-Karp).

`FlowSolver` owns a `ResidualGraph` and alternates between searching for an
augmenting path and pushing the bottleneck flow along it, until no path
remains. Saturated edges, the residual-reachable set and the minimum cut are
read from the final residual state once the solver is done.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Set, Union, overload

from seamcut.algorithms.bfs import bfs_augmenting_path, path_edges, reachable_from
from seamcut.algorithms.parallel_bfs import ParallelFrontierSearch
from seamcut.algorithms.types import FlowSummary, PredMap, SearchStrategy, SolverState
from seamcut.config import ParallelSearchConfig
from seamcut.graph.residual_graph import Edge, NodeID, ResidualGraph
from seamcut.logging import get_logger

logger = get_logger(__name__)


class FlowSolver:
    """Edmonds-Karp driver over a residual graph.

    The solver mutates ``graph`` in place. Searches and augmentations never
    overlap, so the graph needs no locking between the two phases.

    Args:
        graph: Residual graph to solve; owned by the solver from now on.
        src_node: Source terminal.
        dst_node: Sink terminal.
        strategy: Augmenting path search to use.
        parallel_config: Settings for ``SearchStrategy.PARALLEL``.
        exhaustive_fallback: When the concurrent search gives up, confirm with
            a sequential BFS and keep going if it finds a path. Without it a
            depth-bounded search may stop below the maximum flow.
        searcher: Existing concurrent searcher to reuse. The solver closes only
            searchers it created itself.

    Raises:
        InvalidNodeIndex: If a terminal is out of range.
    """

    def __init__(
        self,
        graph: ResidualGraph,
        src_node: NodeID,
        dst_node: NodeID,
        *,
        strategy: SearchStrategy = SearchStrategy.BFS,
        parallel_config: Optional[ParallelSearchConfig] = None,
        exhaustive_fallback: bool = True,
        searcher: Optional[ParallelFrontierSearch] = None,
    ) -> None:
        graph.check_node(src_node)
        graph.check_node(dst_node)
        self.graph = graph
        self.src_node = src_node
        self.dst_node = dst_node
        self.strategy = SearchStrategy.from_name(strategy)
        self.parallel_config = parallel_config
        self.exhaustive_fallback = exhaustive_fallback

        self.state = SolverState.SEARCHING
        self.total_flow = 0
        self.augmentations = 0
        self.fallback_paths = 0

        self._pred: PredMap = [None] * graph.num_nodes
        self._searcher = searcher
        self._owns_searcher = False

    #
    # Phases
    #
    def _concurrent_searcher(self) -> ParallelFrontierSearch:
        if self._searcher is None:
            self._searcher = ParallelFrontierSearch(self.parallel_config)
            self._owns_searcher = True
        return self._searcher

    def find_path(self) -> bool:
        """Run one search; on success the path is stored in the solver's predecessor map."""
        if self.strategy == SearchStrategy.BFS:
            found, _ = bfs_augmenting_path(
                self.graph, self.src_node, self.dst_node, self._pred
            )
            return found

        found, _ = self._concurrent_searcher().search(
            self.graph, self.src_node, self.dst_node, self._pred
        )
        if not found and self.exhaustive_fallback:
            found, _ = bfs_augmenting_path(
                self.graph, self.src_node, self.dst_node, self._pred
            )
            if found:
                self.fallback_paths += 1
                logger.debug("Concurrent search missed a path; augmenting the BFS path")
        return found

    def augment(self, pred: Optional[PredMap] = None) -> int:
        """Push the bottleneck flow along the path recorded in ``pred``.

        Every edge on the path loses ``path_flow`` residual capacity and its
        paired reverse edge gains the same amount.

        Args:
            pred: Predecessor map to follow; defaults to the solver's own map.

        Returns:
            int: The flow pushed (the path's bottleneck capacity).

        Raises:
            ValueError: If the recorded chain is broken or has a saturated edge.
        """
        path = path_edges(
            self._pred if pred is None else pred, self.src_node, self.dst_node
        )
        path_flow = min(edge.residual for edge in path)
        if path_flow <= 0:
            raise ValueError("Predecessor chain contains an edge without residual capacity")

        for edge in path:
            edge.residual -= path_flow
            edge.reverse.residual += path_flow
            if edge.residual == 0:
                logger.debug(f"Saturated edge {edge.src} -> {edge.dst}")
        return path_flow

    def solve(self) -> int:
        """Augment until no path remains and return the total flow.

        Calling it again after the solver is done returns the stored total.
        """
        if self.state == SolverState.DONE:
            return self.total_flow

        if self.src_node == self.dst_node:
            self.state = SolverState.DONE
            return 0

        logger.info(
            f"Solving max flow {self.src_node} -> {self.dst_node} on "
            f"{self.graph.num_nodes} nodes / {self.graph.num_edges} edges "
            f"with {self.strategy.name} search"
        )
        try:
            while True:
                self.state = SolverState.SEARCHING
                if not self.find_path():
                    break
                self.state = SolverState.AUGMENTING
                path_flow = self.augment()
                self.total_flow += path_flow
                self.augmentations += 1
                logger.debug(
                    f"Augmentation {self.augmentations}: pushed {path_flow}, "
                    f"total {self.total_flow}"
                )
        finally:
            if self._owns_searcher and self._searcher is not None:
                self._searcher.close()
                self._searcher = None
                self._owns_searcher = False

        self.state = SolverState.DONE
        logger.info(
            f"Max flow {self.total_flow} after {self.augmentations} augmentations"
        )
        return self.total_flow

    #
    # Final state queries
    #
    def _require_done(self) -> None:
        if self.state != SolverState.DONE:
            raise RuntimeError("Cut queries need a finished solve(); call solve() first.")

    def saturated_edges(self) -> List[Edge]:
        """Forward edges with positive capacity and no residual left."""
        self._require_done()
        return [e for e in self.graph.edges() if e.capacity > 0 and e.residual == 0]

    def reachable(self) -> Set[NodeID]:
        """Nodes reachable from the source over edges with positive residual."""
        self._require_done()
        return reachable_from(self.graph, self.src_node)

    def min_cut(self, reachable: Optional[Set[NodeID]] = None) -> List[Edge]:
        """Forward edges crossing from the source side to the sink side."""
        if reachable is None:
            reachable = self.reachable()
        return [
            e for e in self.graph.edges() if e.src in reachable and e.dst not in reachable
        ]

    def summary(self) -> FlowSummary:
        """Build a `FlowSummary` of the finished computation."""
        self._require_done()
        reachable = self.reachable()
        cut = self.min_cut(reachable)
        return FlowSummary(
            total_flow=self.total_flow,
            augmentations=self.augmentations,
            saturated=self.saturated_edges(),
            reachable=frozenset(reachable),
            min_cut=cut,
            cut_capacity=sum(e.capacity for e in cut),
            strategy=self.strategy,
        )


@overload
def calc_max_flow(
    graph: ResidualGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    strategy: SearchStrategy = SearchStrategy.BFS,
    parallel_config: Optional[ParallelSearchConfig] = None,
    exhaustive_fallback: bool = True,
    copy_graph: bool = True,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def calc_max_flow(
    graph: ResidualGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    strategy: SearchStrategy = SearchStrategy.BFS,
    parallel_config: Optional[ParallelSearchConfig] = None,
    exhaustive_fallback: bool = True,
    copy_graph: bool = True,
    return_summary: Literal[True],
) -> tuple[int, FlowSummary]: ...


def calc_max_flow(
    graph: ResidualGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    strategy: SearchStrategy = SearchStrategy.BFS,
    parallel_config: Optional[ParallelSearchConfig] = None,
    exhaustive_fallback: bool = True,
    copy_graph: bool = True,
    return_summary: bool = False,
) -> Union[int, tuple[int, FlowSummary]]:
    """Compute the maximum flow between two nodes.

    Args:
        graph: Residual graph with original capacities set.
        src_node: Source node.
        dst_node: Sink node.
        strategy: Augmenting path search. Defaults to ``SearchStrategy.BFS``,
            which keeps the Edmonds-Karp ``O(V * E^2)`` bound.
        parallel_config: Settings for ``SearchStrategy.PARALLEL``.
        exhaustive_fallback: See `FlowSolver`.
        copy_graph: If True, solve a copy so ``graph`` keeps its residuals.
        return_summary: If True, also return a `FlowSummary`.

    Returns:
        Union[int, tuple[int, FlowSummary]]: Total flow, optionally with the summary.

    Examples:
        >>> g = ResidualGraph(3)
        >>> _ = g.add_edge(0, 1, 3)
        >>> _ = g.add_edge(1, 2, 2)
        >>> _ = g.add_edge(0, 2, 2)
        >>> calc_max_flow(g, 0, 2)
        4
    """
    flow_graph = graph.copy() if copy_graph else graph
    solver = FlowSolver(
        flow_graph,
        src_node,
        dst_node,
        strategy=strategy,
        parallel_config=parallel_config,
        exhaustive_fallback=exhaustive_fallback,
    )
    total = solver.solve()
    if return_summary:
        return total, solver.summary()
    return total
