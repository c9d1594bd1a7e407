"""Concurrent frontier search for augmenting paths.

The frontier is expanded one BFS layer ("wave") at a time. Each wave is split
into chunks that run as tasks on a fixed-size thread pool, and the driver waits
for every task of the wave before it decides whether the sink was found.
Because waves are strict layers, a discovered path is always a shortest one.

The optional depth bound makes the search a heuristic: when the sink lies more
than ``max_depth + 1`` edges away from the source, the search reports no path
even though one exists.
"""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Tuple

from seamcut.algorithms.bfs import new_pred_map
from seamcut.algorithms.types import PredMap
from seamcut.config import DEFAULT_PARALLEL_CONFIG, ParallelSearchConfig
from seamcut.graph.residual_graph import Edge, NodeID, ResidualGraph
from seamcut.logging import get_logger

logger = get_logger(__name__)


class _ClaimTable:
    """First-writer-wins ownership of predecessor slots for one search."""

    def __init__(self, pred: PredMap, src_node: NodeID) -> None:
        self._pred = pred
        self._src_node = src_node
        self._lock = threading.Lock()

    def claim(self, edge: Edge) -> bool:
        """Record ``edge`` as the predecessor of ``edge.dst`` if it is unclaimed.

        Returns:
            bool: True for exactly one caller per node.
        """
        node = edge.dst
        if node == self._src_node or self._pred[node] is not None:
            return False
        with self._lock:
            if self._pred[node] is not None:
                return False
            self._pred[node] = edge
            return True


def _split(nodes: List[NodeID], parts: int) -> List[List[NodeID]]:
    size = max(1, math.ceil(len(nodes) / parts))
    return [nodes[i : i + size] for i in range(0, len(nodes), size)]


class ParallelFrontierSearch:
    """Layered, thread-pooled augmenting path search.

    The thread pool is created on first use and kept until ``close()``; the
    object can be used as a context manager.

    Args:
        config: Worker count and depth bound. Defaults to
            ``DEFAULT_PARALLEL_CONFIG``.
    """

    def __init__(self, config: Optional[ParallelSearchConfig] = None) -> None:
        self.config = config if config is not None else DEFAULT_PARALLEL_CONFIG
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> ParallelFrontierSearch:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.worker_count,
                thread_name_prefix="seamcut-search",
            )
            logger.debug(
                f"Started search pool with {self.config.worker_count} workers"
            )
        return self._executor

    def close(self) -> None:
        """Shut down the thread pool. Safe to call more than once."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def search(
        self,
        graph: ResidualGraph,
        src_node: NodeID,
        dst_node: NodeID,
        pred: Optional[PredMap] = None,
    ) -> Tuple[bool, PredMap]:
        """Find an augmenting path from ``src_node`` to ``dst_node``.

        Same contract as ``bfs_augmenting_path``: every edge on a reported
        path has positive residual capacity, and residuals are never written.

        Args:
            graph: Residual graph to search.
            src_node: Source node.
            dst_node: Sink node.
            pred: Optional predecessor map to reuse; it is reset first.

        Returns:
            Tuple[bool, PredMap]: Whether a path was found within the depth
            bound, and the predecessor map.

        Raises:
            InvalidNodeIndex: If either terminal is out of range.
        """
        graph.check_node(src_node)
        graph.check_node(dst_node)
        pred = new_pred_map(graph, pred)

        if src_node == dst_node:
            return False, pred

        max_depth = self.config.max_depth
        claims = _ClaimTable(pred, src_node)
        found = threading.Event()
        pool = self._pool()

        frontier: List[NodeID] = [src_node]
        depth = 0
        while frontier:
            if max_depth is not None and depth > max_depth:
                logger.debug(
                    f"Depth bound {max_depth} reached with {len(frontier)} "
                    f"unexpanded nodes; reporting no path"
                )
                return False, pred

            futures = [
                pool.submit(self._expand, graph, chunk, dst_node, claims, found)
                for chunk in _split(frontier, self.config.worker_count)
            ]
            wait(futures)

            next_frontier: List[NodeID] = []
            for future in futures:
                next_frontier.extend(future.result())

            if found.is_set():
                return True, pred

            frontier = next_frontier
            depth += 1

        return False, pred

    @staticmethod
    def _expand(
        graph: ResidualGraph,
        nodes: List[NodeID],
        dst_node: NodeID,
        claims: _ClaimTable,
        found: threading.Event,
    ) -> List[NodeID]:
        """Expand one chunk of the frontier; return the nodes it claimed."""
        discovered: List[NodeID] = []
        for node in nodes:
            if found.is_set():
                break
            for edge in graph.out_edges(node):
                if edge.residual > 0 and claims.claim(edge):
                    if edge.dst == dst_node:
                        found.set()
                        return discovered
                    discovered.append(edge.dst)
        return discovered
