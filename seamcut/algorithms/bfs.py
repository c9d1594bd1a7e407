"""Sequential breadth-first search for augmenting paths."""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Set, Tuple

from seamcut.algorithms.types import PredMap
from seamcut.graph.residual_graph import Edge, NodeID, ResidualGraph
from seamcut.logging import get_logger

logger = get_logger(__name__)


def new_pred_map(graph: ResidualGraph, pred: Optional[PredMap] = None) -> PredMap:
    """Return an all-unvisited predecessor map sized for ``graph``.

    Reuses ``pred`` in place when it has the right length.
    """
    if pred is not None and len(pred) == graph.num_nodes:
        for i in range(len(pred)):
            pred[i] = None
        return pred
    return [None] * graph.num_nodes


def bfs_augmenting_path(
    graph: ResidualGraph,
    src_node: NodeID,
    dst_node: NodeID,
    pred: Optional[PredMap] = None,
) -> Tuple[bool, PredMap]:
    """Find a fewest-hops path with positive residual capacity.

    Each node is enqueued at most once; a slot of ``pred`` that is not None
    marks the node as visited. The search returns the moment ``dst_node`` is
    discovered. Residual capacities are only read.

    Args:
        graph: Residual graph to search.
        src_node: Source node.
        dst_node: Sink node.
        pred: Optional predecessor map to reuse; it is reset first.

    Returns:
        Tuple[bool, PredMap]: Whether a path exists, and the predecessor map
        (``pred[v]`` is the edge used to reach ``v``).

    Raises:
        InvalidNodeIndex: If either terminal is out of range.
    """
    graph.check_node(src_node)
    graph.check_node(dst_node)
    pred = new_pred_map(graph, pred)

    if src_node == dst_node:
        return False, pred

    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for edge in graph.out_edges(node):
            nxt = edge.dst
            if edge.residual > 0 and pred[nxt] is None and nxt != src_node:
                pred[nxt] = edge
                if nxt == dst_node:
                    return True, pred
                queue.append(nxt)

    logger.debug(f"BFS exhausted without reaching node {dst_node}")
    return False, pred


def path_edges(pred: PredMap, src_node: NodeID, dst_node: NodeID) -> List[Edge]:
    """Reconstruct the path recorded in ``pred``, ordered from source to sink.

    Raises:
        ValueError: If the chain from ``dst_node`` does not lead back to
            ``src_node``.
    """
    edges: List[Edge] = []
    node = dst_node
    # A valid chain visits each node once, so it has fewer than len(pred) edges.
    for _ in range(len(pred)):
        if node == src_node:
            edges.reverse()
            return edges
        edge = pred[node]
        if edge is None:
            break
        edges.append(edge)
        node = edge.src
    raise ValueError(
        f"Predecessor map has no chain from node {dst_node} back to node {src_node}"
    )


def reachable_from(graph: ResidualGraph, src_node: NodeID) -> Set[NodeID]:
    """Return every node reachable from ``src_node`` over positive residual edges."""
    graph.check_node(src_node)
    seen = {src_node}
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for edge in graph.out_edges(node):
            if edge.residual > 0 and edge.dst not in seen:
                seen.add(edge.dst)
                queue.append(edge.dst)
    return seen
