"""Residual flow network over dense integer node indices.

`ResidualGraph` stores an adjacency list of `Edge` objects. Every call to
``add_edge`` inserts a forward edge together with a zero-capacity reverse
edge; the pair always satisfies
``forward.residual + reverse.residual == forward.capacity``.
Edges are never removed or reordered, so an `Edge` object keeps its identity
for the lifetime of the graph and can be inspected after solving.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pickle import dumps, loads
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from seamcut.errors import InvalidNodeIndex

if TYPE_CHECKING:
    import networkx as nx

NodeID = int
Color = Sequence[int]

# Capacity of terminal links. Flow totals are Python ints and cannot overflow;
# the value matches the 32-bit maximum used by common image tooling.
INFINITE_CAPACITY: int = 2**31 - 1


@dataclass(eq=False, repr=False)
class Edge:
    """Directed arc with original and residual capacity.

    Attributes:
        src: Tail node index.
        dst: Head node index.
        capacity: Original capacity, fixed at construction.
        residual: Remaining capacity; starts equal to ``capacity``.
        is_reverse: True for the zero-capacity partner created by ``add_edge``.
        reverse: The paired edge running the opposite way.
    """

    src: NodeID
    dst: NodeID
    capacity: int
    residual: int = field(init=False)
    is_reverse: bool = False
    reverse: Optional[Edge] = field(default=None)

    def __post_init__(self) -> None:
        self.residual = self.capacity

    @property
    def flow(self) -> int:
        """Flow currently carried by this edge."""
        return self.capacity - self.residual

    @property
    def saturated(self) -> bool:
        return self.residual == 0

    def __repr__(self) -> str:
        kind = "rev" if self.is_reverse else "fwd"
        return (
            f"Edge({self.src}->{self.dst}, {kind}, "
            f"residual={self.residual}/{self.capacity})"
        )


def edge_weight(color_a: Color, color_b: Color) -> int:
    """Return the sum of absolute per-channel differences of two RGB colors.

    Args:
        color_a: ``(red, green, blue)`` with channels in ``[0, 255]``.
        color_b: ``(red, green, blue)`` with channels in ``[0, 255]``.

    Returns:
        int: A weight in ``[0, 765]``.

    Raises:
        ValueError: If either color has fewer than three channels.

    Examples:
        >>> edge_weight((10, 20, 30), (15, 25, 35))
        15
    """
    rgb_a, rgb_b = color_a[:3], color_b[:3]
    if len(rgb_a) != 3 or len(rgb_b) != 3:
        raise ValueError(
            f"edge_weight needs RGB colors, got {tuple(color_a)!r} and {tuple(color_b)!r}"
        )
    return sum(abs(int(a) - int(b)) for a, b in zip(rgb_a, rgb_b, strict=True))


class ResidualGraph:
    """Fixed-size residual graph with paired forward/reverse edges.

    Parallel edges between the same pair of nodes are allowed and tracked
    independently.

    Args:
        num_nodes: Number of nodes; indices are ``0 .. num_nodes - 1``.

    Raises:
        ValueError: If ``num_nodes`` is not positive.
    """

    def __init__(self, num_nodes: int) -> None:
        if num_nodes <= 0:
            raise ValueError(f"num_nodes must be positive, got {num_nodes}")
        self._num_nodes = num_nodes
        self._adj: List[List[Edge]] = [[] for _ in range(num_nodes)]
        self._forward: List[Edge] = []

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_edges(self) -> int:
        """Number of forward edges (reverse partners are not counted)."""
        return len(self._forward)

    def __len__(self) -> int:
        return self._num_nodes

    def __repr__(self) -> str:
        return f"ResidualGraph(num_nodes={self._num_nodes}, num_edges={self.num_edges})"

    def check_node(self, node: NodeID) -> None:
        """Raise `InvalidNodeIndex` unless ``0 <= node < num_nodes``."""
        if not 0 <= node < self._num_nodes:
            raise InvalidNodeIndex(node, self._num_nodes)

    def add_edge(self, src: NodeID, dst: NodeID, capacity: int) -> Edge:
        """Add ``src -> dst`` with ``capacity`` and its zero-capacity reverse.

        Args:
            src: Tail node index.
            dst: Head node index.
            capacity: Non-negative integer capacity.

        Returns:
            Edge: The forward edge.

        Raises:
            InvalidNodeIndex: If either index is out of range.
            ValueError: If ``capacity`` is negative.
        """
        self.check_node(src)
        self.check_node(dst)
        if capacity < 0:
            raise ValueError(f"Edge capacity must be non-negative, got {capacity}")

        forward = Edge(src, dst, int(capacity))
        reverse = Edge(dst, src, 0, is_reverse=True)
        forward.reverse = reverse
        reverse.reverse = forward

        self._adj[src].append(forward)
        self._adj[dst].append(reverse)
        self._forward.append(forward)
        return forward

    def out_edges(self, node: NodeID) -> List[Edge]:
        """Return the outgoing edge list of ``node``, reverse partners included.

        The returned list is the graph's own storage; do not modify it.
        """
        self.check_node(node)
        return self._adj[node]

    def edges(self) -> Iterator[Edge]:
        """Iterate over forward edges in insertion order."""
        return iter(self._forward)

    def reset(self) -> None:
        """Restore every residual capacity to its original value."""
        for edge in self._forward:
            edge.residual = edge.capacity
            edge.reverse.residual = 0

    def copy(self) -> ResidualGraph:
        """Return a deep copy of the graph, residual state included."""
        return loads(dumps(self))

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export forward edges to a ``networkx.MultiDiGraph``.

        Each edge carries ``capacity``, ``residual`` and ``flow`` attributes.
        Edge keys are the insertion positions of the forward edges.
        """
        import networkx as nx

        g = nx.MultiDiGraph()
        g.add_nodes_from(range(self._num_nodes))
        for key, edge in enumerate(self._forward):
            g.add_edge(
                edge.src,
                edge.dst,
                key=key,
                capacity=edge.capacity,
                residual=edge.residual,
                flow=edge.flow,
            )
        return g
