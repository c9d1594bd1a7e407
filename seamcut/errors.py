"""Error kinds raised while building or solving a seam network.

A search that finds no augmenting path is not an error; it is how the solver
learns it is done.
"""

from __future__ import annotations


class SeamCutError(Exception):
    """Base class for SeamCut errors."""


class InvalidNodeIndex(SeamCutError, IndexError):
    """A node index outside ``[0, num_nodes)`` reached a graph operation."""

    def __init__(self, node: int, num_nodes: int) -> None:
        super().__init__(
            f"Node index {node} is outside the graph range [0, {num_nodes})."
        )
        self.node = node
        self.num_nodes = num_nodes


class DimensionMismatch(SeamCutError, ValueError):
    """Source and target pixel grids differ in size."""

    def __init__(self, source_size: tuple[int, int], target_size: tuple[int, int]):
        super().__init__(
            f"Source image is {source_size[0]}x{source_size[1]} but target image "
            f"is {target_size[0]}x{target_size[1]}."
        )
        self.source_size = source_size
        self.target_size = target_size


class SeedRegionOutOfBounds(SeamCutError, ValueError):
    """A seed rectangle is empty or leaves the pixel grid."""
