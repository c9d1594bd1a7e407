"""Grid graph construction from two overlapping images.

Every pixel becomes a node (row-major, ``index = y * width + x``), followed by
the SOURCE and SINK terminals. Each pixel receives one edge from each of its
4-neighbors; the edge ``n -> p`` weighs the difference between the target
image at ``n`` and the source image at ``p``, so the two directions between a
pair of neighbors carry different weights. Pixels in the source seed hang off
SOURCE and pixels in the sink seed drain into SINK through
``INFINITE_CAPACITY`` links.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np

from seamcut.errors import DimensionMismatch
from seamcut.graph.residual_graph import INFINITE_CAPACITY, Edge, NodeID, ResidualGraph
from seamcut.image.grid import PixelSource, as_array
from seamcut.image.seeds import SeedRegion
from seamcut.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GridGraph:
    """A residual graph laid over a pixel grid.

    Attributes:
        graph: The flow network.
        width: Grid width in pixels.
        height: Grid height in pixels.
        source_links: Pixel index -> ``SOURCE -> pixel`` edge, for source seed pixels.
        sink_links: Pixel index -> ``pixel -> SINK`` edge, for sink seed pixels.
    """

    graph: ResidualGraph
    width: int
    height: int
    source_links: Dict[NodeID, Edge] = field(default_factory=dict)
    sink_links: Dict[NodeID, Edge] = field(default_factory=dict)

    @property
    def source(self) -> NodeID:
        return self.width * self.height

    @property
    def sink(self) -> NodeID:
        return self.width * self.height + 1

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    def node_index(self, x: int, y: int) -> NodeID:
        return y * self.width + x

    def pixel_of(self, node: NodeID) -> Tuple[int, int]:
        """Return ``(x, y)`` of a pixel node."""
        self.graph.check_node(node)
        if node >= self.num_pixels:
            raise ValueError(f"Node {node} is a terminal, not a pixel")
        return node % self.width, node // self.width


def _neighbor_weights(src: np.ndarray, tgt: np.ndarray) -> Dict[str, np.ndarray]:
    """Per-direction weights of the edges entering each pixel.

    ``weights["left"][y, x - 1]`` weighs ``(x-1, y) -> (x, y)``,
    ``weights["right"][y, x]`` weighs ``(x+1, y) -> (x, y)``,
    ``weights["up"][y - 1, x]`` weighs ``(x, y-1) -> (x, y)`` and
    ``weights["down"][y, x]`` weighs ``(x, y+1) -> (x, y)``.
    """
    return {
        "left": np.abs(tgt[:, :-1] - src[:, 1:]).sum(axis=2),
        "right": np.abs(tgt[:, 1:] - src[:, :-1]).sum(axis=2),
        "up": np.abs(tgt[:-1, :] - src[1:, :]).sum(axis=2),
        "down": np.abs(tgt[1:, :] - src[:-1, :]).sum(axis=2),
    }


class GridGraphBuilder:
    """Assemble the flow network for a pair of images and two seed regions.

    Args:
        source_image: Image whose pixels the source side keeps.
        target_image: Image whose pixels the sink side keeps.
        source_seed: Pixels tied to SOURCE.
        sink_seed: Pixels tied to SINK.
    """

    def __init__(
        self,
        source_image: PixelSource,
        target_image: PixelSource,
        source_seed: SeedRegion,
        sink_seed: SeedRegion,
    ) -> None:
        self.source_image = source_image
        self.target_image = target_image
        self.source_seed = source_seed
        self.sink_seed = sink_seed

    def validate(self) -> None:
        """Fail fast on mismatched images or out-of-bounds seeds.

        Raises:
            DimensionMismatch: If the images differ in size.
            SeedRegionOutOfBounds: If a seed is empty or leaves the grid.
        """
        src_size = (self.source_image.width, self.source_image.height)
        tgt_size = (self.target_image.width, self.target_image.height)
        if src_size != tgt_size:
            raise DimensionMismatch(src_size, tgt_size)
        width, height = src_size
        self.source_seed.validate(width, height, name="source seed")
        self.sink_seed.validate(width, height, name="sink seed")

    def build(self) -> GridGraph:
        """Validate the inputs and build the `GridGraph`."""
        self.validate()
        width, height = self.source_image.width, self.source_image.height
        num_pixels = width * height

        grid = GridGraph(ResidualGraph(num_pixels + 2), width, height)
        graph = grid.graph
        weights = _neighbor_weights(
            as_array(self.source_image), as_array(self.target_image)
        )
        w_left, w_right = weights["left"], weights["right"]
        w_up, w_down = weights["up"], weights["down"]

        for y in range(height):
            for x in range(width):
                node = y * width + x
                if x > 0:
                    graph.add_edge(node - 1, node, int(w_left[y, x - 1]))
                if x < width - 1:
                    graph.add_edge(node + 1, node, int(w_right[y, x]))
                if y > 0:
                    graph.add_edge(node - width, node, int(w_up[y - 1, x]))
                if y < height - 1:
                    graph.add_edge(node + width, node, int(w_down[y, x]))
                if self.source_seed.contains(x, y):
                    grid.source_links[node] = graph.add_edge(
                        grid.source, node, INFINITE_CAPACITY
                    )
                if self.sink_seed.contains(x, y):
                    grid.sink_links[node] = graph.add_edge(
                        node, grid.sink, INFINITE_CAPACITY
                    )

        logger.info(
            f"Built {width}x{height} grid graph: {graph.num_nodes} nodes, "
            f"{graph.num_edges} edges, {len(grid.source_links)} source seed pixels, "
            f"{len(grid.sink_links)} sink seed pixels"
        )
        return grid
