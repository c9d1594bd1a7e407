"""Composite output from a solved grid graph."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Set

import numpy as np

from seamcut.algorithms.bfs import reachable_from
from seamcut.graph.residual_graph import NodeID
from seamcut.image.builder import GridGraph
from seamcut.image.grid import PixelGrid, PixelSink, PixelSource
from seamcut.logging import get_logger

logger = get_logger(__name__)


class PixelSide(IntEnum):
    """Which side of the cut a pixel ended up on."""

    SOURCE = 1
    SINK = 2
    NEITHER = 3


class ClassificationMode(IntEnum):
    """How pixels are assigned to a side of the cut."""

    #: Look only at the pixel's own terminal links.
    ADJACENCY = 1
    #: Residual reachability from SOURCE (the full min-cut partition).
    REACHABILITY = 2

    @classmethod
    def from_name(cls, name: str | ClassificationMode) -> ClassificationMode:
        if isinstance(name, ClassificationMode):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(
                f"Unknown classification mode '{name}'. Expected one of: {valid}"
            ) from None


class CutCompositor:
    """Label pixels by the final residual state and assemble the composite.

    In ``ADJACENCY`` mode a pixel is source-side when its link from SOURCE
    still has residual capacity, sink-side when its link to SINK still has
    residual capacity, and neither otherwise. Neither falls back to the
    target image. In ``REACHABILITY`` mode a pixel is source-side when it is
    reachable from SOURCE over positive residual edges and sink-side otherwise.

    The graph is only read.

    Args:
        grid: Solved grid graph.
        source_image: Image used for source-side pixels.
        target_image: Image used for all other pixels.
        mode: Classification mode.
    """

    def __init__(
        self,
        grid: GridGraph,
        source_image: PixelSource,
        target_image: PixelSource,
        mode: ClassificationMode = ClassificationMode.ADJACENCY,
    ) -> None:
        self.grid = grid
        self.source_image = source_image
        self.target_image = target_image
        self.mode = ClassificationMode.from_name(mode)
        self._reachable: Optional[Set[NodeID]] = None

    def _source_reachable(self) -> Set[NodeID]:
        if self._reachable is None:
            self._reachable = reachable_from(self.grid.graph, self.grid.source)
        return self._reachable

    def classify(self, x: int, y: int) -> PixelSide:
        """Return the side of the cut for pixel ``(x, y)``."""
        node = self.grid.node_index(x, y)

        if self.mode == ClassificationMode.REACHABILITY:
            if node in self._source_reachable():
                return PixelSide.SOURCE
            return PixelSide.SINK

        source_link = self.grid.source_links.get(node)
        if source_link is not None and source_link.residual > 0:
            return PixelSide.SOURCE
        sink_link = self.grid.sink_links.get(node)
        if sink_link is not None and sink_link.residual > 0:
            return PixelSide.SINK
        return PixelSide.NEITHER

    def labels(self) -> np.ndarray:
        """``(height, width)`` array of `PixelSide` values."""
        out = np.empty((self.grid.height, self.grid.width), dtype=np.int8)
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                out[y, x] = self.classify(x, y)
        return out

    def composite(
        self, sink: Optional[PixelSink] = None, labels: Optional[np.ndarray] = None
    ) -> PixelSink:
        """Write the composite into ``sink`` (a new `PixelGrid` by default).

        Source-side pixels come from the source image; sink-side and
        unclassified pixels come from the target image. Pass ``labels`` from
        an earlier `labels()` call to skip classifying the pixels again.
        """
        if sink is None:
            sink = PixelGrid.blank(self.grid.width, self.grid.height)
        if labels is None:
            labels = self.labels()
        elif labels.shape != (self.grid.height, self.grid.width):
            raise ValueError(
                f"labels must have shape {(self.grid.height, self.grid.width)}, "
                f"got {labels.shape}"
            )
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if labels[y, x] == PixelSide.SOURCE:
                    sink.set(x, y, self.source_image.get(x, y))
                else:
                    sink.set(x, y, self.target_image.get(x, y))

        logger.info(
            f"Composited {self.grid.width}x{self.grid.height} image: "
            f"{int((labels == PixelSide.SOURCE).sum())} source, "
            f"{int((labels == PixelSide.SINK).sum())} sink, "
            f"{int((labels == PixelSide.NEITHER).sum())} unclassified pixels"
        )
        return sink
