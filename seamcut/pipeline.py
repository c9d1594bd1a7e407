"""End-to-end seam computation: build, solve, composite.

Errors from any stage propagate to the caller before an output image exists,
so a failed run never yields a partially composited result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import numpy as np

from seamcut.algorithms.max_flow import FlowSolver
from seamcut.algorithms.types import FlowSummary
from seamcut.config import SeamConfig
from seamcut.image.builder import GridGraph, GridGraphBuilder
from seamcut.image.compositor import ClassificationMode, CutCompositor
from seamcut.image.grid import PixelGrid, PixelSource
from seamcut.logging import get_logger, log_phase

logger = get_logger(__name__)


@dataclass
class SeamResult:
    """Outcome of `synthesize`.

    Attributes:
        image: Composite image.
        summary: Flow and cut details from the solver.
        grid: Solved grid graph.
        labels: ``(height, width)`` array of `PixelSide` values.
        timings: Seconds spent per stage ("build", "solve", "composite").
    """

    image: PixelGrid
    summary: FlowSummary
    grid: GridGraph
    labels: np.ndarray
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def total_flow(self) -> int:
        return self.summary.total_flow


def synthesize(
    source_image: PixelSource, target_image: PixelSource, config: SeamConfig
) -> SeamResult:
    """Compute the minimum-cost seam between two images and composite them.

    Args:
        source_image: Image kept on the source side of the cut.
        target_image: Image kept on the sink side (and for unclassified pixels).
        config: Seeds, search strategy and compositor mode.

    Returns:
        SeamResult: Composite image with flow summary and timings.

    Raises:
        DimensionMismatch: If the images differ in size.
        SeedRegionOutOfBounds: If a seed region is empty or outside the grid.
    """
    timings: Dict[str, float] = {}

    with log_phase(logger, "build", timings):
        grid = GridGraphBuilder(
            source_image, target_image, config.source_seed, config.sink_seed
        ).build()

    with log_phase(logger, "solve", timings):
        solver = FlowSolver(
            grid.graph,
            grid.source,
            grid.sink,
            strategy=config.strategy,
            parallel_config=config.parallel,
            exhaustive_fallback=config.exhaustive_fallback,
        )
        solver.solve()
        summary = solver.summary()
    if solver.fallback_paths:
        logger.info(
            f"{solver.fallback_paths} augmenting paths came from the BFS fallback "
            f"(depth bound {config.parallel.max_depth})"
        )

    with log_phase(logger, "composite", timings):
        compositor = CutCompositor(
            grid,
            source_image,
            target_image,
            mode=ClassificationMode.from_name(config.mode),
        )
        labels = compositor.labels()
        image = compositor.composite(labels=labels)

    logger.info(
        f"Seam found: flow {summary.total_flow}, {len(summary.min_cut)} cut edges, "
        f"{summary.augmentations} augmentations"
    )
    return SeamResult(
        image=image, summary=summary, grid=grid, labels=labels, timings=timings
    )
