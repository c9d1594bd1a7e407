"""SeamCut: minimum-cost seams between overlapping images via max flow.

Every pixel becomes a node of a flow network; the minimum cut between a source
seed region and a sink seed region decides which image each output pixel comes
from.

Primary API:
    synthesize() - Build, solve and composite in one call
    ResidualGraph - Flow network with paired residual edges
    FlowSolver, calc_max_flow() - Edmonds-Karp max flow
    ParallelFrontierSearch - Thread-pooled augmenting path search
    GridGraphBuilder, CutCompositor - Image-facing graph assembly and output

Example:
    from seamcut import SeamConfig, SeedRegion, load_image, save_image, synthesize

    config = SeamConfig(
        source_seed=SeedRegion(9, 9, 29, 29),
        sink_seed=SeedRegion(79, 79, 99, 99),
    )
    result = synthesize(load_image("src.png"), load_image("target.png"), config)
    save_image(result.image, "output.png")
"""

from __future__ import annotations

from seamcut import cli, logging
from seamcut._version import __version__
from seamcut.algorithms.bfs import bfs_augmenting_path, path_edges, reachable_from
from seamcut.algorithms.max_flow import FlowSolver, calc_max_flow
from seamcut.algorithms.parallel_bfs import ParallelFrontierSearch
from seamcut.algorithms.types import FlowSummary, SearchStrategy, SolverState
from seamcut.config import DEFAULT_PARALLEL_CONFIG, ParallelSearchConfig, SeamConfig
from seamcut.errors import (
    DimensionMismatch,
    InvalidNodeIndex,
    SeamCutError,
    SeedRegionOutOfBounds,
)
from seamcut.graph.residual_graph import INFINITE_CAPACITY, Edge, ResidualGraph, edge_weight
from seamcut.image.builder import GridGraph, GridGraphBuilder
from seamcut.image.compositor import ClassificationMode, CutCompositor, PixelSide
from seamcut.image.grid import PixelGrid, PixelSink, PixelSource
from seamcut.image.io import load_image, save_image
from seamcut.image.seeds import SeedRegion
from seamcut.pipeline import SeamResult, synthesize

__all__ = [
    # Version
    "__version__",
    # Graph
    "ResidualGraph",
    "Edge",
    "edge_weight",
    "INFINITE_CAPACITY",
    # Algorithms
    "bfs_augmenting_path",
    "path_edges",
    "reachable_from",
    "ParallelFrontierSearch",
    "FlowSolver",
    "calc_max_flow",
    "FlowSummary",
    "SearchStrategy",
    "SolverState",
    # Image
    "PixelGrid",
    "PixelSource",
    "PixelSink",
    "SeedRegion",
    "GridGraph",
    "GridGraphBuilder",
    "CutCompositor",
    "ClassificationMode",
    "PixelSide",
    "load_image",
    "save_image",
    # Pipeline and configuration
    "synthesize",
    "SeamResult",
    "SeamConfig",
    "ParallelSearchConfig",
    "DEFAULT_PARALLEL_CONFIG",
    # Errors
    "SeamCutError",
    "InvalidNodeIndex",
    "DimensionMismatch",
    "SeedRegionOutOfBounds",
    # Utilities
    "cli",
    "logging",
]
