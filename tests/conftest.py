"""Shared fixtures: small residual graphs and pixel grids."""

from __future__ import annotations

import random
from typing import List, Tuple

import numpy as np
import pytest

from seamcut.graph.residual_graph import ResidualGraph
from seamcut.image.grid import PixelGrid


@pytest.fixture
def four_node():
    # Capacity:
    #       [3]        [2]
    #   0 ───────► 1 ───────► 2        3 (isolated)
    #   │                     ▲
    #   └─────────────────────┘
    #             [2]
    #
    # Max flow 0 -> 2 is 4; edge 1 -> 2 ends saturated.
    g = ResidualGraph(4)
    g.add_edge(0, 1, 3)
    g.add_edge(1, 2, 2)
    g.add_edge(0, 2, 2)
    return g


@pytest.fixture
def line1():
    # Capacity:
    #     [5]      [1,3,7]
    #  0 ──────► 1 ════════► 2
    #
    # Three parallel edges between 1 and 2; max flow 0 -> 2 is 5.
    g = ResidualGraph(3)
    g.add_edge(0, 1, 5)
    g.add_edge(1, 2, 1)
    g.add_edge(1, 2, 3)
    g.add_edge(1, 2, 7)
    return g


@pytest.fixture
def clrs6():
    # Classic six-node network (source 0, sink 5), max flow 23.
    #
    #   0->1 [16]   0->2 [13]   1->2 [10]   2->1 [4]   1->3 [12]
    #   3->2 [9]    2->4 [14]   4->3 [7]    3->5 [20]  4->5 [4]
    g = ResidualGraph(6)
    g.add_edge(0, 1, 16)
    g.add_edge(0, 2, 13)
    g.add_edge(1, 2, 10)
    g.add_edge(2, 1, 4)
    g.add_edge(1, 3, 12)
    g.add_edge(3, 2, 9)
    g.add_edge(2, 4, 14)
    g.add_edge(4, 3, 7)
    g.add_edge(3, 5, 20)
    g.add_edge(4, 5, 4)
    return g


@pytest.fixture
def disconnected():
    # 0 ──[5]──► 1        2 ──[5]──► 3
    g = ResidualGraph(4)
    g.add_edge(0, 1, 5)
    g.add_edge(2, 3, 5)
    return g


@pytest.fixture
def chain6():
    # 0 ─► 1 ─► 2 ─► 3 ─► 4 ─► 5 ─► 6, every capacity 4.
    # The sink is six edges away from the source.
    g = ResidualGraph(7)
    for u in range(6):
        g.add_edge(u, u + 1, 4)
    return g


@pytest.fixture
def shortcut():
    # Capacity:
    #      [5]       [5]
    #  0 ──────► 1 ──────► 2
    #  │                   ▲
    #  └───────────────────┘
    #           [1]
    #
    # Max flow 0 -> 2 is 6; the one-hop path carries 1.
    g = ResidualGraph(3)
    g.add_edge(0, 1, 5)
    g.add_edge(1, 2, 5)
    g.add_edge(0, 2, 1)
    return g


def _make_random_graph(
    seed: int, num_nodes: int = 12, num_edges: int = 40, max_cap: int = 20
) -> ResidualGraph:
    """Random multigraph without self-loops; capacities in ``[0, max_cap]``."""
    rng = random.Random(seed)
    g = ResidualGraph(num_nodes)
    for _ in range(num_edges):
        u, v = rng.sample(range(num_nodes), 2)
        g.add_edge(u, v, rng.randint(0, max_cap))
    return g


def _nx_max_flow(graph: ResidualGraph, src: int, dst: int) -> int:
    """Oracle max-flow value from networkx with parallel edges merged."""
    import networkx as nx

    g = nx.DiGraph()
    g.add_nodes_from(range(graph.num_nodes))
    for edge in graph.edges():
        if g.has_edge(edge.src, edge.dst):
            g[edge.src][edge.dst]["capacity"] += edge.capacity
        else:
            g.add_edge(edge.src, edge.dst, capacity=edge.capacity)
    return int(nx.maximum_flow_value(g, src, dst))


def _capacity_snapshot(graph: ResidualGraph) -> List[Tuple[int, int]]:
    return [(e.residual, e.reverse.residual) for e in graph.edges()]


@pytest.fixture
def uniform_2x2():
    """Source and target 2x2 grids of one color, so every grid edge weighs 0."""
    return PixelGrid.filled(2, 2, (120, 80, 40)), PixelGrid.filled(2, 2, (120, 80, 40))


@pytest.fixture
def black_white_1x3():
    """1x3 all-black source and all-white target: every grid edge weighs 765."""
    return PixelGrid.filled(3, 1, (0, 0, 0)), PixelGrid.filled(3, 1, (255, 255, 255))


@pytest.fixture
def random_pair():
    """Pair of 7x5 random images from a fixed seed."""
    rng = np.random.default_rng(7)
    src = PixelGrid(rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8))
    tgt = PixelGrid(rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8))
    return src, tgt


@pytest.fixture
def make_graph():
    """Factory for seeded random multigraphs."""
    return _make_random_graph


@pytest.fixture
def oracle():
    """networkx max-flow value for a `ResidualGraph`."""
    return _nx_max_flow


@pytest.fixture
def snapshot():
    """``[(residual, reverse residual), ...]`` over forward edges."""
    return _capacity_snapshot
