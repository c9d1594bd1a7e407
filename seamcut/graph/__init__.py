"""Residual graph primitives.

This package provides `ResidualGraph`, its paired `Edge` type, the color
difference `edge_weight`, and the `INFINITE_CAPACITY` sentinel.
"""

from seamcut.graph.residual_graph import (
    INFINITE_CAPACITY,
    Edge,
    NodeID,
    ResidualGraph,
    edge_weight,
)

__all__ = ["INFINITE_CAPACITY", "Edge", "NodeID", "ResidualGraph", "edge_weight"]
