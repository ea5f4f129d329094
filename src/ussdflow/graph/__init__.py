"""
ussdflow.graph
==============

Screen-flow graph subsystem.

Public API:

- FlowGraph     : per-kind adjacency layers over the screens (python-graphblas).
- derive_edges  : transitions implied by one screen.
- merge_edges   : de-duplicate edges by id.
- layout_nodes  : deterministic, cycle-safe 2-D layout.
- GraphNode, GraphEdge, EdgeKind, Position, FlowGraphView : renderable records.

All other modules in this package are considered internal implementation details.
"""

from __future__ import annotations

from .core import FlowGraph
from .edges import derive_edges, edge_id, merge_edges
from .elements import EdgeKind, FlowGraphView, GraphEdge, GraphNode, Position
from .layout import LayoutResult, layout_nodes

__all__ = [
    "FlowGraph",
    "derive_edges",
    "edge_id",
    "merge_edges",
    "EdgeKind",
    "FlowGraphView",
    "GraphEdge",
    "GraphNode",
    "Position",
    "LayoutResult",
    "layout_nodes",
]
