from __future__ import annotations

"""Renderable node/edge records produced by a graph build."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..diagnostics import BuildWarning
from ..screens import Screen


class EdgeKind(str, Enum):
    DEFAULT = "default"
    MENU = "menu"
    ROUTER = "router"


@dataclass(frozen=True, slots=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class GraphNode:
    """
    One node per screen; ``id`` is the screen name.

    The node itself is frozen, but ``screen`` is the build's own copy of the
    record and stays a plain mutable Screen. The snapshot is one level
    deep: the caller's input list is never touched, while edits to
    ``node.screen`` are visible through this view (and through any later
    build started from these screens).
    """

    id: str
    position: Position
    screen: Screen
    type: str = "screen"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": {"screen": self.screen.to_dict()},
        }


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """A directed transition between two screens."""

    id: str
    source: str
    target: str
    label: str
    kind: EdgeKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "kind": self.kind.value,
            "type": "custom",
            "animated": True,
        }


@dataclass(frozen=True, slots=True)
class FlowGraphView:
    """
    Result of one graph build, handed to the renderer as an immutable snapshot.

    nodes    : one GraphNode per screen, in placement order.
    edges    : every derived transition, de-duplicated by id.
    roots    : names of the screens the layout started from.
    warnings : non-fatal conditions met while building.
    """

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    roots: tuple[str, ...] = ()
    warnings: tuple[BuildWarning, ...] = field(default=())

    def node(self, node_id: str) -> GraphNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def edges_from(self, source: str) -> list[GraphEdge]:
        return [e for e in self.edges if e.source == source]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "warnings": [
                {"kind": w.kind.value, "screen": w.screen, "detail": w.detail}
                for w in self.warnings
            ],
        }
