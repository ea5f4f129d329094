from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..diagnostics import BuildWarning, WarningKind
from ..directory import ScreenDirectory
from ..log import getLogger
from .core import FlowGraph
from .edges import derive_edges
from .elements import EdgeKind, GraphNode, Position

logger = getLogger(__name__)

COLUMN_WIDTH = 300
ROW_STEP = 100


@dataclass(frozen=True, slots=True)
class LayoutResult:
    nodes: tuple[GraphNode, ...]
    roots: tuple[str, ...]
    warnings: tuple[BuildWarning, ...] = ()


def layout_nodes(
    directory: ScreenDirectory,
    graph: Optional[FlowGraph] = None,
    *,
    column_width: int = COLUMN_WIDTH,
    row_step: int = ROW_STEP,
) -> LayoutResult:
    """
    Assign every screen exactly one position.

    Roots are walked in directory order, each depth-first along default
    transitions only: ``x = depth * column_width`` and ``y`` advances by
    ``row_step`` for every node placed, across all walks. A walk stops at a
    screen it already visited (cycle) or one an earlier walk placed. Every
    visited screen is placed at once, so the placed-set check is the one
    that fires first; the per-walk visited set states the cycle guard
    explicitly.

    When no screen is a root (every screen is some other screen's default
    target) every screen is treated as its own root. Screens still unplaced
    after the root walks sit on cycles no root reaches; they are walked
    afterwards in directory order.
    """
    if graph is None:
        graph = FlowGraph.from_edges(
            directory.names(),
            (
                e
                for screen in directory.values()
                for e in derive_edges(screen)
                if e.kind is EdgeKind.DEFAULT
            ),
        )

    warnings: list[BuildWarning] = []
    roots = graph.roots()
    if not roots and len(directory):
        logger.warning("No root screen found among %d screens; every screen is a root", len(directory))
        warnings.append(
            BuildWarning(
                WarningKind.NO_ROOT,
                directory.names()[0],
                "every screen is the default target of another screen",
            )
        )
        roots = directory.names()

    positions: dict[str, Position] = {}
    row = 0

    def walk(start: str) -> None:
        nonlocal row
        visited: set[str] = set()
        name: Optional[str] = start
        depth = 0
        while name is not None and name not in visited and name not in positions:
            visited.add(name)
            positions[name] = Position(x=depth * column_width, y=row * row_step)
            row += 1
            depth += 1
            successors = graph.successors(EdgeKind.DEFAULT, name)
            name = successors[0] if successors else None

    for root in roots:
        walk(root)

    for name in directory:
        if name in positions:
            continue
        logger.warning("Screen %r is on a cycle not reachable from any root", name)
        warnings.append(
            BuildWarning(
                WarningKind.DETACHED_CYCLE,
                name,
                "placed as an extra root; its default chain is not reached from any root",
            )
        )
        walk(name)

    nodes = tuple(
        GraphNode(id=name, position=position, screen=directory[name])
        for name, position in positions.items()
    )
    return LayoutResult(nodes=nodes, roots=tuple(roots), warnings=tuple(warnings))
