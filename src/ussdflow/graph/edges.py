from __future__ import annotations

from typing import Iterable, Literal

from ..diagnostics import BuildWarning, WarningKind
from ..log import getLogger
from ..screens import Screen
from .elements import EdgeKind, GraphEdge

logger = getLogger(__name__)

EdgeIdentity = Literal["kind", "merge"]

DEFAULT_LABEL = "Next"
ROUTER_LABEL = "Next"


def edge_id(
    source: str,
    target: str,
    kind: EdgeKind = EdgeKind.DEFAULT,
    key: str = "",
    identity: EdgeIdentity = "kind",
) -> str:
    """
    Edge identity.

    identity="merge" -> "<source>-><target>" for every edge.
    identity="kind"  -> default edges as above; menu/router edges append
                        "#<kind>:<key>" so they stay distinct from the
                        default edge and from each other.
    """
    base = f"{source}->{target}"
    if identity == "merge" or kind is EdgeKind.DEFAULT:
        return base
    return f"{base}#{kind.value}:{key}"


def derive_edges(screen: Screen, identity: EdgeIdentity = "kind") -> list[GraphEdge]:
    """
    Return every transition implied by ``screen``.

    Order: default transition, then menu items, then router options, each
    relation in stored order. Empty targets emit nothing. Targets are not
    checked against the directory.
    """
    edges: list[GraphEdge] = []
    name = screen.name

    if screen.default_next_screen:
        edges.append(
            GraphEdge(
                id=edge_id(name, screen.default_next_screen, identity=identity),
                source=name,
                target=screen.default_next_screen,
                label=DEFAULT_LABEL,
                kind=EdgeKind.DEFAULT,
            )
        )

    for item in screen.menu_items or ():
        if not item.next_screen:
            continue
        edges.append(
            GraphEdge(
                id=edge_id(name, item.next_screen, EdgeKind.MENU, item.option, identity),
                source=name,
                target=item.next_screen,
                label=item.display_name,
                kind=EdgeKind.MENU,
            )
        )

    for option in screen.router_options or ():
        if not option.next_screen:
            continue
        edges.append(
            GraphEdge(
                id=edge_id(name, option.next_screen, EdgeKind.ROUTER, option.router_option, identity),
                source=name,
                target=option.next_screen,
                label=ROUTER_LABEL,
                kind=EdgeKind.ROUTER,
            )
        )

    return edges


def merge_edges(edges: Iterable[GraphEdge]) -> tuple[list[GraphEdge], list[BuildWarning]]:
    """
    De-duplicate edges by id.

    A later edge with an id already seen replaces the earlier one at the
    earlier one's position; each replacement is reported as a warning.
    """
    merged: dict[str, GraphEdge] = {}
    warnings: list[BuildWarning] = []
    for edge in edges:
        previous = merged.get(edge.id)
        if previous is not None:
            logger.warning(
                "Edge %r (%s) replaces earlier %s edge with the same id",
                edge.id,
                edge.kind.value,
                previous.kind.value,
            )
            warnings.append(
                BuildWarning(
                    WarningKind.EDGE_COLLISION,
                    edge.source,
                    f"{edge.kind.value} edge {edge.id!r} replaces {previous.kind.value} edge",
                )
            )
        merged[edge.id] = edge
    return list(merged.values()), warnings
