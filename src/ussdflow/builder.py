from __future__ import annotations

from typing import Iterable, Optional

from .config import AppSettings, get_settings
from .diagnostics import BuildWarning, WarningKind
from .directory import ScreenDirectory, ScreenSource
from .enrich import RelationEnricher
from .graph.core import FlowGraph
from .graph.edges import derive_edges, merge_edges
from .graph.elements import FlowGraphView, GraphEdge
from .graph.layout import layout_nodes
from .log import getLogger
from .screens import Screen

logger = getLogger(__name__)


async def build_graph(
    screens: Iterable[Screen],
    source: Optional[ScreenSource] = None,
    *,
    settings: Optional[AppSettings] = None,
) -> FlowGraphView:
    """
    Turn a screen list into a laid-out flow graph.

    Steps:
      1. Snapshot the screens into a ScreenDirectory (the input is not mutated).
      2. If a source is given, fetch menu items / router options for every
         MENU / ROUTER screen and wait until all fetches have settled.
      3. Derive edges for every screen and de-duplicate them by id.
      4. Build the FlowGraph and lay out the nodes.

    Nothing in here raises for bad data: failed fetches, dangling references,
    rootless cycles and id collisions come back as ``view.warnings``.
    """
    settings = settings or get_settings()

    directory = ScreenDirectory(screens)
    warnings: list[BuildWarning] = list(directory.warnings)

    if source is not None:
        enricher = RelationEnricher(
            source,
            max_concurrency=settings.enrichment.max_concurrency,
            timeout_s=settings.enrichment.timeout_s,
        )
        warnings.extend(await enricher.enrich(directory))

    if not len(directory):
        logger.info("Built empty flow graph")
        return FlowGraphView(warnings=tuple(warnings))

    derived = [
        edge
        for screen in directory.values()
        for edge in derive_edges(screen, settings.graph.edge_identity)
    ]
    edges, collisions = merge_edges(derived)
    warnings.extend(collisions)
    warnings.extend(_dangling_references(directory, edges))

    # Layout sees every transition, whatever the id policy merged away.
    graph = FlowGraph.from_edges(directory.names(), derived)
    layout = layout_nodes(
        directory,
        graph,
        column_width=settings.layout.column_width,
        row_step=settings.layout.row_step,
    )
    warnings.extend(layout.warnings)

    logger.info(
        "Built flow graph: %d nodes, %d edges, %d warnings",
        len(layout.nodes),
        len(edges),
        len(warnings),
    )
    return FlowGraphView(
        nodes=layout.nodes,
        edges=tuple(edges),
        roots=layout.roots,
        warnings=tuple(warnings),
    )


async def load_and_build(
    source: ScreenSource,
    *,
    settings: Optional[AppSettings] = None,
) -> FlowGraphView:
    """Fetch every screen from ``source`` and build its flow graph."""
    screens = await source.fetch_all_screens()
    return await build_graph(screens, source, settings=settings)


def _dangling_references(directory: ScreenDirectory, edges: Iterable[GraphEdge]) -> list[BuildWarning]:
    warnings: list[BuildWarning] = []
    for edge in edges:
        if edge.target in directory:
            continue
        logger.warning(
            "Screen %r has a %s transition to unknown screen %r",
            edge.source,
            edge.kind.value,
            edge.target,
        )
        warnings.append(
            BuildWarning(
                WarningKind.DANGLING_REFERENCE,
                edge.source,
                f"{edge.kind.value} transition to unknown screen {edge.target!r}",
            )
        )
    return warnings
