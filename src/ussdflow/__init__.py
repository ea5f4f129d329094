try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from .builder import build_graph, load_and_build
from .diagnostics import BuildWarning, ScreenTypeError, UssdFlowError, WarningKind
from .directory import InMemoryScreenSource, ScreenDirectory, ScreenSource
from .enrich import RelationEnricher
from .graph import EdgeKind, FlowGraphView, GraphEdge, GraphNode
from .screens import (
    MenuItem,
    MenuScreen,
    RouterOption,
    RouterScreen,
    Screen,
    ScreenType,
    make_screen,
    screen_from_dict,
)
from .sequencing import BuildSequencer

__all__ = [
    "__version__",
    "build_graph",
    "load_and_build",
    "BuildWarning",
    "ScreenTypeError",
    "UssdFlowError",
    "WarningKind",
    "InMemoryScreenSource",
    "ScreenDirectory",
    "ScreenSource",
    "RelationEnricher",
    "EdgeKind",
    "FlowGraphView",
    "GraphEdge",
    "GraphNode",
    "MenuItem",
    "MenuScreen",
    "RouterOption",
    "RouterScreen",
    "Screen",
    "ScreenType",
    "make_screen",
    "screen_from_dict",
    "BuildSequencer",
]
