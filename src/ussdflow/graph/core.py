from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence

import numpy as np
import graphblas as gb
from graphblas import Matrix, Vector

from .elements import EdgeKind, GraphEdge


class FlowGraph:
    """
    Screen-flow graph backed by python-graphblas.

    Structure:
      - Vertices are 0..num_vertices-1, in screen directory order.
      - Layers: boolean adjacency Matrix per EdgeKind (directed).
          rows = source screens, cols = target screens.
      - Edges whose target is not a known screen (dangling references)
        are not entered in any layer.

    The default layer drives layout: root detection and successor
    lookup only ever look at default transitions.
    """

    __slots__ = (
        "_layers",
        "_names",
        "_index",
        "num_vertices",
    )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(self, names: Sequence[str], layers: Mapping[EdgeKind, Matrix]) -> None:
        self._names: tuple[str, ...] = tuple(names)
        self._index: Dict[str, int] = {name: i for i, name in enumerate(self._names)}
        if len(self._index) != len(self._names):
            raise ValueError("Vertex names must be unique")
        self.num_vertices = len(self._names)

        self._layers: Dict[EdgeKind, Matrix] = {}
        for kind in EdgeKind:
            mat = layers.get(kind)
            if mat is None:
                mat = Matrix(gb.dtypes.BOOL, nrows=self.num_vertices, ncols=self.num_vertices)
            elif mat.nrows != self.num_vertices or mat.ncols != self.num_vertices:
                raise ValueError(
                    f"Layer {kind.value!r} has shape ({mat.nrows}, {mat.ncols}), "
                    f"expected ({self.num_vertices}, {self.num_vertices})"
                )
            self._layers[kind] = mat

    @classmethod
    def from_edges(cls, names: Sequence[str], edges: Iterable[GraphEdge]) -> FlowGraph:
        """
        Build a FlowGraph from derived edges.

        names: vertex names in directory order.
        edges: GraphEdge sequence; edges with an unknown source or target
               are skipped (they still exist in the rendered edge list).
        """
        index = {name: i for i, name in enumerate(names)}
        n = len(index)

        coords: Dict[EdgeKind, tuple[list[int], list[int]]] = {k: ([], []) for k in EdgeKind}
        for edge in edges:
            src = index.get(edge.source)
            dst = index.get(edge.target)
            if src is None or dst is None:
                continue
            rows, cols = coords[edge.kind]
            rows.append(src)
            cols.append(dst)

        layers: Dict[EdgeKind, Matrix] = {}
        for kind, (rows, cols) in coords.items():
            if not rows:
                continue
            layers[kind] = Matrix.from_coo(
                np.asarray(rows, dtype=np.int64),
                np.asarray(cols, dtype=np.int64),
                np.ones(len(rows), dtype=bool),
                nrows=n,
                ncols=n,
                dup_op=gb.binary.lor,
            )
        return cls(names, layers)

    # ------------------------------------------------------------------ #
    # Vertex naming
    # ------------------------------------------------------------------ #
    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def index_of(self, name: str) -> Optional[int]:
        """Vertex index of a screen name, or None for unknown names."""
        return self._index.get(name)

    def name_of(self, vertex_index: int) -> str:
        return self._names[vertex_index]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    # ------------------------------------------------------------------ #
    # Structural accessors
    # ------------------------------------------------------------------ #
    def get_matrix(self, kind: EdgeKind) -> Matrix:
        """Return the adjacency matrix for an edge kind."""
        return self._layers[kind]

    def get_out_edges(self, kind: EdgeKind, vertex_index: int) -> Vector:
        """Outgoing edges of vertex_index as a Vector (indices: target vertices)."""
        return self._layers[kind][vertex_index, :].new()

    def get_in_edges(self, kind: EdgeKind, vertex_index: int) -> Vector:
        """Incoming edges of vertex_index as a Vector (indices: source vertices)."""
        return self._layers[kind][:, vertex_index].new()

    def successors(self, kind: EdgeKind, name: str) -> list[str]:
        """Names of the known screens ``name`` transitions to via ``kind`` edges."""
        i = self._index.get(name)
        if i is None:
            return []
        indices, _ = self.get_out_edges(kind, i).to_coo()
        return [self._names[int(j)] for j in indices]

    def targeted(self, kind: EdgeKind = EdgeKind.DEFAULT) -> set[str]:
        """
        Names of screens that some *other* screen points at via ``kind`` edges.

        Self-loops are excluded by selecting the off-diagonal part first,
        then OR-reducing each column.
        """
        if self.num_vertices == 0:
            return set()
        offdiag = self._layers[kind].select(gb.select.offdiag).new()
        has_source = offdiag.reduce_columnwise(gb.monoid.lor).new()
        indices, _ = has_source.to_coo()
        return {self._names[int(j)] for j in indices}

    def roots(self) -> list[str]:
        """Screens no other screen names as its default transition, in vertex order."""
        targeted = self.targeted(EdgeKind.DEFAULT)
        return [name for name in self._names if name not in targeted]

    def num_edges(self, kind: Optional[EdgeKind] = None) -> int:
        if kind is not None:
            return int(self._layers[kind].nvals)
        return sum(int(m.nvals) for m in self._layers.values())

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    def __repr__(self) -> str:
        layers_str = ", ".join(f"{k.value}={int(m.nvals)}" for k, m in self._layers.items())
        return f"FlowGraph(num_vertices={self.num_vertices}, layers=[{layers_str}])"
