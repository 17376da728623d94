"""Core value types describing graphs consumed by the algorithm library."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Protocol, Sequence

VertexId = str
EdgeId = str


class GraphType(str, Enum):
    """Directionality mode of a graph."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @property
    def is_directed(self) -> bool:
        return self is GraphType.DIRECTED


@dataclass(frozen=True)
class Edge:
    """A single weighted edge record.

    ``weight`` is ``None`` only for synthetic graphs that deliberately omit
    weights; the :class:`~graphlab.graph.store.GraphStore` always stores a
    number.
    """

    id: EdgeId
    source: VertexId
    target: VertexId
    weight: float | None = 1.0

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def with_weight(self, weight: float | None) -> "Edge":
        return replace(self, weight=weight)

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }


class GraphView(Protocol):
    """Read-only capability every algorithm consumes."""

    def vertices(self) -> Sequence[VertexId]:
        """Return vertex identifiers in insertion order."""

    def edges(self) -> Sequence[Edge]:
        """Return edge records in insertion order."""

    def graph_type(self) -> GraphType:
        """Return the directionality mode."""


@dataclass(frozen=True)
class StaticGraph:
    """Immutable in-memory :class:`GraphView` used for synthetic graphs."""

    vertex_ids: tuple[VertexId, ...] = ()
    edge_list: tuple[Edge, ...] = ()
    type: GraphType = GraphType.UNDIRECTED

    def vertices(self) -> Sequence[VertexId]:
        return self.vertex_ids

    def edges(self) -> Sequence[Edge]:
        return self.edge_list

    def graph_type(self) -> GraphType:
        return self.type

    @classmethod
    def from_view(cls, view: GraphView) -> "StaticGraph":
        """Freeze the current contents of ``view``."""

        return cls(tuple(view.vertices()), tuple(view.edges()), view.graph_type())

    @classmethod
    def build(
        cls,
        vertices: Iterable[VertexId],
        edges: Iterable[tuple],
        *,
        directed: bool = False,
    ) -> "StaticGraph":
        """Build a graph from ``(source, target[, weight])`` tuples.

        Edge identifiers are derived from the tuple position so parallel
        edges stay distinct.
        """

        records = []
        for index, item in enumerate(edges):
            source, target = item[0], item[1]
            weight = item[2] if len(item) > 2 else 1.0
            records.append(Edge(id=f"e{index}", source=source, target=target, weight=weight))
        graph_type = GraphType.DIRECTED if directed else GraphType.UNDIRECTED
        return cls(tuple(vertices), tuple(records), graph_type)

    def with_edges(self, extra: Iterable[Edge]) -> "StaticGraph":
        """Return a copy with ``extra`` edges appended."""

        return replace(self, edge_list=self.edge_list + tuple(extra))


__all__ = [
    "Edge",
    "EdgeId",
    "GraphType",
    "GraphView",
    "StaticGraph",
    "VertexId",
]
