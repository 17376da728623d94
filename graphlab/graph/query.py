"""Query helpers building adjacency structures from a graph view."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Set

from .model import EdgeId, GraphView, VertexId


class Incidence(NamedTuple):
    """Neighbour reached through a specific edge."""

    vertex: VertexId
    edge_id: EdgeId
    weight: float


@dataclass
class QueryService:
    """Provide structured access patterns on top of a :class:`GraphView`.

    Undirected edges are mirrored in every adjacency structure; directed
    edges only appear in their source's list.
    """

    view: GraphView

    @property
    def directed(self) -> bool:
        return self.view.graph_type().is_directed

    def adjacency(self) -> Dict[VertexId, Set[VertexId]]:
        """Return the set of neighbours reachable in one step from each vertex."""

        adjacency: Dict[VertexId, Set[VertexId]] = {vertex: set() for vertex in self.view.vertices()}
        for edge in self.view.edges():
            adjacency.setdefault(edge.source, set()).add(edge.target)
            if not self.directed:
                adjacency.setdefault(edge.target, set()).add(edge.source)
        return adjacency

    def undirected_adjacency(self, *, skip_self_loops: bool = False) -> Dict[VertexId, Set[VertexId]]:
        """Return neighbour sets treating every edge as bidirectional."""

        adjacency: Dict[VertexId, Set[VertexId]] = {vertex: set() for vertex in self.view.vertices()}
        for edge in self.view.edges():
            if skip_self_loops and edge.is_self_loop:
                continue
            adjacency.setdefault(edge.source, set()).add(edge.target)
            adjacency.setdefault(edge.target, set()).add(edge.source)
        return adjacency

    def reverse_adjacency(self) -> Dict[VertexId, Set[VertexId]]:
        """Return neighbour sets over the edge-reversed graph."""

        adjacency: Dict[VertexId, Set[VertexId]] = {vertex: set() for vertex in self.view.vertices()}
        for edge in self.view.edges():
            adjacency.setdefault(edge.target, set()).add(edge.source)
            if not self.directed:
                adjacency.setdefault(edge.source, set()).add(edge.target)
        return adjacency

    def incidence(self, *, use_weights: bool = True) -> Dict[VertexId, List[Incidence]]:
        """Return per-vertex lists of outgoing edges, parallel edges included.

        With ``use_weights=False`` every edge is reported with weight 1, as
        is any edge that carries no weight.
        """

        incidence: Dict[VertexId, List[Incidence]] = {vertex: [] for vertex in self.view.vertices()}
        for edge in self.view.edges():
            weight = edge.weight if use_weights and edge.weight is not None else 1.0
            incidence.setdefault(edge.source, []).append(Incidence(edge.target, edge.id, weight))
            if not self.directed:
                incidence.setdefault(edge.target, []).append(Incidence(edge.source, edge.id, weight))
        return incidence

    def degrees(self) -> Dict[VertexId, int]:
        """Return edge-end counts per vertex.

        A self-loop contributes two ends in both modes. For directed graphs
        this is in-degree plus out-degree.
        """

        degrees: Dict[VertexId, int] = {vertex: 0 for vertex in self.view.vertices()}
        for edge in self.view.edges():
            degrees[edge.source] = degrees.get(edge.source, 0) + 1
            degrees[edge.target] = degrees.get(edge.target, 0) + 1
        return degrees

    def directed_degrees(self) -> tuple[Dict[VertexId, int], Dict[VertexId, int]]:
        """Return ``(in_degrees, out_degrees)``."""

        in_degrees: Dict[VertexId, int] = {vertex: 0 for vertex in self.view.vertices()}
        out_degrees: Dict[VertexId, int] = dict(in_degrees)
        for edge in self.view.edges():
            out_degrees[edge.source] = out_degrees.get(edge.source, 0) + 1
            in_degrees[edge.target] = in_degrees.get(edge.target, 0) + 1
        return in_degrees, out_degrees

    def neighbor_degrees(self) -> Dict[VertexId, int]:
        """Return the number of distinct neighbours, ignoring self-loops."""

        return {
            vertex: len(neighbors - {vertex})
            for vertex, neighbors in self.undirected_adjacency(skip_self_loops=True).items()
        }

    def vertices_with_edges(self) -> Set[VertexId]:
        touched: Set[VertexId] = set()
        for edge in self.view.edges():
            touched.add(edge.source)
            touched.add(edge.target)
        return touched


def separate_by_parity(degrees: Dict[VertexId, int]) -> tuple[List[VertexId], List[VertexId]]:
    """Split vertices into ``(odd_degree, even_degree)`` lists preserving order."""

    odd: List[VertexId] = []
    even: List[VertexId] = []
    for vertex, degree in degrees.items():
        (odd if degree % 2 else even).append(vertex)
    return odd, even


__all__ = ["Incidence", "QueryService", "separate_by_parity"]
