"""Eulerian path and circuit discovery with Hierholzer's algorithm.

A graph has an Eulerian circuit when it is connected (isolated vertices
aside) and every vertex has even degree, and an open Eulerian path when
exactly two vertices have odd degree. Directed graphs use in-degree plus
out-degree as the vertex degree, and additionally need every vertex balanced
(in-degree equal to out-degree) apart from the two ends of an open path.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from graphlab.graph.ids import new_token
from graphlab.graph.model import Edge, EdgeId, GraphView, StaticGraph, VertexId
from graphlab.graph.query import QueryService, separate_by_parity

from .connectivity import is_connected_ignoring_isolated

LOGGER = logging.getLogger(__name__)


@dataclass
class EulerianAnalysis:
    odd_degree_vertices: List[VertexId]
    even_degree_vertices: List[VertexId]
    degrees: Dict[VertexId, int]
    is_connected: bool


@dataclass
class EulerianPathResult:
    has_path: bool
    has_cycle: bool
    path: List[VertexId] = field(default_factory=list)
    start_vertex: Optional[VertexId] = None
    end_vertex: Optional[VertexId] = None
    reason: Optional[str] = None
    odd_vertex_count: int = 0

    def to_payload(self) -> dict:
        return {
            "has_path": self.has_path,
            "has_cycle": self.has_cycle,
            "path": list(self.path),
            "start_vertex": self.start_vertex,
            "end_vertex": self.end_vertex,
            "reason": self.reason,
            "odd_vertex_count": self.odd_vertex_count,
        }


def analyze(graph: GraphView) -> EulerianAnalysis:
    """Return degree parity and connectivity facts used by :func:`find_path`."""

    degrees = QueryService(graph).degrees()
    odd, even = separate_by_parity(degrees)
    return EulerianAnalysis(
        odd_degree_vertices=odd,
        even_degree_vertices=even,
        degrees=degrees,
        is_connected=is_connected_ignoring_isolated(graph, weak=True),
    )


def find_path(graph: GraphView) -> EulerianPathResult:
    """Find an Eulerian circuit, or an open Eulerian path, if one exists."""

    vertices = list(graph.vertices())
    edges = list(graph.edges())

    if not vertices:
        return EulerianPathResult(
            has_path=True, has_cycle=True, reason="Empty graph has trivial Eulerian path"
        )
    if not edges:
        if len(vertices) == 1:
            return EulerianPathResult(
                has_path=True,
                has_cycle=True,
                path=[vertices[0]],
                start_vertex=vertices[0],
                end_vertex=vertices[0],
                reason="Single vertex is trivial Eulerian path",
            )
        return EulerianPathResult(
            has_path=False,
            has_cycle=False,
            reason="Graph with vertices but no edges cannot have Eulerian path",
        )

    analysis = analyze(graph)
    odd = analysis.odd_degree_vertices
    if not analysis.is_connected:
        return EulerianPathResult(
            has_path=False, has_cycle=False, reason="Graph is not connected", odd_vertex_count=len(odd)
        )

    if len(odd) not in (0, 2):
        return EulerianPathResult(
            has_path=False,
            has_cycle=False,
            reason=f"Graph has {len(odd)} vertices with odd degree. Need exactly 0 or 2 for Eulerian path.",
            odd_vertex_count=len(odd),
        )

    if graph.graph_type().is_directed and not _is_balanced(graph, odd):
        return _incomplete(len(odd))

    if len(odd) == 0:
        trail = _hierholzer(graph)
        path = trail[0] if trail is not None else []
        if not _covers_all_edges(trail, edges):
            return _incomplete(len(odd))
        return EulerianPathResult(
            has_path=True,
            has_cycle=True,
            path=path,
            start_vertex=path[0],
            end_vertex=path[-1],
        )

    path = _path_between_odd_vertices(graph, odd, edges)
    if path is None:
        return _incomplete(len(odd))
    return EulerianPathResult(
        has_path=True,
        has_cycle=False,
        path=path,
        start_vertex=path[0],
        end_vertex=path[-1],
        odd_vertex_count=2,
    )


def _incomplete(odd_count: int) -> EulerianPathResult:
    return EulerianPathResult(
        has_path=False,
        has_cycle=False,
        reason="Edge directions do not allow a single trail through every edge",
        odd_vertex_count=odd_count,
    )


def _is_balanced(graph: GraphView, odd: List[VertexId]) -> bool:
    """Check the in/out degree balance a directed trail needs."""

    in_degrees, out_degrees = QueryService(graph).directed_degrees()
    surplus = {vertex: out_degrees[vertex] - in_degrees[vertex] for vertex in in_degrees}
    expected = dict.fromkeys(surplus, 0)
    if len(odd) == 2:
        start, end = _orient_endpoints(graph, odd)
        expected[start], expected[end] = 1, -1
    return surplus == expected


def _covers_all_edges(trail: Optional[Tuple[List[VertexId], List[EdgeId]]], edges: List[Edge]) -> bool:
    return trail is not None and len(trail[1]) == len(edges)


def _hierholzer(graph: GraphView) -> Optional[Tuple[List[VertexId], List[EdgeId]]]:
    """Return a closed trail as ``(vertices, edge_ids)``.

    ``edge_ids[i]`` joins ``vertices[i]`` and ``vertices[i + 1]``. Only the
    component of the first edge-bearing vertex is walked.
    """

    incidence = QueryService(graph).incidence()
    start = next((vertex for vertex in graph.vertices() if incidence.get(vertex)), None)
    if start is None:
        return None

    cursor: Dict[VertexId, int] = {vertex: 0 for vertex in incidence}
    used: set[EdgeId] = set()
    stack: List[Tuple[VertexId, Optional[EdgeId]]] = [(start, None)]
    circuit_vertices: List[VertexId] = []
    circuit_edges: List[EdgeId] = []

    while stack:
        vertex, via = stack[-1]
        items = incidence.get(vertex, [])
        position = cursor.get(vertex, 0)
        while position < len(items) and items[position].edge_id in used:
            position += 1
        cursor[vertex] = position
        if position < len(items):
            neighbor, edge_id, _ = items[position]
            used.add(edge_id)
            stack.append((neighbor, edge_id))
        else:
            stack.pop()
            circuit_vertices.append(vertex)
            if via is not None:
                circuit_edges.append(via)

    circuit_vertices.reverse()
    circuit_edges.reverse()
    return circuit_vertices, circuit_edges


def _path_between_odd_vertices(
    graph: GraphView, odd: List[VertexId], edges: List[Edge]
) -> Optional[List[VertexId]]:
    """Close the two odd vertices with a synthetic edge, then cut the circuit there."""

    start, end = _orient_endpoints(graph, odd)
    synthetic = Edge(id=new_token("synthetic"), source=end, target=start, weight=1.0)
    augmented = StaticGraph.from_view(graph).with_edges([synthetic])

    trail = _hierholzer(augmented)
    if trail is None or len(trail[1]) != len(edges) + 1:
        return None
    circuit, edge_ids = trail
    try:
        position = edge_ids.index(synthetic.id)
    except ValueError:
        LOGGER.debug("Synthetic edge missing from circuit; returning it unsplit")
        return circuit

    # drop the closing vertex, then rotate so the walk begins right after
    # the synthetic edge and ends right before it
    ring = circuit[:-1]
    return ring[position + 1:] + ring[: position + 1]


def _orient_endpoints(graph: GraphView, odd: List[VertexId]) -> Tuple[VertexId, VertexId]:
    """Return ``(start, end)`` for the open path.

    For directed graphs the start is the vertex with surplus out-degree.
    """

    first, second = odd
    if graph.graph_type().is_directed:
        in_degrees, out_degrees = QueryService(graph).directed_degrees()
        if out_degrees[second] - in_degrees[second] > out_degrees[first] - in_degrees[first]:
            return second, first
    return first, second


__all__ = ["EulerianAnalysis", "EulerianPathResult", "analyze", "find_path"]
