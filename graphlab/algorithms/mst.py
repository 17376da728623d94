"""Minimum spanning tree solvers: Kruskal and Prim."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional

from graphlab.errors import ErrorKind, GraphError
from graphlab.graph.model import Edge, EdgeId, GraphView, VertexId
from graphlab.graph.query import QueryService
from graphlab.structures.disjoint_set import DisjointSet
from graphlab.structures.priority_queue import PriorityQueue

from .connectivity import is_weakly_connected

LOGGER = logging.getLogger(__name__)


class MSTAlgorithm(str, Enum):
    KRUSKAL = "kruskal"
    PRIM = "prim"


@dataclass
class MSTResult:
    edges: List[Edge]
    total_weight: float
    algorithm: MSTAlgorithm

    def to_payload(self) -> dict:
        return {
            "algorithm": self.algorithm.value,
            "total_weight": self.total_weight,
            "edges": [edge.to_payload() for edge in self.edges],
        }


class _FrontierEdge(NamedTuple):
    vertex: VertexId
    weight: float
    edge_id: EdgeId
    origin: VertexId


def _has_weight(edge: Edge) -> bool:
    return edge.weight is not None and not math.isnan(edge.weight)


def _validate(graph: GraphView) -> GraphError | None:
    if graph.graph_type().is_directed:
        return GraphError(
            ErrorKind.DIRECTED_GRAPH_UNSUPPORTED,
            "MST can only be computed for undirected graphs",
        )
    if len(graph.vertices()) < 2:
        return GraphError(ErrorKind.INSUFFICIENT_VERTICES, "MST requires at least 2 vertices")
    if not all(_has_weight(edge) for edge in graph.edges()):
        return GraphError(ErrorKind.MISSING_WEIGHTS, "MST requires all edges to have weights")
    if not is_weakly_connected(graph):
        return GraphError(ErrorKind.NOT_CONNECTED, "Graph must be connected to compute MST")
    return None


def kruskal_mst(graph: GraphView) -> MSTResult | GraphError:
    """Kruskal's algorithm, ``O(E log E)``."""

    error = _validate(graph)
    if error is not None:
        LOGGER.debug("Kruskal rejected: %s", error.message)
        return error

    vertices = list(graph.vertices())
    components: DisjointSet[VertexId] = DisjointSet(vertices)
    accepted: List[Edge] = []
    total = 0.0
    for edge in sorted(graph.edges(), key=lambda item: item.weight):
        if components.union(edge.source, edge.target):
            accepted.append(edge)
            total += edge.weight
            if len(accepted) == len(vertices) - 1:
                break
    return MSTResult(accepted, total, MSTAlgorithm.KRUSKAL)


def prim_mst(graph: GraphView, start_vertex: Optional[VertexId] = None) -> MSTResult | GraphError:
    """Prim's algorithm growing the tree from ``start_vertex``, ``O(E log V)``."""

    error = _validate(graph)
    if error is not None:
        LOGGER.debug("Prim rejected: %s", error.message)
        return error

    vertices = list(graph.vertices())
    if start_vertex is None:
        start_vertex = vertices[0]
    elif start_vertex not in vertices:
        return GraphError(ErrorKind.UNKNOWN_VERTEX, f"Starting vertex '{start_vertex}' not found in graph")

    incidence = QueryService(graph).incidence()
    visited = {start_vertex}
    frontier: PriorityQueue[_FrontierEdge] = PriorityQueue()

    def expand(origin: VertexId) -> None:
        for neighbor, edge_id, weight in incidence.get(origin, ()):
            if neighbor not in visited:
                frontier.enqueue(_FrontierEdge(neighbor, weight, edge_id, origin), weight)

    expand(start_vertex)
    accepted: List[Edge] = []
    total = 0.0
    while frontier and len(accepted) < len(vertices) - 1:
        candidate = frontier.dequeue()
        if candidate.vertex in visited:
            continue
        visited.add(candidate.vertex)
        accepted.append(
            Edge(id=candidate.edge_id, source=candidate.origin, target=candidate.vertex, weight=candidate.weight)
        )
        total += candidate.weight
        expand(candidate.vertex)
    return MSTResult(accepted, total, MSTAlgorithm.PRIM)


def compute_mst(
    graph: GraphView,
    algorithm: MSTAlgorithm = MSTAlgorithm.KRUSKAL,
    start_vertex: Optional[VertexId] = None,
) -> MSTResult | GraphError:
    """Dispatch to the solver selected by ``algorithm``."""

    if algorithm is MSTAlgorithm.KRUSKAL:
        return kruskal_mst(graph)
    if algorithm is MSTAlgorithm.PRIM:
        return prim_mst(graph, start_vertex)
    raise AssertionError(f"Unhandled MST algorithm: {algorithm!r}")


__all__ = ["MSTAlgorithm", "MSTResult", "compute_mst", "kruskal_mst", "prim_mst"]
