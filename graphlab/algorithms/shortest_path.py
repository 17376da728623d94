"""Single-source shortest path solvers: Dijkstra and Bellman-Ford."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from graphlab.errors import ErrorKind, GraphError
from graphlab.graph.model import GraphView, VertexId
from graphlab.graph.query import QueryService
from graphlab.structures.priority_queue import PriorityQueue

from .connectivity import is_reachable

LOGGER = logging.getLogger(__name__)

INFINITY = math.inf

Distances = Dict[VertexId, float]
Predecessors = Dict[VertexId, Optional[VertexId]]


class ShortestPathAlgorithm(str, Enum):
    DIJKSTRA = "dijkstra"
    BELLMAN_FORD = "bellman-ford"


@dataclass
class ShortestPathResult:
    """Outcome of a successful single-pair computation."""

    distances: Distances
    predecessors: Predecessors
    path: List[VertexId]
    total_distance: float
    algorithm: ShortestPathAlgorithm
    extras: dict = field(default_factory=dict)

    def to_payload(self) -> dict:
        return {
            "algorithm": self.algorithm.value,
            "path": list(self.path),
            "total_distance": self.total_distance,
            "distances": dict(self.distances),
            "predecessors": dict(self.predecessors),
        }


def reconstruct_path(
    predecessors: Predecessors, source: VertexId, target: VertexId, *, limit: int | None = None
) -> List[VertexId]:
    """Walk ``predecessors`` back from ``target``.

    Returns an empty list when the chain does not end at ``source`` within
    ``limit`` steps (defaults to ``len(predecessors) + 1``).
    """

    max_steps = limit if limit is not None else len(predecessors) + 1
    path: List[VertexId] = []
    current: Optional[VertexId] = target
    while current is not None:
        path.append(current)
        if current == source:
            break
        if len(path) > max_steps:
            return []
        current = predecessors.get(current)
    path.reverse()
    if not path or path[0] != source:
        return []
    return path


def dijkstra_distances(
    graph: GraphView,
    source: VertexId,
    *,
    use_weights: bool = True,
    target: VertexId | None = None,
) -> Tuple[Distances, Predecessors]:
    """Run Dijkstra from ``source`` without validation.

    Stops as soon as ``target`` leaves the frontier when one is given.
    Weights are assumed non-negative.
    """

    incidence = QueryService(graph).incidence(use_weights=use_weights)
    distances: Distances = {vertex: INFINITY for vertex in graph.vertices()}
    predecessors: Predecessors = {vertex: None for vertex in graph.vertices()}
    distances[source] = 0.0

    visited: set[VertexId] = set()
    frontier: PriorityQueue[Tuple[VertexId, float]] = PriorityQueue()
    frontier.enqueue((source, 0.0), 0.0)

    while frontier:
        vertex, distance = frontier.dequeue()
        if vertex in visited or distance > distances[vertex]:
            continue
        visited.add(vertex)
        if vertex == target:
            break
        for neighbor, _, weight in incidence.get(vertex, ()):
            if neighbor in visited:
                continue
            candidate = distance + weight
            if candidate < distances.get(neighbor, INFINITY):
                distances[neighbor] = candidate
                predecessors[neighbor] = vertex
                frontier.enqueue((neighbor, candidate), candidate)
    return distances, predecessors


def bellman_ford_distances(
    graph: GraphView, source: VertexId, *, use_weights: bool = True
) -> Tuple[Distances, Predecessors] | GraphError:
    """Run Bellman-Ford from ``source`` without validation.

    Undirected edges are relaxed in both directions. Returns a
    ``NEGATIVE_CYCLE`` error when one is reachable from ``source``.
    """

    relaxations: List[Tuple[VertexId, VertexId, float]] = []
    for vertex, items in QueryService(graph).incidence(use_weights=use_weights).items():
        relaxations.extend((vertex, neighbor, weight) for neighbor, _, weight in items)

    vertices = list(graph.vertices())
    distances: Distances = {vertex: INFINITY for vertex in vertices}
    predecessors: Predecessors = {vertex: None for vertex in vertices}
    distances[source] = 0.0

    for _ in range(len(vertices) - 1):
        updated = False
        for u, v, weight in relaxations:
            if distances[u] != INFINITY and distances[u] + weight < distances[v]:
                distances[v] = distances[u] + weight
                predecessors[v] = u
                updated = True
        if not updated:
            break

    for u, v, weight in relaxations:
        if distances[u] != INFINITY and distances[u] + weight < distances[v]:
            return GraphError(
                ErrorKind.NEGATIVE_CYCLE,
                "Graph contains a negative-weight cycle reachable from the source",
            )
    return distances, predecessors


def _validate(graph: GraphView, source: VertexId, target: VertexId) -> GraphError | None:
    vertices = set(graph.vertices())
    if len(vertices) < 2:
        return GraphError(
            ErrorKind.INSUFFICIENT_VERTICES,
            "Shortest path computation requires at least 2 vertices",
        )
    if source not in vertices:
        return GraphError(ErrorKind.UNKNOWN_VERTEX, f'Source vertex "{source}" does not exist in the graph')
    if target not in vertices:
        return GraphError(ErrorKind.UNKNOWN_VERTEX, f'Target vertex "{target}" does not exist in the graph')
    return None


def _trivial(source: VertexId, algorithm: ShortestPathAlgorithm) -> ShortestPathResult:
    return ShortestPathResult(
        distances={source: 0.0},
        predecessors={source: None},
        path=[source],
        total_distance=0.0,
        algorithm=algorithm,
    )


def _unreachable(source: VertexId, target: VertexId) -> GraphError:
    return GraphError(
        ErrorKind.UNREACHABLE,
        f'Target vertex "{target}" is not reachable from source vertex "{source}"',
    )


def dijkstra(
    graph: GraphView, source: VertexId, target: VertexId, use_weights: bool = True
) -> ShortestPathResult | GraphError:
    """Shortest ``source`` → ``target`` path with Dijkstra's algorithm."""

    error = _validate(graph, source, target)
    if error is None and any(edge.weight is not None and edge.weight < 0 for edge in graph.edges()):
        error = GraphError(
            ErrorKind.NEGATIVE_WEIGHTS_UNSUPPORTED,
            "Dijkstra algorithm cannot handle negative edge weights. Use Bellman-Ford instead.",
        )
    if error is not None:
        LOGGER.debug("Dijkstra rejected: %s", error.message)
        return error
    if source == target:
        return _trivial(source, ShortestPathAlgorithm.DIJKSTRA)
    if not is_reachable(graph, source, target):
        return _unreachable(source, target)

    distances, predecessors = dijkstra_distances(graph, source, use_weights=use_weights, target=target)
    return ShortestPathResult(
        distances=distances,
        predecessors=predecessors,
        path=reconstruct_path(predecessors, source, target),
        total_distance=distances[target],
        algorithm=ShortestPathAlgorithm.DIJKSTRA,
    )


def bellman_ford(
    graph: GraphView, source: VertexId, target: VertexId, use_weights: bool = True
) -> ShortestPathResult | GraphError:
    """Shortest ``source`` → ``target`` path tolerating negative weights."""

    error = _validate(graph, source, target)
    if error is not None:
        LOGGER.debug("Bellman-Ford rejected: %s", error.message)
        return error
    if source == target:
        return _trivial(source, ShortestPathAlgorithm.BELLMAN_FORD)
    if not is_reachable(graph, source, target):
        return _unreachable(source, target)

    outcome = bellman_ford_distances(graph, source, use_weights=use_weights)
    if isinstance(outcome, GraphError):
        return outcome
    distances, predecessors = outcome
    return ShortestPathResult(
        distances=distances,
        predecessors=predecessors,
        path=reconstruct_path(predecessors, source, target),
        total_distance=distances[target],
        algorithm=ShortestPathAlgorithm.BELLMAN_FORD,
    )


def compute_shortest_path(
    graph: GraphView,
    source: VertexId,
    target: VertexId,
    algorithm: ShortestPathAlgorithm = ShortestPathAlgorithm.DIJKSTRA,
    use_weights: bool = True,
) -> ShortestPathResult | GraphError:
    """Dispatch to the solver selected by ``algorithm``."""

    if algorithm is ShortestPathAlgorithm.DIJKSTRA:
        return dijkstra(graph, source, target, use_weights)
    if algorithm is ShortestPathAlgorithm.BELLMAN_FORD:
        return bellman_ford(graph, source, target, use_weights)
    raise AssertionError(f"Unhandled shortest path algorithm: {algorithm!r}")


__all__ = [
    "ShortestPathAlgorithm",
    "ShortestPathResult",
    "bellman_ford",
    "bellman_ford_distances",
    "compute_shortest_path",
    "dijkstra",
    "dijkstra_distances",
    "reconstruct_path",
]
