"""All-pairs shortest path solvers: Floyd-Warshall and Johnson."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from graphlab.errors import ErrorKind, GraphError
from graphlab.graph.ids import new_token
from graphlab.graph.model import Edge, GraphType, GraphView, StaticGraph, VertexId
from graphlab.graph.query import QueryService

from .shortest_path import INFINITY, bellman_ford_distances, dijkstra_distances
from .shortest_path import reconstruct_path as _walk_predecessors

LOGGER = logging.getLogger(__name__)

DistanceMatrix = Dict[VertexId, Dict[VertexId, float]]
PredecessorMatrix = Dict[VertexId, Dict[VertexId, Optional[VertexId]]]


class AllPairsAlgorithm(str, Enum):
    FLOYD_WARSHALL = "floyd-warshall"
    JOHNSON = "johnson"


@dataclass
class AllPairsResult:
    """Distance and predecessor matrices keyed ``[source][target]``."""

    distances: DistanceMatrix
    predecessors: PredecessorMatrix
    algorithm: AllPairsAlgorithm

    def distance(self, source: VertexId, target: VertexId) -> float:
        return self.distances[source][target]

    def path(self, source: VertexId, target: VertexId) -> List[VertexId]:
        return reconstruct_path(self.predecessors, source, target)

    def to_payload(self) -> dict:
        return {
            "algorithm": self.algorithm.value,
            "distances": {source: dict(row) for source, row in self.distances.items()},
            "predecessors": {source: dict(row) for source, row in self.predecessors.items()},
        }


def reconstruct_path(predecessors: PredecessorMatrix, source: VertexId, target: VertexId) -> List[VertexId]:
    """Rebuild the ``source`` → ``target`` path from a predecessor matrix.

    Returns an empty list for unknown sources, unreachable targets or
    predecessor chains that do not terminate.
    """

    row = predecessors.get(source)
    if row is None or target not in row:
        return []
    return _walk_predecessors(row, source, target, limit=len(predecessors) + 1)


def _validate(graph: GraphView) -> GraphError | None:
    if len(graph.vertices()) < 2:
        return GraphError(
            ErrorKind.VALIDATION,
            "All-pairs shortest path computation requires at least 2 vertices",
        )
    return None


def _negative_cycle() -> GraphError:
    return GraphError(ErrorKind.NEGATIVE_CYCLE, "Graph contains a negative-weight cycle")


def floyd_warshall(graph: GraphView, use_weights: bool = True) -> AllPairsResult | GraphError:
    """Classic ``O(V³)`` dynamic programme over intermediate vertices."""

    error = _validate(graph)
    if error is not None:
        return error

    vertices = list(graph.vertices())
    distances: DistanceMatrix = {
        i: {j: (0.0 if i == j else INFINITY) for j in vertices} for i in vertices
    }
    predecessors: PredecessorMatrix = {i: {j: None for j in vertices} for i in vertices}

    # parallel edges keep the cheapest weight; a negative self-loop seeds
    # a negative diagonal entry
    for source, items in QueryService(graph).incidence(use_weights=use_weights).items():
        for target, _, weight in items:
            if weight < distances[source][target]:
                distances[source][target] = weight
                predecessors[source][target] = source

    for k in vertices:
        row_k = distances[k]
        for i in vertices:
            row_i = distances[i]
            through = row_i[k]
            if through == INFINITY:
                continue
            for j in vertices:
                if row_k[j] == INFINITY:
                    continue
                candidate = through + row_k[j]
                if candidate < row_i[j]:
                    row_i[j] = candidate
                    predecessors[i][j] = predecessors[k][j]

    if any(distances[vertex][vertex] < 0 for vertex in vertices):
        return _negative_cycle()
    for vertex in vertices:
        predecessors[vertex][vertex] = None

    return AllPairsResult(distances, predecessors, AllPairsAlgorithm.FLOYD_WARSHALL)


def johnson(graph: GraphView, use_weights: bool = True) -> AllPairsResult | GraphError:
    """Reweight with Bellman-Ford potentials, then run Dijkstra per source."""

    error = _validate(graph)
    if error is not None:
        return error

    vertices = list(graph.vertices())
    directed_edges = _as_directed_edges(graph, use_weights)

    anchor = new_token("johnson_source")
    extended = StaticGraph(
        vertex_ids=tuple(vertices) + (anchor,),
        edge_list=tuple(directed_edges)
        + tuple(Edge(id=f"{anchor}-{vertex}", source=anchor, target=vertex, weight=0.0) for vertex in vertices),
        type=GraphType.DIRECTED,
    )
    outcome = bellman_ford_distances(extended, anchor)
    if isinstance(outcome, GraphError):
        LOGGER.debug("Johnson aborted: %s", outcome.message)
        return _negative_cycle()
    potentials, _ = outcome

    reweighted = StaticGraph(
        vertex_ids=tuple(vertices),
        edge_list=tuple(
            edge.with_weight(max(0.0, edge.weight + potentials[edge.source] - potentials[edge.target]))
            for edge in directed_edges
        ),
        type=GraphType.DIRECTED,
    )

    distances: DistanceMatrix = {}
    predecessors: PredecessorMatrix = {}
    for source in vertices:
        reduced, parents = dijkstra_distances(reweighted, source)
        distances[source] = {
            target: (
                reduced[target] - potentials[source] + potentials[target]
                if reduced[target] != INFINITY
                else INFINITY
            )
            for target in vertices
        }
        predecessors[source] = parents

    return AllPairsResult(distances, predecessors, AllPairsAlgorithm.JOHNSON)


def _as_directed_edges(graph: GraphView, use_weights: bool) -> List[Edge]:
    """Return the edge set as directed records, mirroring undirected edges."""

    records: List[Edge] = []
    for source, items in QueryService(graph).incidence(use_weights=use_weights).items():
        for index, (target, edge_id, weight) in enumerate(items):
            records.append(Edge(id=f"{edge_id}@{source}#{index}", source=source, target=target, weight=weight))
    return records


def compute_all_pairs(
    graph: GraphView,
    algorithm: AllPairsAlgorithm = AllPairsAlgorithm.FLOYD_WARSHALL,
    use_weights: bool = True,
) -> AllPairsResult | GraphError:
    """Dispatch to the solver selected by ``algorithm``."""

    if algorithm is AllPairsAlgorithm.FLOYD_WARSHALL:
        return floyd_warshall(graph, use_weights)
    if algorithm is AllPairsAlgorithm.JOHNSON:
        return johnson(graph, use_weights)
    raise AssertionError(f"Unhandled all-pairs algorithm: {algorithm!r}")


__all__ = [
    "AllPairsAlgorithm",
    "AllPairsResult",
    "compute_all_pairs",
    "floyd_warshall",
    "johnson",
    "reconstruct_path",
]
