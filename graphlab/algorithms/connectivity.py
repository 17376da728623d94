"""Connectivity checks over a :class:`~graphlab.graph.model.GraphView`."""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, Set

from graphlab.graph.model import GraphView, VertexId
from graphlab.graph.query import QueryService


def reachable_from(start: VertexId, adjacency: Dict[VertexId, Set[VertexId]]) -> Set[VertexId]:
    """Return every vertex reachable from ``start`` using an explicit stack."""

    visited: Set[VertexId] = set()
    stack = [start]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        stack.extend(neighbor for neighbor in adjacency.get(current, ()) if neighbor not in visited)
    return visited


def is_reachable(graph: GraphView, source: VertexId, target: VertexId) -> bool:
    """Breadth-first reachability respecting edge direction."""

    if source == target:
        return True
    adjacency = QueryService(graph).adjacency()
    visited = {source}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, ()):
            if neighbor == target:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return False


def is_weakly_connected(graph: GraphView) -> bool:
    """Return ``True`` if the graph is connected when edges are undirected.

    Empty and single-vertex graphs are trivially connected.
    """

    vertices = list(graph.vertices())
    if len(vertices) <= 1:
        return True
    adjacency = QueryService(graph).undirected_adjacency()
    return len(reachable_from(vertices[0], adjacency)) == len(vertices)


def is_strongly_connected(graph: GraphView) -> bool:
    """Kosaraju style check: forward and reverse reachability from one vertex.

    For undirected graphs this is the same as :func:`is_weakly_connected`.
    """

    vertices = list(graph.vertices())
    if len(vertices) <= 1:
        return True
    if not graph.graph_type().is_directed:
        return is_weakly_connected(graph)

    query = QueryService(graph)
    start = vertices[0]
    if len(reachable_from(start, query.adjacency())) != len(vertices):
        return False
    return len(reachable_from(start, query.reverse_adjacency())) == len(vertices)


def is_connected(graph: GraphView) -> bool:
    """Strong connectivity for directed graphs, plain connectivity otherwise."""

    if graph.graph_type().is_directed:
        return is_strongly_connected(graph)
    return is_weakly_connected(graph)


def is_connected_ignoring_isolated(graph: GraphView, *, weak: bool = False) -> bool:
    """Connectivity restricted to vertices that have at least one incident edge.

    Directed graphs require every such vertex to reach every other one;
    reachability from a single vertex is not enough because it is not
    symmetric. With ``weak=True`` edge direction is ignored.
    """

    vertices = list(graph.vertices())
    if len(vertices) <= 1:
        return True
    query = QueryService(graph)
    touched = query.vertices_with_edges()
    if not touched:
        return False
    if len(touched) == 1:
        return True

    start = next(vertex for vertex in vertices if vertex in touched)
    if graph.graph_type().is_directed and not weak:
        # every touched vertex reaches ``start`` and is reached from it
        return _covers(reachable_from(start, query.adjacency()), touched) and _covers(
            reachable_from(start, query.reverse_adjacency()), touched
        )
    return _covers(reachable_from(start, query.undirected_adjacency()), touched)


def _covers(visited: Iterable[VertexId], required: Set[VertexId]) -> bool:
    return required.issubset(visited)


__all__ = [
    "is_connected",
    "is_connected_ignoring_isolated",
    "is_reachable",
    "is_strongly_connected",
    "is_weakly_connected",
    "reachable_from",
]
