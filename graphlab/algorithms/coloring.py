"""Greedy vertex coloring with the DSatur heuristic."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, NamedTuple, Set

from graphlab.graph.model import GraphView, VertexId
from graphlab.graph.query import QueryService


@dataclass
class ColoringResult:
    coloring: Dict[VertexId, int]
    num_colors: int
    color_classes: List[List[VertexId]]

    def to_payload(self) -> dict:
        return {
            "coloring": dict(self.coloring),
            "num_colors": self.num_colors,
            "color_classes": [list(group) for group in self.color_classes],
        }


class ColoringBounds(NamedTuple):
    lower_bound: int
    upper_bound: int


def color_graph(graph: GraphView) -> ColoringResult:
    """Color ``graph`` so that no edge joins two vertices of the same color.

    Edge direction is ignored and self-loops are skipped. The next vertex is
    the uncolored one with the highest saturation, then the highest degree
    (parallel edges included), then the smallest identifier.
    """

    vertices = list(graph.vertices())
    if not vertices:
        return ColoringResult(coloring={}, num_colors=0, color_classes=[])

    neighbors = QueryService(graph).undirected_adjacency(skip_self_loops=True)
    degrees = _loopless_degrees(graph, vertices)
    neighbor_colors: Dict[VertexId, Set[int]] = {vertex: set() for vertex in vertices}
    coloring: Dict[VertexId, int] = {}
    uncolored = set(vertices)

    while uncolored:
        selected = min(
            uncolored,
            key=lambda vertex: (-len(neighbor_colors[vertex]), -degrees[vertex], vertex),
        )
        color = _smallest_free_color(neighbor_colors[selected])
        coloring[selected] = color
        uncolored.discard(selected)
        for neighbor in neighbors[selected]:
            if neighbor in uncolored:
                neighbor_colors[neighbor].add(color)

    classes = _group_by_color(coloring)
    return ColoringResult(coloring=coloring, num_colors=len(classes), color_classes=classes)


def validate_coloring(graph: GraphView, coloring: Mapping[VertexId, int]) -> bool:
    """Return ``True`` if no non-loop edge joins two equally colored vertices.

    Vertices missing from ``coloring`` are unconstrained.
    """

    for edge in graph.edges():
        if edge.is_self_loop:
            continue
        source_color = coloring.get(edge.source)
        target_color = coloring.get(edge.target)
        if source_color is not None and source_color == target_color:
            return False
    return True


def coloring_bounds(graph: GraphView) -> ColoringBounds:
    """Return chromatic number bounds.

    The lower bound is the size of a greedily grown clique, the upper bound
    is the maximum degree plus one.
    """

    vertices = list(graph.vertices())
    if not vertices:
        return ColoringBounds(0, 0)

    neighbors = QueryService(graph).undirected_adjacency(skip_self_loops=True)
    largest = 1
    for vertex in vertices:
        clique = [vertex]
        for candidate in sorted(neighbors[vertex]):
            if all(candidate in neighbors[member] for member in clique):
                clique.append(candidate)
        largest = max(largest, len(clique))

    max_degree = max(_loopless_degrees(graph, vertices).values())
    return ColoringBounds(lower_bound=largest, upper_bound=max_degree + 1)


def _loopless_degrees(graph: GraphView, vertices: List[VertexId]) -> Dict[VertexId, int]:
    # parallel edges count once each, self-loops not at all
    degrees = {vertex: 0 for vertex in vertices}
    for edge in graph.edges():
        if edge.is_self_loop:
            continue
        degrees[edge.source] += 1
        degrees[edge.target] += 1
    return degrees


def _smallest_free_color(taken: Set[int]) -> int:
    color = 0
    while color in taken:
        color += 1
    return color


def _group_by_color(coloring: Mapping[VertexId, int]) -> List[List[VertexId]]:
    classes: Dict[int, List[VertexId]] = {}
    for vertex, color in coloring.items():
        classes.setdefault(color, []).append(vertex)
    return [sorted(classes[color]) for color in sorted(classes)]


__all__ = ["ColoringBounds", "ColoringResult", "color_graph", "coloring_bounds", "validate_coloring"]
