"""Hamiltonian path search by bounded backtracking.

The problem is NP-complete, so the exhaustive search only runs on graphs up
to a configurable number of vertices (``GRAPHLAB_HAMILTONIAN_MAX_VERTICES``).
Larger graphs get a negative result whose ``reason`` says the search was not
attempted.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from graphlab.config import hamiltonian_max_vertices
from graphlab.graph.model import GraphView, VertexId
from graphlab.graph.query import QueryService

from .connectivity import is_weakly_connected

LOGGER = logging.getLogger(__name__)

DIRAC_REASON = "Graph satisfies Dirac's theorem (every vertex degree ≥ n/2)"
ORE_REASON = "Graph satisfies Ore's theorem"


@dataclass
class SearchStats:
    nodes_explored: int = 0
    backtrack_count: int = 0
    max_depth: int = 0

    def to_payload(self) -> dict:
        return {
            "nodes_explored": self.nodes_explored,
            "backtrack_count": self.backtrack_count,
            "max_depth": self.max_depth,
        }


@dataclass
class HamiltonianAnalysis:
    vertex_count: int
    edge_count: int
    min_degree: int
    max_degree: int
    is_connected: bool
    degrees: Dict[VertexId, int]


@dataclass
class HamiltonianPathResult:
    has_path: bool
    has_cycle: bool
    path: List[VertexId] = field(default_factory=list)
    start_vertex: Optional[VertexId] = None
    end_vertex: Optional[VertexId] = None
    reason: Optional[str] = None
    search_stats: Optional[SearchStats] = None

    def to_payload(self) -> dict:
        return {
            "has_path": self.has_path,
            "has_cycle": self.has_cycle,
            "path": list(self.path),
            "start_vertex": self.start_vertex,
            "end_vertex": self.end_vertex,
            "reason": self.reason,
            "search_stats": self.search_stats.to_payload() if self.search_stats else None,
        }


def analyze(graph: GraphView) -> HamiltonianAnalysis:
    """Summarise degrees and connectivity.

    Degrees count distinct neighbours with edge direction ignored, which is
    the quantity the Dirac and Ore conditions are stated for.
    """

    degrees = QueryService(graph).neighbor_degrees()
    values = list(degrees.values())
    return HamiltonianAnalysis(
        vertex_count=len(degrees),
        edge_count=len(graph.edges()),
        min_degree=min(values, default=0),
        max_degree=max(values, default=0),
        is_connected=is_weakly_connected(graph),
        degrees=degrees,
    )


def find_path(graph: GraphView, max_vertices: Optional[int] = None) -> HamiltonianPathResult:
    """Search for a path visiting every vertex exactly once.

    ``max_vertices`` overrides the configured search ceiling.
    """

    vertices = list(graph.vertices())
    if not vertices:
        return HamiltonianPathResult(
            has_path=True, has_cycle=True, reason="Empty graph has trivial Hamiltonian path"
        )
    if len(vertices) == 1:
        return HamiltonianPathResult(
            has_path=True,
            has_cycle=True,
            path=[vertices[0]],
            start_vertex=vertices[0],
            end_vertex=vertices[0],
            reason="Single vertex is trivial Hamiltonian path",
        )

    analysis = analyze(graph)
    if analysis.edge_count == 0:
        return HamiltonianPathResult(has_path=False, has_cycle=False, reason="Graph has no edges")
    if not analysis.is_connected:
        return HamiltonianPathResult(has_path=False, has_cycle=False, reason="Graph is not connected")

    sufficient = _sufficient_condition(graph, analysis)
    limit = hamiltonian_max_vertices() if max_vertices is None else max_vertices
    if len(vertices) > limit:
        LOGGER.warning("Refusing Hamiltonian search on %d vertices (limit %d)", len(vertices), limit)
        reason = (
            f"Graph has {len(vertices)} vertices. Hamiltonian path search is limited to "
            f"{limit} vertices due to computational complexity."
        )
        if sufficient is not None:
            reason += f" {sufficient}, so a Hamiltonian cycle exists but was not constructed."
        return HamiltonianPathResult(has_path=False, has_cycle=False, reason=reason)

    result = _search(graph, vertices)
    if result.has_path and sufficient is not None:
        result.reason = sufficient
    return result


def _sufficient_condition(graph: GraphView, analysis: HamiltonianAnalysis) -> Optional[str]:
    """Return the Dirac or Ore reason when one holds, checked on undirected graphs."""

    n = analysis.vertex_count
    if graph.graph_type().is_directed or n < 3:
        return None
    if analysis.min_degree >= n / 2:
        return DIRAC_REASON
    if _satisfies_ore(graph, analysis):
        return ORE_REASON
    return None


def _satisfies_ore(graph: GraphView, analysis: HamiltonianAnalysis) -> bool:
    vertices = list(graph.vertices())
    n = len(vertices)
    neighbors = QueryService(graph).undirected_adjacency(skip_self_loops=True)
    degrees = analysis.degrees
    for index, u in enumerate(vertices):
        for v in vertices[index + 1:]:
            if v not in neighbors[u] and degrees[u] + degrees[v] < n:
                return False
    return True


def _search(graph: GraphView, vertices: List[VertexId]) -> HamiltonianPathResult:
    """Try every vertex as a start; the first full path found wins."""

    adjacency = {vertex: sorted(targets - {vertex}) for vertex, targets in QueryService(graph).adjacency().items()}
    total = len(vertices)
    stats = SearchStats()

    def extend(path: List[VertexId], visited: set[VertexId]) -> bool:
        stats.nodes_explored += 1
        stats.max_depth = max(stats.max_depth, len(path))
        if len(path) == total:
            return True
        for neighbor in adjacency[path[-1]]:
            if neighbor in visited:
                continue
            path.append(neighbor)
            visited.add(neighbor)
            if extend(path, visited):
                return True
            path.pop()
            visited.discard(neighbor)
            stats.backtrack_count += 1
        return False

    for start in vertices:
        path = [start]
        if extend(path, {start}):
            return HamiltonianPathResult(
                has_path=True,
                has_cycle=_closes_cycle(graph, adjacency, path),
                path=path,
                start_vertex=path[0],
                end_vertex=path[-1],
                search_stats=stats,
            )

    return HamiltonianPathResult(
        has_path=False,
        has_cycle=False,
        reason="No Hamiltonian path found after exhaustive search",
        search_stats=stats,
    )


def _closes_cycle(graph: GraphView, adjacency: Dict[VertexId, List[VertexId]], path: List[VertexId]) -> bool:
    # an undirected pair A-B would reuse its single edge to "close" the walk
    minimum = 2 if graph.graph_type().is_directed else 3
    return len(path) >= minimum and path[0] in adjacency[path[-1]]


__all__ = [
    "HamiltonianAnalysis",
    "HamiltonianPathResult",
    "SearchStats",
    "analyze",
    "find_path",
]
