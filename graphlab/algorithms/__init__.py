"""Graph algorithms operating on read-only graph views."""

from . import eulerian, hamiltonian
from .all_pairs import AllPairsAlgorithm, AllPairsResult, compute_all_pairs, floyd_warshall, johnson
from .coloring import ColoringBounds, ColoringResult, color_graph, coloring_bounds, validate_coloring
from .connectivity import (
    is_connected,
    is_connected_ignoring_isolated,
    is_reachable,
    is_strongly_connected,
    is_weakly_connected,
)
from .eulerian import EulerianPathResult
from .hamiltonian import HamiltonianPathResult
from .mst import MSTAlgorithm, MSTResult, compute_mst, kruskal_mst, prim_mst
from .shortest_path import (
    ShortestPathAlgorithm,
    ShortestPathResult,
    bellman_ford,
    compute_shortest_path,
    dijkstra,
)

__all__ = [
    "AllPairsAlgorithm",
    "AllPairsResult",
    "ColoringBounds",
    "ColoringResult",
    "EulerianPathResult",
    "HamiltonianPathResult",
    "MSTAlgorithm",
    "MSTResult",
    "ShortestPathAlgorithm",
    "ShortestPathResult",
    "bellman_ford",
    "color_graph",
    "coloring_bounds",
    "compute_all_pairs",
    "compute_mst",
    "compute_shortest_path",
    "dijkstra",
    "eulerian",
    "floyd_warshall",
    "hamiltonian",
    "is_connected",
    "is_connected_ignoring_isolated",
    "is_reachable",
    "is_strongly_connected",
    "is_weakly_connected",
    "johnson",
    "kruskal_mst",
    "prim_mst",
    "validate_coloring",
]
