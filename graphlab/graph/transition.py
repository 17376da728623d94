"""Convert a graph between directed and undirected mode."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from graphlab.config import merge_policy_name

from .ids import canonical_edge_key
from .model import Edge, EdgeId, GraphType, VertexId
from .store import GraphStore

LOGGER = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    """Which weight survives when directed edges collapse into one."""

    FIRST = "first"
    MIN = "min"
    MAX = "max"

    @classmethod
    def configured(cls) -> "MergePolicy":
        name = merge_policy_name()
        try:
            return cls(name)
        except ValueError:
            LOGGER.warning("Unknown merge policy %r, falling back to %r", name, cls.FIRST.value)
            return cls.FIRST

    def merge(self, weights: List[float]) -> float:
        if self is MergePolicy.FIRST:
            return weights[0]
        if self is MergePolicy.MIN:
            return min(weights)
        if self is MergePolicy.MAX:
            return max(weights)
        raise AssertionError(f"Unhandled merge policy: {self!r}")


@dataclass
class TransitionResult:
    """The converted store plus how old identifiers map onto new ones."""

    graph: GraphStore
    vertex_mapping: Dict[VertexId, VertexId] = field(default_factory=dict)
    edge_mapping: Dict[EdgeId, List[EdgeId]] = field(default_factory=dict)


def transition_graph_type(
    store: GraphStore,
    target: GraphType,
    merge_policy: Optional[MergePolicy] = None,
) -> TransitionResult:
    """Return a new store of type ``target`` holding the contents of ``store``.

    Undirected edges split into a forward and a reverse directed edge with
    the same weight. Directed edges sharing an unordered endpoint pair merge
    into one undirected edge whose weight follows ``merge_policy`` (the
    ``GRAPHLAB_MERGE_POLICY`` setting when omitted). When ``target`` is the
    current type, ``store`` itself is returned with identity mappings.
    """

    target = GraphType(target)
    vertices = store.vertices()
    edges = store.edges()
    if store.graph_type() is target:
        return TransitionResult(
            graph=store,
            vertex_mapping={vertex: vertex for vertex in vertices},
            edge_mapping={edge.id: [edge.id] for edge in edges},
        )

    converted = GraphStore(type=target)
    vertex_mapping: Dict[VertexId, VertexId] = {}
    for vertex in vertices:
        vertex_mapping[vertex] = converted.add_vertex(vertex, **store.vertex_attributes(vertex))

    if target.is_directed:
        edge_mapping = _split_edges(converted, edges)
    else:
        edge_mapping = _merge_edges(converted, edges, merge_policy or MergePolicy.configured())

    LOGGER.debug(
        "Transitioned %d vertices and %d edges to %s (%d edges now)",
        len(vertices),
        len(edges),
        target.value,
        len(converted.edges()),
    )
    return TransitionResult(graph=converted, vertex_mapping=vertex_mapping, edge_mapping=edge_mapping)


def _split_edges(converted: GraphStore, edges: List[Edge]) -> Dict[EdgeId, List[EdgeId]]:
    mapping: Dict[EdgeId, List[EdgeId]] = {}
    for edge in edges:
        forward = converted.add_edge(edge.source, edge.target, edge.weight)
        reverse = converted.add_edge(edge.target, edge.source, edge.weight)
        mapping[edge.id] = [forward, reverse]
    return mapping


def _merge_edges(
    converted: GraphStore, edges: List[Edge], policy: MergePolicy
) -> Dict[EdgeId, List[EdgeId]]:
    groups: Dict[str, List[Edge]] = {}
    for edge in edges:
        groups.setdefault(canonical_edge_key(edge.source, edge.target, directed=False), []).append(edge)

    mapping: Dict[EdgeId, List[EdgeId]] = {}
    for members in groups.values():
        first = members[0]
        merged = converted.add_edge(first.source, first.target, policy.merge([edge.weight for edge in members]))
        for edge in members:
            mapping[edge.id] = [merged]
    return mapping


__all__ = ["MergePolicy", "TransitionResult", "transition_graph_type"]
