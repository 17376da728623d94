"""In-memory NetworkX based storage for a single graph instance."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

import networkx as nx

from graphlab.errors import DuplicateIdError, UnknownEdgeError, UnknownVertexError

from .ids import EdgeIdAllocator, VertexNameAllocator
from .model import Edge, EdgeId, GraphType, VertexId

LOGGER = logging.getLogger(__name__)


def _new_backend(graph_type: GraphType) -> nx.MultiGraph:
    return nx.MultiDiGraph() if graph_type.is_directed else nx.MultiGraph()


@dataclass
class GraphStore:
    """Mutable multigraph wrapping :class:`networkx.MultiGraph`.

    Undirected stores are backed by ``MultiGraph`` and directed stores by
    ``MultiDiGraph``. Edge keys in the backend are the engine's edge IDs.
    Each store owns its own name allocators, so the set of reserved names
    always mirrors the vertices and edges actually present.

    The directionality mode is fixed for the lifetime of the store; use
    :func:`graphlab.graph.transition.transition_graph_type` to obtain a
    converted copy.
    """

    type: GraphType = GraphType.UNDIRECTED
    vertex_names: VertexNameAllocator = field(default_factory=VertexNameAllocator)
    edge_names: EdgeIdAllocator = field(default_factory=EdgeIdAllocator)
    graph: nx.MultiGraph = field(init=False, repr=False)
    _endpoints: dict[EdgeId, tuple[VertexId, VertexId]] = field(
        init=False, repr=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        self.type = GraphType(self.type)
        self.graph = _new_backend(self.type)
        self.vertex_names.reset()
        self.edge_names.reset()

    # ------------------------------------------------------------------
    # Read side (GraphView)
    # ------------------------------------------------------------------

    def vertices(self) -> list[VertexId]:
        """Return vertex identifiers in insertion order."""

        return list(self.graph.nodes)

    def edges(self) -> list[Edge]:
        """Return edge records in insertion order."""

        return [self._edge_record(edge_id) for edge_id in self._endpoints]

    def graph_type(self) -> GraphType:
        return self.type

    @property
    def is_directed(self) -> bool:
        return self.type.is_directed

    def has_vertex(self, vertex_id: VertexId) -> bool:
        return vertex_id in self.graph

    def has_edge(self, edge_id: EdgeId) -> bool:
        return edge_id in self._endpoints

    def get_edge(self, edge_id: EdgeId) -> Optional[Edge]:
        """Return the edge record for ``edge_id`` if present."""

        if edge_id not in self._endpoints:
            return None
        return self._edge_record(edge_id)

    def vertex_attributes(self, vertex_id: VertexId) -> dict[str, Any]:
        if vertex_id not in self.graph:
            raise UnknownVertexError(f"Vertex '{vertex_id}' does not exist")
        return dict(self.graph.nodes[vertex_id])

    def allocated_vertex_names(self) -> list[VertexId]:
        return self.vertex_names.used_names()

    def edge_key_count(self, source: VertexId, target: VertexId) -> int:
        return self.edge_names.edge_count(source, target, directed=self.is_directed)

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.graph

    # ------------------------------------------------------------------
    # Mutation contract
    # ------------------------------------------------------------------

    def add_vertex(self, vertex_id: VertexId | None = None, **attributes: Any) -> VertexId:
        """Add a vertex and return its identifier.

        When ``vertex_id`` is omitted the next free name is generated.
        """

        if vertex_id is None:
            vertex_id = self.vertex_names.generate_name()
        else:
            if not vertex_id:
                raise ValueError("Vertex ID cannot be empty")
            if not self.vertex_names.reserve_name(vertex_id):
                raise DuplicateIdError(f"Vertex with ID '{vertex_id}' already exists")
        self.graph.add_node(vertex_id, **attributes)
        LOGGER.debug("Added vertex %s", vertex_id)
        return vertex_id

    def add_edge(self, source: VertexId, target: VertexId, weight: float = 1.0) -> EdgeId:
        """Connect ``source`` to ``target`` and return the new edge ID."""

        for endpoint in (source, target):
            if endpoint not in self.graph:
                raise UnknownVertexError(f"Vertex '{endpoint}' does not exist")
        edge_id = self.edge_names.generate_edge_id(
            source, target, directed=self.is_directed, taken=self._endpoints
        )
        self.graph.add_edge(source, target, key=edge_id, weight=_coerce_weight(weight))
        self._endpoints[edge_id] = (source, target)
        LOGGER.debug("Added edge %s (%s -> %s, weight=%s)", edge_id, source, target, weight)
        return edge_id

    def set_edge_weight(self, edge_id: EdgeId, weight: float) -> None:
        if edge_id not in self._endpoints:
            raise UnknownEdgeError(f"Edge '{edge_id}' does not exist")
        source, target = self._endpoints[edge_id]
        self.graph.edges[source, target, edge_id]["weight"] = _coerce_weight(weight)

    def remove_vertex(self, vertex_id: VertexId) -> None:
        """Remove ``vertex_id`` and every incident edge; missing IDs are ignored."""

        if vertex_id not in self.graph:
            return
        incident = [
            edge_id
            for edge_id, (source, target) in self._endpoints.items()
            if vertex_id in (source, target)
        ]
        for edge_id in incident:
            del self._endpoints[edge_id]
            self.edge_names.release_edge_id(edge_id)
        self.graph.remove_node(vertex_id)
        self.vertex_names.release_name(vertex_id)
        LOGGER.debug("Removed vertex %s and %d incident edges", vertex_id, len(incident))

    def remove_edge(self, edge_id: EdgeId) -> None:
        """Remove ``edge_id``; missing IDs are ignored."""

        endpoints = self._endpoints.pop(edge_id, None)
        if endpoints is None:
            return
        source, target = endpoints
        self.graph.remove_edge(source, target, key=edge_id)
        self.edge_names.release_edge_id(edge_id)
        LOGGER.debug("Removed edge %s", edge_id)

    def clear(self) -> None:
        """Drop every vertex and edge and reset the allocators."""

        self.graph = _new_backend(self.type)
        self._endpoints.clear()
        self.vertex_names.reset()
        self.edge_names.reset()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _edge_record(self, edge_id: EdgeId) -> Edge:
        source, target = self._endpoints[edge_id]
        weight = self.graph.edges[source, target, edge_id]["weight"]
        return Edge(id=edge_id, source=source, target=target, weight=weight)


def _coerce_weight(weight: float) -> float:
    value = float(weight)
    if math.isnan(value):
        raise ValueError("Edge weight must be a number")
    return value
