"""JSON interchange format used to import and export whole graphs.

A document looks like::

    {
      "directed": false,
      "vertices": [{"id": "A", "color": "red"}, {"id": "B"}],
      "edges": [{"source": "A", "target": "B"}]
    }

Vertex colors are optional and limited to ``red`` and ``blue``. Edges carry
no weight; imported edges get weight ``1``.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from graphlab.errors import ErrorKind, GraphError

from .model import GraphType, VertexId
from .store import GraphStore

LOGGER = logging.getLogger(__name__)

VERTEX_COLORS = ("red", "blue")


@dataclass(frozen=True)
class InterchangeVertex:
    id: VertexId
    color: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id}
        if self.color is not None:
            payload["color"] = self.color
        return payload


@dataclass(frozen=True)
class InterchangeEdge:
    source: VertexId
    target: VertexId

    def to_payload(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target}


@dataclass
class InterchangeDocument:
    directed: bool
    vertices: List[InterchangeVertex] = field(default_factory=list)
    edges: List[InterchangeEdge] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "directed": self.directed,
            "vertices": [vertex.to_payload() for vertex in self.vertices],
            "edges": [edge.to_payload() for edge in self.edges],
        }


def _invalid(message: str) -> GraphError:
    return GraphError(ErrorKind.VALIDATION, message)


def validate_document(payload: Any) -> InterchangeDocument | GraphError:
    """Check the shape of a decoded document and return its typed form."""

    if not isinstance(payload, Mapping):
        return _invalid("Invalid graph structure: expected an object")
    directed = payload.get("directed")
    if not isinstance(directed, bool):
        return _invalid("Invalid graph structure: 'directed' must be a boolean")
    raw_vertices = payload.get("vertices")
    raw_edges = payload.get("edges")
    if not isinstance(raw_vertices, list):
        return _invalid("Invalid graph structure: 'vertices' must be a list")
    if not isinstance(raw_edges, list):
        return _invalid("Invalid graph structure: 'edges' must be a list")

    vertices: List[InterchangeVertex] = []
    for index, item in enumerate(raw_vertices):
        if not isinstance(item, Mapping):
            return _invalid(f"Invalid graph structure: vertex {index} must be an object")
        vertex_id = item.get("id")
        if not isinstance(vertex_id, str) or not vertex_id:
            return _invalid(f"Invalid graph structure: vertex {index} ID cannot be empty")
        color = item.get("color")
        if color is not None and color not in VERTEX_COLORS:
            return _invalid('Invalid graph structure: Color must be either "red" or "blue"')
        vertices.append(InterchangeVertex(vertex_id, color))

    edges: List[InterchangeEdge] = []
    for index, item in enumerate(raw_edges):
        if not isinstance(item, Mapping):
            return _invalid(f"Invalid graph structure: edge {index} must be an object")
        source, target = item.get("source"), item.get("target")
        if not isinstance(source, str) or not source:
            return _invalid(f"Invalid graph structure: edge {index} source vertex ID cannot be empty")
        if not isinstance(target, str) or not target:
            return _invalid(f"Invalid graph structure: edge {index} target vertex ID cannot be empty")
        edges.append(InterchangeEdge(source, target))

    known = [vertex.id for vertex in vertices]
    if len(set(known)) != len(known):
        return _invalid("Invalid graph: duplicate vertex IDs")
    dangling = [edge for edge in edges if edge.source not in known or edge.target not in known]
    if dangling:
        return _invalid(
            f"Invalid graph: edge {dangling[0].source}-{dangling[0].target} references a non-existent vertex"
        )
    return InterchangeDocument(directed=directed, vertices=vertices, edges=edges)


def parse_document(text: str) -> InterchangeDocument | GraphError:
    """Decode ``text`` as JSON and validate it."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        LOGGER.debug("Rejected interchange document: %s", exc)
        return _invalid("Invalid JSON format")
    return validate_document(payload)


def build_graph(document: InterchangeDocument) -> GraphStore:
    """Replay ``document`` into a fresh store in document order."""

    store = GraphStore(type=GraphType.DIRECTED if document.directed else GraphType.UNDIRECTED)
    for vertex in document.vertices:
        if vertex.color is None:
            store.add_vertex(vertex.id)
        else:
            store.add_vertex(vertex.id, color=vertex.color)
    for edge in document.edges:
        store.add_edge(edge.source, edge.target, 1.0)
    LOGGER.debug("Imported %d vertices and %d edges", len(document.vertices), len(document.edges))
    return store


def export_document(store: GraphStore) -> InterchangeDocument:
    """Describe ``store`` as an interchange document; weights are dropped."""

    vertices = []
    for vertex_id in store.vertices():
        color = store.vertex_attributes(vertex_id).get("color")
        vertices.append(InterchangeVertex(vertex_id, color if color in VERTEX_COLORS else None))
    return InterchangeDocument(
        directed=store.is_directed,
        vertices=vertices,
        edges=[InterchangeEdge(edge.source, edge.target) for edge in store.edges()],
    )


def dump_document(document: InterchangeDocument, *, indent: int | None = 2) -> str:
    return json.dumps(document.to_payload(), indent=indent)


__all__ = [
    "InterchangeDocument",
    "InterchangeEdge",
    "InterchangeVertex",
    "build_graph",
    "dump_document",
    "export_document",
    "parse_document",
    "validate_document",
]
