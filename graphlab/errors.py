"""Error types shared by the graph store and the algorithm library.

Algorithms never raise for domain failures. They return a
:class:`GraphError` describing what went wrong so callers can branch on
``error.kind``. Mutations and the primitive data structures raise the
exception classes below instead, mirroring the ``KeyError`` contract of
mappings.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the engine."""

    INSUFFICIENT_VERTICES = "insufficient_vertices"
    UNKNOWN_VERTEX = "unknown_vertex"
    UNKNOWN_EDGE = "unknown_edge"
    UNKNOWN_ELEMENT = "unknown_element"
    DUPLICATE_ID = "duplicate_id"
    NEGATIVE_WEIGHTS_UNSUPPORTED = "negative_weights_unsupported"
    NEGATIVE_CYCLE = "negative_cycle"
    UNREACHABLE = "unreachable"
    DIRECTED_GRAPH_UNSUPPORTED = "directed_graph_unsupported"
    MISSING_WEIGHTS = "missing_weights"
    NOT_CONNECTED = "not_connected"
    VALIDATION = "validation"


@dataclass(frozen=True)
class GraphError:
    """Typed failure returned by algorithm entry points."""

    kind: ErrorKind
    message: str

    def to_payload(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class GraphLabError(Exception):
    """Base class for exceptions raised by the engine."""

    kind: ErrorKind = ErrorKind.VALIDATION


class DuplicateIdError(GraphLabError, KeyError):
    """Raised when a caller-supplied vertex identifier is already in use."""

    kind = ErrorKind.DUPLICATE_ID


class UnknownVertexError(GraphLabError, KeyError):
    """Raised when an edge references a vertex that is not in the graph."""

    kind = ErrorKind.UNKNOWN_VERTEX


class UnknownEdgeError(GraphLabError, KeyError):
    """Raised when re-weighting an edge that is not in the graph."""

    kind = ErrorKind.UNKNOWN_EDGE


class UnknownElementError(GraphLabError, KeyError):
    """Raised by the disjoint set when an element was never registered."""

    kind = ErrorKind.UNKNOWN_ELEMENT


__all__ = [
    "DuplicateIdError",
    "ErrorKind",
    "GraphError",
    "GraphLabError",
    "UnknownEdgeError",
    "UnknownElementError",
    "UnknownVertexError",
]
