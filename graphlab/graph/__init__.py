"""Graph subpackage containing the data model, storage and conversions."""

from .model import Edge, GraphType, GraphView, StaticGraph
from .query import QueryService
from .store import GraphStore
from .transition import MergePolicy, TransitionResult, transition_graph_type

__all__ = [
    "Edge",
    "GraphStore",
    "GraphType",
    "GraphView",
    "MergePolicy",
    "QueryService",
    "StaticGraph",
    "TransitionResult",
    "transition_graph_type",
]
