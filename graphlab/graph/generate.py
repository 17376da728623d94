"""Graph generators that populate a store through its mutation API."""
from __future__ import annotations

import logging
from typing import List

from .model import VertexId
from .store import GraphStore

LOGGER = logging.getLogger(__name__)

MAX_COMPLETE_GRAPH_VERTICES = 50


def generate_complete_graph(store: GraphStore, n: int) -> List[VertexId]:
    """Add ``n`` auto-named vertices to ``store`` and connect every pair.

    Edges get weight ``1``; directed stores receive both orientations.
    Returns the new vertex IDs in creation order.
    """

    if n < 1 or n > MAX_COMPLETE_GRAPH_VERTICES:
        raise ValueError(f"Number of vertices must be between 1 and {MAX_COMPLETE_GRAPH_VERTICES}")

    vertices = [store.add_vertex() for _ in range(n)]
    for index, source in enumerate(vertices):
        for target in vertices[index + 1:]:
            store.add_edge(source, target, 1.0)
            if store.is_directed:
                store.add_edge(target, source, 1.0)
    LOGGER.debug("Generated complete graph on %d vertices", n)
    return vertices


__all__ = ["MAX_COMPLETE_GRAPH_VERTICES", "generate_complete_graph"]
