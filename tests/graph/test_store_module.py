"""Tests for :mod:`graphlab.graph.store`."""

from __future__ import annotations

import pytest

from graphlab.errors import DuplicateIdError, ErrorKind, UnknownEdgeError, UnknownVertexError
from graphlab.graph.model import Edge, GraphType
from graphlab.graph.store import GraphStore


def make_triangle(graph_type: GraphType = GraphType.UNDIRECTED) -> GraphStore:
    store = GraphStore(type=graph_type)
    for vertex in ("A", "B", "C"):
        store.add_vertex(vertex)
    store.add_edge("A", "B", 1)
    store.add_edge("B", "C", 2)
    store.add_edge("A", "C", 5)
    return store


def test_graph_store_adds_vertices_and_edges_in_order():
    store = make_triangle()

    assert store.vertices() == ["A", "B", "C"]
    assert store.edges() == [
        Edge("A-B", "A", "B", 1.0),
        Edge("B-C", "B", "C", 2.0),
        Edge("A-C", "A", "C", 5.0),
    ]
    assert store.graph_type() is GraphType.UNDIRECTED
    assert len(store) == 3 and "A" in store


def test_generated_vertex_names_skip_reserved_ids():
    store = GraphStore()
    store.add_vertex("A")

    assert store.add_vertex() == "B"
    assert store.allocated_vertex_names() == ["A", "B"]


def test_duplicate_vertex_raises():
    store = GraphStore()
    store.add_vertex("A")

    with pytest.raises(DuplicateIdError) as excinfo:
        store.add_vertex("A")
    assert excinfo.value.kind is ErrorKind.DUPLICATE_ID
    assert isinstance(excinfo.value, KeyError)


def test_empty_vertex_id_is_rejected():
    with pytest.raises(ValueError):
        GraphStore().add_vertex("")


def test_add_edge_requires_existing_endpoints():
    store = GraphStore()
    store.add_vertex("A")

    with pytest.raises(UnknownVertexError):
        store.add_edge("A", "Z")
    assert store.edges() == []


def test_parallel_edges_and_self_loops_are_kept():
    store = GraphStore()
    store.add_vertex("A")
    store.add_vertex("B")

    first = store.add_edge("A", "B")
    second = store.add_edge("B", "A", 3)
    loop = store.add_edge("A", "A")

    assert (first, second, loop) == ("A-B", "A-B#2", "A-A")
    assert store.get_edge("A-B#2") == Edge("A-B#2", "B", "A", 3.0)
    assert store.graph.number_of_edges() == 3
    assert store.edge_key_count("B", "A") == 2


def test_directed_store_uses_multidigraph():
    store = make_triangle(GraphType.DIRECTED)

    assert store.is_directed
    assert store.graph.is_directed() and store.graph.is_multigraph()
    assert store.add_edge("B", "A") == "B-A"


def test_set_edge_weight_updates_record():
    store = make_triangle()
    store.set_edge_weight("A-C", -4)

    assert store.get_edge("A-C").weight == -4.0
    with pytest.raises(UnknownEdgeError):
        store.set_edge_weight("missing", 1)


def test_nan_weight_is_rejected():
    store = make_triangle()
    with pytest.raises(ValueError):
        store.add_edge("A", "B", float("nan"))


def test_remove_vertex_cascades_and_releases_names():
    store = make_triangle()
    store.remove_vertex("B")

    assert store.vertices() == ["A", "C"]
    assert [edge.id for edge in store.edges()] == ["A-C"]
    assert store.edge_key_count("A", "B") == 0
    assert store.add_vertex() == "B"


def test_removals_of_missing_ids_are_noops():
    store = make_triangle()
    store.remove_vertex("Z")
    store.remove_edge("missing")

    assert len(store.edges()) == 3


def test_edge_ids_stay_unique_after_out_of_order_removal():
    store = GraphStore()
    store.add_vertex("A")
    store.add_vertex("B")
    store.add_edge("A", "B")
    store.add_edge("A", "B")
    store.remove_edge("A-B")

    new_id = store.add_edge("A", "B")

    assert new_id == "A-B#3"
    assert len({edge.id for edge in store.edges()}) == 2


def test_vertex_attributes_are_stored():
    store = GraphStore()
    store.add_vertex("A", color="red")

    assert store.vertex_attributes("A") == {"color": "red"}
    with pytest.raises(UnknownVertexError):
        store.vertex_attributes("B")


def test_clear_resets_allocators():
    store = make_triangle()
    store.clear()

    assert store.vertices() == [] and store.edges() == []
    assert store.add_vertex() == "A"
