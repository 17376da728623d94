"""Tests for :mod:`graphlab.graph.generate`."""

from __future__ import annotations

import pytest

from graphlab.graph.generate import generate_complete_graph
from graphlab.graph.model import GraphType
from graphlab.graph.store import GraphStore


def test_complete_undirected_graph_has_every_pair_once():
    store = GraphStore()
    vertices = generate_complete_graph(store, 5)

    assert vertices == ["A", "B", "C", "D", "E"]
    assert len(store.edges()) == 10
    assert all(edge.weight == 1.0 for edge in store.edges())


def test_complete_directed_graph_has_both_orientations():
    store = GraphStore(type=GraphType.DIRECTED)
    generate_complete_graph(store, 4)

    pairs = {(edge.source, edge.target) for edge in store.edges()}
    assert len(store.edges()) == 12
    assert ("A", "B") in pairs and ("B", "A") in pairs


def test_generation_continues_after_existing_vertices():
    store = GraphStore()
    store.add_vertex("A")

    assert generate_complete_graph(store, 2) == ["B", "C"]
    assert [edge.id for edge in store.edges()] == ["B-C"]


@pytest.mark.parametrize("n", [0, 51, -3])
def test_vertex_count_out_of_range_raises(n):
    with pytest.raises(ValueError):
        generate_complete_graph(GraphStore(), n)
