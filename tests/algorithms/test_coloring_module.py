"""Tests for :mod:`graphlab.algorithms.coloring`."""

from __future__ import annotations

import random

import pytest

from graphlab.algorithms.coloring import ColoringBounds, color_graph, coloring_bounds, validate_coloring
from graphlab.graph.model import StaticGraph


def cycle(n: int) -> StaticGraph:
    vertices = [f"v{index}" for index in range(n)]
    return StaticGraph.build(vertices, [(vertices[i], vertices[(i + 1) % n]) for i in range(n)])


def test_odd_cycle_needs_three_colors():
    result = color_graph(cycle(5))

    assert result.num_colors == 3
    assert validate_coloring(cycle(5), result.coloring)


def test_even_cycle_is_two_colorable():
    assert color_graph(cycle(6)).num_colors == 2


def test_complete_graph_uses_one_color_per_vertex():
    vertices = list("ABCD")
    edges = [(u, v) for i, u in enumerate(vertices) for v in vertices[i + 1:]]

    result = color_graph(StaticGraph.build(vertices, edges))

    assert result.num_colors == 4
    assert sorted(len(group) for group in result.color_classes) == [1, 1, 1, 1]


def test_empty_and_edgeless_graphs():
    assert color_graph(StaticGraph.build([], [])).num_colors == 0
    result = color_graph(StaticGraph.build(["A", "B"], []))
    assert result.num_colors == 1
    assert result.color_classes == [["A", "B"]]


def test_self_loops_and_direction_are_ignored():
    graph = StaticGraph.build(["A", "B"], [("A", "A"), ("A", "B")], directed=True)

    result = color_graph(graph)

    assert result.num_colors == 2
    assert validate_coloring(graph, result.coloring)


def test_validate_coloring_detects_conflicts():
    graph = StaticGraph.build(["A", "B", "C"], [("A", "B"), ("B", "C")])

    assert not validate_coloring(graph, {"A": 0, "B": 0, "C": 1})
    assert validate_coloring(graph, {"A": 0, "B": 1})


def test_coloring_is_always_valid_on_random_graphs():
    rng = random.Random(29)
    for _ in range(30):
        vertices = [str(index) for index in range(9)]
        edges = [(rng.choice(vertices), rng.choice(vertices)) for _ in range(rng.randint(0, 25))]
        graph = StaticGraph.build(vertices, edges, directed=rng.random() < 0.5)

        result = color_graph(graph)
        bounds = coloring_bounds(graph)

        assert validate_coloring(graph, result.coloring)
        assert set(result.coloring) == set(vertices)
        assert bounds.lower_bound <= result.num_colors <= bounds.upper_bound


@pytest.mark.parametrize(
    ("graph", "expected"),
    [
        (StaticGraph.build([], []), ColoringBounds(0, 0)),
        (StaticGraph.build(["A", "B"], []), ColoringBounds(1, 1)),
        (cycle(5), ColoringBounds(2, 3)),
    ],
)
def test_coloring_bounds(graph, expected):
    assert coloring_bounds(graph) == expected


def test_parallel_edges_raise_degree_for_tie_break():
    graph = StaticGraph.build(
        ["A", "B", "C", "D", "E"], [("A", "E"), ("A", "E"), ("B", "E"), ("D", "B")]
    )

    result = color_graph(graph)

    assert result.coloring == {"E": 0, "A": 1, "B": 1, "D": 0, "C": 0}
    assert list(result.coloring)[0] == "E"


def test_upper_bound_counts_parallel_edges_but_not_loops():
    graph = StaticGraph.build(["A", "B"], [("A", "B"), ("A", "B"), ("A", "A")])

    assert coloring_bounds(graph) == ColoringBounds(2, 3)
