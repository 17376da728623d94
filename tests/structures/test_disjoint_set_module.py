"""Tests for :mod:`graphlab.structures.disjoint_set`."""

from __future__ import annotations

import random

import pytest

from graphlab.errors import ErrorKind, UnknownElementError
from graphlab.structures import DisjointSet


def test_union_merges_components_and_reports_redundancy():
    sets = DisjointSet("ABCD")

    assert sets.union("A", "B") is True
    assert sets.union("B", "A") is False
    assert sets.union("C", "D") is True
    assert sets.component_count() == 2
    assert sets.is_connected("A", "B") and not sets.is_connected("A", "C")


def test_find_is_stable_and_matches_connectivity():
    rng = random.Random(7)
    elements = list(range(40))
    sets = DisjointSet(elements)
    for _ in range(30):
        sets.union(rng.choice(elements), rng.choice(elements))

    for x in elements:
        assert sets.find(x) == sets.find(x)
        for y in elements[:10]:
            assert sets.is_connected(x, y) == (sets.find(x) == sets.find(y))


def test_union_by_rank_merges_long_runs():
    sets = DisjointSet(range(5000))
    for index in range(1, 5000):
        sets.union(index - 1, index)

    assert sets.component_count() == 1
    assert sets.find(4999) == sets.find(0)


def test_find_compresses_a_deep_chain():
    size = 5000
    sets = DisjointSet(range(size))
    # hand-built chain 4999 -> 4998 -> ... -> 0
    for index in range(1, size):
        sets._parent[index] = index - 1

    assert sets.find(size - 1) == 0
    assert all(sets._parent[index] == 0 for index in range(size))


def test_components_and_sizes():
    sets = DisjointSet(["a", "b", "c"])
    sets.union("a", "c")

    assert sorted(sets.component("c")) == ["a", "c"]
    assert sets.component_size("a") == 2
    assert sorted(sorted(group) for group in sets.all_components()) == [["a", "c"], ["b"]]


def test_unknown_element_raises_key_error():
    sets = DisjointSet(["a"])

    with pytest.raises(UnknownElementError) as excinfo:
        sets.find("z")
    assert excinfo.value.kind is ErrorKind.UNKNOWN_ELEMENT
    with pytest.raises(KeyError):
        sets.union("a", "z")


def test_late_registration_and_membership():
    sets = DisjointSet()

    assert sets.add("x") is True
    assert sets.add("x") is False
    assert "x" in sets and sets.contains("x") and not sets.contains("y")
    assert len(sets) == 1
