"""Tests for :mod:`graphlab.graph.ids`."""

from __future__ import annotations

import string

from graphlab.graph import ids


def test_new_token_prefix_and_uniqueness():
    identifier = ids.new_token("anchor")
    assert identifier.startswith("anchor_")
    assert identifier != ids.new_token("anchor")
    assert "_" not in ids.new_token()


def test_utc_now_returns_iso_format():
    timestamp = ids.utc_now()
    assert "T" in timestamp and timestamp.endswith("+00:00")


def test_vertex_names_follow_letter_sequence():
    allocator = ids.VertexNameAllocator()
    names = [allocator.generate_name() for _ in range(28)]

    assert names[:26] == list(string.ascii_uppercase)
    assert names[26:] == ["AA", "AB"]


def test_released_vertex_name_is_reused_first():
    allocator = ids.VertexNameAllocator()
    for _ in range(3):
        allocator.generate_name()

    allocator.release_name("A")
    allocator.release_name("A")

    assert allocator.is_name_available("A")
    assert allocator.generate_name() == "A"
    assert allocator.generate_name() == "D"


def test_reserve_name_rejects_used_names_without_side_effects():
    allocator = ids.VertexNameAllocator()

    assert allocator.reserve_name("B") is True
    assert allocator.reserve_name("B") is False
    assert allocator.used_names() == ["B"]
    assert allocator.generate_name() == "A"
    assert allocator.generate_name() == "C"


def test_vertex_names_fall_back_to_tokens_when_exhausted():
    allocator = ids.VertexNameAllocator()
    for _ in range(26 + 26 * 26):
        allocator.generate_name()

    fallback = allocator.generate_name()

    assert len(fallback) == 32
    assert not allocator.is_name_available(fallback)


def test_reset_clears_vertex_names():
    allocator = ids.VertexNameAllocator()
    allocator.generate_name()
    allocator.reset()
    assert allocator.used_names() == []


def test_undirected_edge_keys_are_order_independent():
    assert ids.canonical_edge_key("B", "A", directed=False) == "A-B"
    assert ids.canonical_edge_key("B", "A", directed=True) == "B-A"


def test_edge_ids_number_parallel_edges():
    allocator = ids.EdgeIdAllocator()

    assert allocator.generate_edge_id("A", "B", directed=False) == "A-B"
    assert allocator.generate_edge_id("B", "A", directed=False) == "A-B#2"
    assert allocator.generate_edge_id("A", "B", directed=False) == "A-B#3"
    assert allocator.edge_count("B", "A", directed=False) == 3


def test_directed_edge_ids_keep_orientation():
    allocator = ids.EdgeIdAllocator()

    assert allocator.generate_edge_id("A", "B", directed=True) == "A-B"
    assert allocator.generate_edge_id("B", "A", directed=True) == "B-A"


def test_release_edge_id_decrements_without_going_negative():
    allocator = ids.EdgeIdAllocator()
    allocator.generate_edge_id("A", "B", directed=False)
    allocator.generate_edge_id("A", "B", directed=False)

    allocator.release_edge_id("A-B#2")
    assert allocator.edge_count("A", "B", directed=False) == 1
    allocator.release_edge_id("A-B")
    allocator.release_edge_id("A-B")
    assert allocator.edge_count("A", "B", directed=False) == 0
    assert ids.base_edge_key("A-B#7") == "A-B"


def test_generate_edge_id_skips_identifiers_still_taken():
    allocator = ids.EdgeIdAllocator()
    allocator.generate_edge_id("A", "B", directed=False)
    allocator.generate_edge_id("A", "B", directed=False)
    allocator.release_edge_id("A-B")

    edge_id = allocator.generate_edge_id("A", "B", directed=False, taken={"A-B#2"})

    assert edge_id == "A-B#3"
