import json

import pytest

from graphlab import GraphLab_tool
from graphlab.algorithms.mst import MSTAlgorithm
from graphlab.algorithms.shortest_path import ShortestPathAlgorithm
from graphlab.api import GraphLabApp
from graphlab.errors import DuplicateIdError, ErrorKind, GraphError
from graphlab.graph.model import GraphType


@pytest.fixture()
def app() -> GraphLabApp:
    return GraphLabApp()


def _build_triangle(app: GraphLabApp) -> None:
    for vertex in ("A", "B", "C"):
        app.handle({"action": "add_vertex", "params": {"id": vertex}})
    for source, target, weight in (("A", "B", 1), ("B", "C", 2), ("A", "C", 5)):
        app.handle({"action": "add_edge", "params": {"source": source, "target": target, "weight": weight}})


def test_mutation_contract_round_trip(app: GraphLabApp) -> None:
    generated = app.add_vertex()
    app.add_vertex("Q")
    edge_id = app.add_edge(generated, "Q", 4)
    app.set_edge_weight(edge_id, 6)

    assert app.get_vertices() == ["A", "Q"]
    assert [(edge.id, edge.weight) for edge in app.get_edges()] == [("A-Q", 6.0)]
    assert app.get_graph_type() is GraphType.UNDIRECTED

    app.remove_edge(edge_id)
    app.remove_vertex("Q")
    assert app.get_vertices() == ["A"] and app.get_edges() == []
    with pytest.raises(DuplicateIdError):
        app.add_vertex("A")


def test_handle_shortest_path_returns_payload_and_event(app: GraphLabApp) -> None:
    _build_triangle(app)

    response = app.handle(
        {"action": "shortest_path", "params": {"source": "A", "target": "C", "algorithm": "dijkstra"}}
    )

    assert response["ok"] is True
    assert response["result"]["path"] == ["A", "B", "C"]
    assert response["result"]["total_distance"] == 3
    assert response["error"] is None
    event = response["events"][0]
    assert event["action"] == "shortest_path"
    assert event["target_ids"] == ["A", "B", "C"]


def test_unknown_algorithm_selector_is_a_validation_error(app: GraphLabApp) -> None:
    _build_triangle(app)

    response = app.handle({"action": "shortest_path", "params": {"source": "A", "target": "C", "algorithm": "a-star"}})

    assert response["ok"] is False
    assert response["error"]["kind"] == ErrorKind.VALIDATION.value
    assert "a-star" in response["error"]["message"]
    assert response["events"][0]["level"] == "warning"


def test_algorithm_errors_are_returned_not_raised(app: GraphLabApp) -> None:
    for vertex in "ABCD":
        app.add_vertex(vertex)
    app.add_edge("A", "B")
    app.add_edge("C", "D")

    response = app.handle({"action": "minimum_spanning_tree", "params": {"algorithm": "kruskal"}})

    assert response["ok"] is False
    assert response["error"]["kind"] == "not_connected"
    assert isinstance(app.minimum_spanning_tree(MSTAlgorithm.PRIM), GraphError)


def test_mutation_errors_surface_in_response(app: GraphLabApp) -> None:
    app.handle({"action": "add_vertex", "params": {"id": "A"}})

    duplicate = app.handle({"action": "add_vertex", "params": {"id": "A"}})
    dangling = app.handle({"action": "add_edge", "params": {"source": "A", "target": "Z"}})
    missing = app.handle({"action": "set_edge_weight", "params": {"id": "nope", "weight": 2}})

    assert duplicate["error"]["kind"] == "duplicate_id"
    assert "already exists" in duplicate["error"]["message"]
    assert dangling["error"]["kind"] == "unknown_vertex"
    assert missing["error"]["kind"] == "unknown_edge"


def test_removals_of_missing_ids_succeed(app: GraphLabApp) -> None:
    assert app.handle({"action": "remove_vertex", "params": {"id": "ghost"}})["ok"] is True
    assert app.handle({"action": "remove_edge", "params": {"id": "ghost"}})["ok"] is True


def test_unknown_action_raises_key_error(app: GraphLabApp) -> None:
    with pytest.raises(KeyError):
        app.handle({"action": "does_not_exist"})
    with pytest.raises(KeyError):
        app.handle({"params": {}})


def test_transition_replaces_current_store(app: GraphLabApp) -> None:
    _build_triangle(app)
    before = app.store

    response = app.handle({"action": "transition_graph_type", "params": {"target": "directed"}})

    assert response["ok"] is True
    assert response["result"]["edge_mapping"]["A-B"] == ["A-B", "B-A"]
    assert app.store is not before
    assert app.get_graph_type() is GraphType.DIRECTED
    assert len(app.get_edges()) == 6


def test_transition_requires_known_target(app: GraphLabApp) -> None:
    assert app.handle({"action": "transition_graph_type", "params": {}})["ok"] is False
    response = app.handle({"action": "transition_graph_type", "params": {"target": "sideways"}})
    assert response["error"]["kind"] == "validation"


def test_import_and_export_documents(app: GraphLabApp) -> None:
    document = {
        "directed": False,
        "vertices": [{"id": "A", "color": "red"}, {"id": "B"}],
        "edges": [{"source": "A", "target": "B"}],
    }

    imported = app.handle({"action": "import_graph", "params": {"json": json.dumps(document)}})
    exported = app.handle({"action": "export_graph", "params": {}})

    assert imported["result"] == {"vertex_count": 2, "edge_count": 1}
    assert exported["result"] == document


def test_failed_import_keeps_current_graph(app: GraphLabApp) -> None:
    app.add_vertex("keep")

    response = app.handle({"action": "import_graph", "params": {"json": "{broken"}})

    assert response["error"] == {"kind": "validation", "message": "Invalid JSON format"}
    assert app.get_vertices() == ["keep"]


def test_generated_graph_feeds_algorithms(app: GraphLabApp) -> None:
    response = app.handle({"action": "generate_complete_graph", "params": {"n": 4}})
    assert response["result"]["vertices"] == ["A", "B", "C", "D"]

    hamiltonian = app.handle({"action": "hamiltonian_path", "params": {}})
    coloring = app.handle({"action": "color_graph", "params": {}})
    bounds = app.handle({"action": "coloring_bounds", "params": {}})
    euler = app.handle({"action": "eulerian_path", "params": {}})
    connectivity = app.handle({"action": "connectivity", "params": {}})
    all_pairs = app.handle({"action": "all_pairs_shortest_paths", "params": {"algorithm": "johnson"}})

    assert "Dirac's theorem" in hamiltonian["result"]["reason"]
    assert coloring["result"]["num_colors"] == 4
    assert bounds["result"] == {"lower_bound": 4, "upper_bound": 4}
    assert euler["result"]["odd_vertex_count"] == 4 and euler["result"]["has_path"] is False
    assert connectivity["result"]["is_strongly_connected"] is True
    assert all_pairs["result"]["distances"]["A"]["D"] == 1


def test_generate_out_of_range_is_validation_error(app: GraphLabApp) -> None:
    response = app.handle({"action": "generate_complete_graph", "params": {"n": 99}})

    assert response["error"]["kind"] == "validation"


def test_typed_methods_accept_enums(app: GraphLabApp) -> None:
    _build_triangle(app)

    result = app.shortest_path("A", "C", ShortestPathAlgorithm.BELLMAN_FORD)

    assert result.total_distance == 3
    assert app.get_graph_type().value == "undirected"


def test_module_level_tool_uses_shared_app() -> None:
    response = GraphLab_tool({"action": "get_graph", "params": {}})

    assert response["ok"] is True
    assert response["result"]["type"] in {"directed", "undirected"}


def test_malformed_params_become_validation_errors(app: GraphLabApp) -> None:
    _build_triangle(app)

    missing_weight = app.handle({"action": "set_edge_weight", "params": {"id": "A-B"}})
    bad_weight = app.handle({"action": "set_edge_weight", "params": {"id": "A-B", "weight": [1]}})
    bad_ceiling = app.handle({"action": "hamiltonian_path", "params": {"max_vertices": "many"}})

    assert missing_weight["error"]["kind"] == "validation"
    assert bad_weight["error"]["kind"] == "validation"
    assert bad_ceiling["error"]["kind"] == "validation"
    assert app.store.get_edge("A-B").weight == 1.0


def test_string_max_vertices_is_coerced(app: GraphLabApp) -> None:
    _build_triangle(app)

    refused = app.handle({"action": "hamiltonian_path", "params": {"max_vertices": "2"}})
    searched = app.handle({"action": "hamiltonian_path", "params": {"max_vertices": "5"}})

    assert refused["ok"] is True and refused["result"]["has_path"] is False
    assert "limited to 2 vertices" in refused["result"]["reason"]
    assert searched["result"]["has_path"] is True
