"""Public API surface for GraphLab."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from graphlab.algorithms import coloring, connectivity, eulerian, hamiltonian
from graphlab.algorithms.all_pairs import AllPairsAlgorithm, AllPairsResult, compute_all_pairs
from graphlab.algorithms.mst import MSTAlgorithm, MSTResult, compute_mst
from graphlab.algorithms.shortest_path import (
    ShortestPathAlgorithm,
    ShortestPathResult,
    compute_shortest_path,
)
from graphlab.errors import ErrorKind, GraphError, GraphLabError
from graphlab.graph.generate import generate_complete_graph
from graphlab.graph.interchange import (
    InterchangeDocument,
    build_graph,
    export_document,
    parse_document,
    validate_document,
)
from graphlab.graph.model import Edge, EdgeId, GraphType, VertexId
from graphlab.graph.store import GraphStore
from graphlab.graph.transition import MergePolicy, TransitionResult, transition_graph_type
from graphlab.obs.events import EventBus
from graphlab.router import ActionRouter

LOGGER = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class _InvalidSelector(Exception):
    """Raised while parsing params when a selector string is not recognised."""

    def __init__(self, error: GraphError) -> None:
        super().__init__(error.message)
        self.error = error


def _parse_selector(enum_cls: Type[E], raw: Any, default: E | None, label: str) -> E | None:
    if raw is None:
        return default
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise _InvalidSelector(
            GraphError(ErrorKind.VALIDATION, f"Unknown {label} '{raw}'. Expected one of: {choices}")
        ) from None


def _payload(value: Any) -> Any:
    """Convert result objects to JSON friendly structures."""

    if hasattr(value, "to_payload"):
        return value.to_payload()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {key: _payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_payload(item) for item in value]
    return value


@dataclass
class GraphLabApp:
    """Session container owning one graph and the services that act on it."""

    store: GraphStore = field(default_factory=GraphStore)
    event_bus: EventBus = field(default_factory=EventBus)
    router: ActionRouter = field(default_factory=ActionRouter)
    merge_policy: MergePolicy | None = None

    def __post_init__(self) -> None:
        self._register_default_actions()

    def handle(self, payload: dict) -> dict:
        """Dispatch an API payload and return a canonical response."""

        action = payload.get("action")
        if not action:
            raise KeyError("payload must include 'action'")
        params = payload.get("params", {})
        try:
            outcome = self.router.dispatch(action, params)
        except _InvalidSelector as exc:
            outcome = {"error": exc.error}
        except GraphLabError as exc:
            outcome = {"error": GraphError(exc.kind, exc.args[0] if exc.args else exc.kind.value)}
        except (TypeError, ValueError) as exc:
            outcome = {"error": GraphError(ErrorKind.VALIDATION, str(exc))}

        error: GraphError | None = outcome.get("error")
        if error is not None:
            LOGGER.debug("Action %s failed: %s", action, error.message)
            event = self.event_bus.emit(
                level="warning",
                msg=f"Action '{action}' failed: {error.message}",
                action=action,
                extras={"kind": error.kind.value},
            )
        else:
            event = self.event_bus.emit(
                level="info",
                msg=f"Executed action '{action}'",
                action=action,
                target_ids=outcome.get("target_ids"),
            )
        return {
            "ok": error is None,
            "result": _payload(outcome.get("result", {})) if error is None else None,
            "error": error.to_payload() if error is not None else None,
            "events": [event.to_payload()],
        }

    # ------------------------------------------------------------------
    # Query / mutation contract
    # ------------------------------------------------------------------

    def get_vertices(self) -> list[VertexId]:
        return self.store.vertices()

    def get_edges(self) -> list[Edge]:
        return self.store.edges()

    def get_graph_type(self) -> GraphType:
        return self.store.graph_type()

    def add_vertex(self, vertex_id: VertexId | None = None, **attributes: Any) -> VertexId:
        return self.store.add_vertex(vertex_id, **attributes)

    def add_edge(self, source: VertexId, target: VertexId, weight: float = 1.0) -> EdgeId:
        return self.store.add_edge(source, target, weight)

    def remove_vertex(self, vertex_id: VertexId) -> None:
        self.store.remove_vertex(vertex_id)

    def remove_edge(self, edge_id: EdgeId) -> None:
        self.store.remove_edge(edge_id)

    def set_edge_weight(self, edge_id: EdgeId, weight: float) -> None:
        self.store.set_edge_weight(edge_id, weight)

    def transition_graph_type(
        self, target: GraphType | str, merge_policy: MergePolicy | None = None
    ) -> TransitionResult:
        """Replace the current graph with a converted copy."""

        result = transition_graph_type(self.store, GraphType(target), merge_policy or self.merge_policy)
        self.store = result.graph
        return result

    def reset_from_document(self, document: InterchangeDocument | Mapping | str) -> InterchangeDocument | GraphError:
        """Replace the current graph with the contents of an interchange document.

        ``document`` may be JSON text, a decoded mapping or an already
        validated :class:`InterchangeDocument`. The current graph is kept
        when validation fails.
        """

        if isinstance(document, str):
            parsed = parse_document(document)
        elif isinstance(document, InterchangeDocument):
            parsed = document
        else:
            parsed = validate_document(document)
        if isinstance(parsed, GraphError):
            return parsed
        self.store = build_graph(parsed)
        return parsed

    def export_document(self) -> InterchangeDocument:
        return export_document(self.store)

    def generate_complete_graph(self, n: int) -> list[VertexId]:
        return generate_complete_graph(self.store, n)

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def shortest_path(
        self,
        source: VertexId,
        target: VertexId,
        algorithm: ShortestPathAlgorithm = ShortestPathAlgorithm.DIJKSTRA,
        use_weights: bool = True,
    ) -> ShortestPathResult | GraphError:
        return compute_shortest_path(self.store, source, target, algorithm, use_weights)

    def all_pairs_shortest_paths(
        self,
        algorithm: AllPairsAlgorithm = AllPairsAlgorithm.FLOYD_WARSHALL,
        use_weights: bool = True,
    ) -> AllPairsResult | GraphError:
        return compute_all_pairs(self.store, algorithm, use_weights)

    def minimum_spanning_tree(
        self,
        algorithm: MSTAlgorithm = MSTAlgorithm.KRUSKAL,
        start_vertex: Optional[VertexId] = None,
    ) -> MSTResult | GraphError:
        return compute_mst(self.store, algorithm, start_vertex)

    def color_graph(self) -> coloring.ColoringResult:
        return coloring.color_graph(self.store)

    def coloring_bounds(self) -> coloring.ColoringBounds:
        return coloring.coloring_bounds(self.store)

    def eulerian_path(self) -> eulerian.EulerianPathResult:
        return eulerian.find_path(self.store)

    def hamiltonian_path(self, max_vertices: int | None = None) -> hamiltonian.HamiltonianPathResult:
        return hamiltonian.find_path(self.store, max_vertices)

    def connectivity(self) -> dict:
        return {
            "is_connected": connectivity.is_connected(self.store),
            "is_weakly_connected": connectivity.is_weakly_connected(self.store),
            "is_strongly_connected": connectivity.is_strongly_connected(self.store),
        }

    # ------------------------------------------------------------------
    # Action handlers
    # ------------------------------------------------------------------

    def _register_default_actions(self) -> None:
        self.router.register("get_graph", self._handle_get_graph)
        self.router.register("add_vertex", self._handle_add_vertex)
        self.router.register("add_edge", self._handle_add_edge)
        self.router.register("remove_vertex", self._handle_remove_vertex)
        self.router.register("remove_edge", self._handle_remove_edge)
        self.router.register("set_edge_weight", self._handle_set_edge_weight)
        self.router.register("transition_graph_type", self._handle_transition)
        self.router.register("import_graph", self._handle_import_graph)
        self.router.register("export_graph", self._handle_export_graph)
        self.router.register("generate_complete_graph", self._handle_generate_complete_graph)
        self.router.register("shortest_path", self._handle_shortest_path)
        self.router.register("all_pairs_shortest_paths", self._handle_all_pairs)
        self.router.register("minimum_spanning_tree", self._handle_mst)
        self.router.register("color_graph", self._handle_color_graph)
        self.router.register("coloring_bounds", self._handle_coloring_bounds)
        self.router.register("eulerian_path", self._handle_eulerian_path)
        self.router.register("hamiltonian_path", self._handle_hamiltonian_path)
        self.router.register("connectivity", self._handle_connectivity)

    @staticmethod
    def _algorithm_outcome(value: Any, target_ids: Iterable[str] | None = None) -> dict:
        if isinstance(value, GraphError):
            return {"error": value}
        return {"result": value, "target_ids": list(target_ids or [])}

    def _handle_get_graph(self, params: dict) -> dict:
        return {
            "result": {
                "type": self.get_graph_type().value,
                "vertices": self.get_vertices(),
                "edges": self.get_edges(),
            }
        }

    def _handle_add_vertex(self, params: dict) -> dict:
        vertex_id = self.add_vertex(params.get("id"), **params.get("attributes", {}))
        return {"result": {"vertex_id": vertex_id}, "target_ids": [vertex_id]}

    def _handle_add_edge(self, params: dict) -> dict:
        edge_id = self.add_edge(params.get("source"), params.get("target"), params.get("weight", 1.0))
        return {"result": {"edge_id": edge_id}, "target_ids": [edge_id]}

    def _handle_remove_vertex(self, params: dict) -> dict:
        vertex_id = params.get("id")
        self.remove_vertex(vertex_id)
        return {"result": {"vertex_id": vertex_id}, "target_ids": [vertex_id]}

    def _handle_remove_edge(self, params: dict) -> dict:
        edge_id = params.get("id")
        self.remove_edge(edge_id)
        return {"result": {"edge_id": edge_id}, "target_ids": [edge_id]}

    def _handle_set_edge_weight(self, params: dict) -> dict:
        edge_id = params.get("id")
        if params.get("weight") is None:
            return {"error": GraphError(ErrorKind.VALIDATION, "Setting an edge weight requires a 'weight'")}
        self.set_edge_weight(edge_id, params.get("weight"))
        return {"result": {"edge_id": edge_id, "weight": self.store.get_edge(edge_id).weight}, "target_ids": [edge_id]}

    def _handle_transition(self, params: dict) -> dict:
        target = _parse_selector(GraphType, params.get("target"), None, "graph type")
        if target is None:
            return {"error": GraphError(ErrorKind.VALIDATION, "Transition requires a 'target' graph type")}
        policy = _parse_selector(MergePolicy, params.get("merge_policy"), None, "merge policy")
        result = self.transition_graph_type(target, policy)
        return {
            "result": {
                "type": target.value,
                "vertex_mapping": result.vertex_mapping,
                "edge_mapping": result.edge_mapping,
            }
        }

    def _handle_import_graph(self, params: dict) -> dict:
        document = params.get("json", params.get("document"))
        if document is None:
            return {"error": GraphError(ErrorKind.VALIDATION, "Import requires 'json' text or a 'document'")}
        parsed = self.reset_from_document(document)
        if isinstance(parsed, GraphError):
            return {"error": parsed}
        return {"result": {"vertex_count": len(parsed.vertices), "edge_count": len(parsed.edges)}}

    def _handle_export_graph(self, params: dict) -> dict:
        return {"result": self.export_document()}

    def _handle_generate_complete_graph(self, params: dict) -> dict:
        vertices = self.generate_complete_graph(int(params.get("n", 0)))
        return {"result": {"vertices": vertices}, "target_ids": vertices}

    def _handle_shortest_path(self, params: dict) -> dict:
        algorithm = _parse_selector(
            ShortestPathAlgorithm, params.get("algorithm"), ShortestPathAlgorithm.DIJKSTRA, "shortest path algorithm"
        )
        result = self.shortest_path(
            params.get("source"), params.get("target"), algorithm, params.get("use_weights", True)
        )
        return self._algorithm_outcome(result, getattr(result, "path", None))

    def _handle_all_pairs(self, params: dict) -> dict:
        algorithm = _parse_selector(
            AllPairsAlgorithm, params.get("algorithm"), AllPairsAlgorithm.FLOYD_WARSHALL, "all-pairs algorithm"
        )
        return self._algorithm_outcome(self.all_pairs_shortest_paths(algorithm, params.get("use_weights", True)))

    def _handle_mst(self, params: dict) -> dict:
        algorithm = _parse_selector(MSTAlgorithm, params.get("algorithm"), MSTAlgorithm.KRUSKAL, "MST algorithm")
        result = self.minimum_spanning_tree(algorithm, params.get("start_vertex"))
        edge_ids = [edge.id for edge in result.edges] if isinstance(result, MSTResult) else None
        return self._algorithm_outcome(result, edge_ids)

    def _handle_color_graph(self, params: dict) -> dict:
        return {"result": self.color_graph()}

    def _handle_coloring_bounds(self, params: dict) -> dict:
        bounds = self.coloring_bounds()
        return {"result": {"lower_bound": bounds.lower_bound, "upper_bound": bounds.upper_bound}}

    def _handle_eulerian_path(self, params: dict) -> dict:
        result = self.eulerian_path()
        return {"result": result, "target_ids": result.path}

    def _handle_hamiltonian_path(self, params: dict) -> dict:
        max_vertices = params.get("max_vertices")
        result = self.hamiltonian_path(int(max_vertices) if max_vertices is not None else None)
        return {"result": result, "target_ids": result.path}

    def _handle_connectivity(self, params: dict) -> dict:
        return {"result": self.connectivity()}


_APP = GraphLabApp()


def GraphLab_tool(payload: dict) -> dict:
    """Entry point exposed to external callers."""

    return _APP.handle(payload)
