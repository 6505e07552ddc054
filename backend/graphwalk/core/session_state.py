"""Session State — explicit owned state for one interactive graph session.

Invariants:
    - is_running is the run lock: while held, every intent except set_locale
      and request_cancel is rejected
    - start_node is cleared whenever the algorithm is set
    - selected_node / start_node always reference an existing node or are None
    - Intents never raise: they return the new id / True when accepted and
      None / False when silently rejected

Design Decisions:
    - Dataclass with computed properties: pure, deterministic, testable without mocks
    - The engine mutates visit_state through graph only; structure is owned here
    - Selection survives node deletion by following the renumbering (a start node
      keeps pointing at the same node, not at whatever inherits its old id)
"""

from dataclasses import dataclass, field

from graphwalk.core.domain_types import (
    Algorithm, EdgeId, GraphType, Locale, NodeId,
)
from graphwalk.core.graph_model import GraphModel


@dataclass
class SessionState:
    """Per-session graph, run selection and run lock — pure dataclass, no IO."""

    graph: GraphModel = field(default_factory=GraphModel)
    graph_type: GraphType = GraphType.UNDIRECTED
    algorithm: Algorithm = Algorithm.NONE
    start_node: NodeId | None = None
    selected_node: NodeId | None = None
    locale: Locale = Locale.FR

    # Run lock + cooperative cancellation flag (set by request_cancel)
    is_running: bool = False
    cancel_requested: bool = False

    @property
    def can_run(self) -> bool:
        return (
            not self.is_running
            and self.algorithm != Algorithm.NONE
            and self.start_node is not None
            and self.graph.has_node(self.start_node)
        )

    @property
    def status_key(self) -> str:
        """Key of the help message shown under the canvas."""
        if self.algorithm == Algorithm.NONE:
            return "add_nodes"
        if self.start_node is None:
            return "select_start"
        if self.is_running:
            return "running"
        return "ready_to_run"

    # ─── Graph intents ───────────────────────────────────────────

    def add_node(self, x: float, y: float) -> NodeId | None:
        if self.is_running:
            return None
        return self.graph.add_node(x, y)

    def add_edge(
        self, source: NodeId, target: NodeId, weight: float = 1.0,
    ) -> EdgeId | None:
        if self.is_running:
            return None
        if not (self.graph.has_node(source) and self.graph.has_node(target)):
            return None
        return self.graph.add_edge(source, target, weight)

    def delete_node(self, node_id: NodeId) -> bool:
        if self.is_running or not self.graph.delete_node(node_id):
            return False
        self.selected_node = _follow_renumbering(self.selected_node, node_id)
        self.start_node = _follow_renumbering(self.start_node, node_id)
        return True

    def click_canvas(self, x: float, y: float) -> NodeId | None:
        """Empty-canvas click: place a node, or drop the current selection."""
        if self.is_running:
            return None
        if self.selected_node is None:
            return self.graph.add_node(x, y)
        self.selected_node = None
        return None

    def click_node(self, node_id: NodeId) -> bool:
        """Node click: pick start node, select, connect, or deselect."""
        if self.is_running or not self.graph.has_node(node_id):
            return False
        if self.algorithm != Algorithm.NONE and self.start_node is None:
            self.start_node = node_id
        elif self.selected_node is None:
            self.selected_node = node_id
        elif self.selected_node != node_id:
            self.graph.add_edge(self.selected_node, node_id)
            self.selected_node = None
        else:
            self.selected_node = None
        return True

    def reset(self) -> bool:
        """Clear the whole graph and the selection. Modes are kept."""
        if self.is_running:
            return False
        self.graph.clear()
        self.selected_node = None
        self.start_node = None
        return True

    # ─── Selection intents ───────────────────────────────────────

    def set_graph_type(self, graph_type: GraphType) -> bool:
        if self.is_running:
            return False
        self.graph_type = graph_type
        return True

    def set_algorithm(self, algorithm: Algorithm) -> bool:
        if self.is_running:
            return False
        self.algorithm = algorithm
        self.start_node = None
        return True

    def set_start_node(self, node_id: NodeId) -> bool:
        if self.is_running or not self.graph.has_node(node_id):
            return False
        self.start_node = node_id
        return True

    def clear_start_node(self) -> bool:
        if self.is_running:
            return False
        self.start_node = None
        return True

    def set_locale(self, locale: Locale) -> None:
        self.locale = locale

    def request_cancel(self) -> bool:
        """Ask the active run to stop after its current pause."""
        if not self.is_running:
            return False
        self.cancel_requested = True
        return True


def _follow_renumbering(
    ref: NodeId | None, deleted: NodeId,
) -> NodeId | None:
    if ref is None or ref == deleted:
        return None
    return NodeId(ref - 1) if ref > deleted else ref
