"""Graph Model — mutable nodes/edges with adjacency and weight queries.

Invariants:
    - Node ids are contiguous [0, n) and node.label == str(node.id) at all times
    - Edge ids are contiguous [0, m); a new edge gets id len(edges)
    - No self-loops: add_edge(a, a) is a no-op
    - Deleting a node cascades to every incident edge; survivors are renumbered
      in their original relative order, edge endpoints rewritten to match
    - neighbors() follows edge insertion order and is not deduplicated

Design Decisions:
    - Positional ids (id == list index): O(1) lookup, renumbering is a single pass
    - Rejections return None/False instead of raising: invalid intents are not
      errors in the core, the HTTP shell decides how to surface them
    - Edge weight is write-once: no setter exists
"""

import math
from dataclasses import dataclass, field

from graphwalk.core.domain_types import EdgeId, GraphType, NodeId, VisitState


@dataclass
class Node:
    id: NodeId
    x: float
    y: float
    label: str
    visit_state: VisitState = VisitState.UNVISITED


@dataclass
class Edge:
    id: EdgeId
    source: NodeId
    target: NodeId
    weight: float = 1.0
    visit_state: VisitState = VisitState.UNVISITED

    def joins(self, a: NodeId, b: NodeId) -> bool:
        """True if the edge connects a and b in either orientation."""
        return (self.source, self.target) in ((a, b), (b, a))


@dataclass
class GraphModel:
    """Owns every node and edge of one session."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    # ─── Structure ───────────────────────────────────────────────

    def add_node(self, x: float, y: float) -> NodeId:
        node_id = NodeId(len(self.nodes))
        self.nodes.append(Node(id=node_id, x=x, y=y, label=str(node_id)))
        return node_id

    def add_edge(
        self, source: NodeId, target: NodeId, weight: float = 1.0,
    ) -> EdgeId | None:
        if source == target:
            return None
        edge_id = EdgeId(len(self.edges))
        self.edges.append(
            Edge(id=edge_id, source=source, target=target, weight=weight),
        )
        return edge_id

    def delete_node(self, node_id: NodeId) -> bool:
        """Remove a node, cascade its edges, renumber the survivors."""
        if not self.has_node(node_id):
            return False

        self.nodes = [n for n in self.nodes if n.id != node_id]
        for index, node in enumerate(self.nodes):
            node.id = NodeId(index)
            node.label = str(index)

        self.edges = [
            e for e in self.edges
            if e.source != node_id and e.target != node_id
        ]
        for index, edge in enumerate(self.edges):
            edge.id = EdgeId(index)
            edge.source = _shift(edge.source, node_id)
            edge.target = _shift(edge.target, node_id)
        return True

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()

    # ─── Queries ─────────────────────────────────────────────────

    def has_node(self, node_id: NodeId) -> bool:
        return 0 <= node_id < len(self.nodes)

    def neighbors(self, node_id: NodeId, graph_type: GraphType) -> list[NodeId]:
        """Adjacent node ids in edge insertion order (parallel edges repeat)."""
        result: list[NodeId] = []
        for edge in self.edges:
            if edge.source == node_id:
                result.append(edge.target)
            elif graph_type != GraphType.DIRECTED and edge.target == node_id:
                result.append(edge.source)
        return result

    def edge_weight(
        self, source: NodeId, target: NodeId, graph_type: GraphType,
    ) -> float:
        """Weight of the first matching edge, math.inf when there is none."""
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge.weight
            if (graph_type != GraphType.DIRECTED
                    and edge.source == target and edge.target == source):
                return edge.weight
        return math.inf

    # ─── Visitation ──────────────────────────────────────────────

    def reset_visitation(self) -> None:
        for node in self.nodes:
            node.visit_state = VisitState.UNVISITED
        for edge in self.edges:
            edge.visit_state = VisitState.UNVISITED

    def set_node_state(self, node_id: NodeId, state: VisitState) -> None:
        self.nodes[node_id].visit_state = state

    def set_edges_between(
        self, a: NodeId, b: NodeId, state: VisitState,
    ) -> list[EdgeId]:
        """Mark every edge joining a and b (both orientations). Returns touched ids."""
        touched: list[EdgeId] = []
        for edge in self.edges:
            if edge.joins(a, b):
                edge.visit_state = state
                touched.append(edge.id)
        return touched


def _shift(endpoint: NodeId, deleted: NodeId) -> NodeId:
    return NodeId(endpoint - 1) if endpoint > deleted else endpoint
