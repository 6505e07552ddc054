"""State Snapshot — serialization of SessionState into an observable snapshot.

Invariants:
    - session_to_snapshot produces a JSON-safe dict (no Enums, no dataclasses)
    - Every call builds fresh containers: a published snapshot never changes
      when the session mutates afterwards
    - Edge geometry is derived from the current node positions

Design Decisions:
    - Rendering hints (colors, arrow angle, weight label position, status
      message) computed here so the front-end stays a dumb renderer
    - show_weights / show_arrows derived from graph_type, not stored
"""

import math

from graphwalk.core.domain_types import EDGE_COLORS, NODE_COLORS, GraphType
from graphwalk.core.graph_model import Edge, GraphModel, Node
from graphwalk.core.language_strings import get_message
from graphwalk.core.session_state import SessionState

# Weight label sits slightly above the edge midpoint
_WEIGHT_LABEL_OFFSET = 5.0


def _serialize_node(node: Node, state: SessionState) -> dict:
    return {
        "id": node.id,
        "x": node.x,
        "y": node.y,
        "label": node.label,
        "visit_state": node.visit_state.value,
        "color": NODE_COLORS[node.visit_state],
        "is_start": node.id == state.start_node,
        "is_selected": node.id == state.selected_node,
    }


def edge_geometry(edge: Edge, graph: GraphModel) -> dict:
    """Line endpoints, arrow rotation (degrees) and weight label anchor."""
    source = graph.nodes[edge.source]
    target = graph.nodes[edge.target]
    angle = math.degrees(
        math.atan2(target.y - source.y, target.x - source.x),
    )
    return {
        "x1": source.x,
        "y1": source.y,
        "x2": target.x,
        "y2": target.y,
        "angle_deg": angle,
        "label_x": (source.x + target.x) / 2,
        "label_y": (source.y + target.y) / 2 - _WEIGHT_LABEL_OFFSET,
    }


def _serialize_edge(edge: Edge, graph: GraphModel) -> dict:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "weight": edge.weight,
        "visit_state": edge.visit_state.value,
        "color": EDGE_COLORS[edge.visit_state],
        "geometry": edge_geometry(edge, graph),
    }


def session_to_snapshot(state: SessionState) -> dict:
    """Serialize SessionState to a JSON-safe dict. Pure, no IO."""
    graph = state.graph
    return {
        "nodes": [_serialize_node(n, state) for n in graph.nodes],
        "edges": [_serialize_edge(e, graph) for e in graph.edges],
        "graph_type": state.graph_type.value,
        "algorithm": state.algorithm.value,
        "start_node": state.start_node,
        "selected_node": state.selected_node,
        "is_running": state.is_running,
        "can_run": state.can_run,
        "show_weights": state.graph_type == GraphType.WEIGHTED,
        "show_arrows": state.graph_type == GraphType.DIRECTED,
        "locale": state.locale.value,
        "status_message": get_message(state.locale, state.status_key),
    }
