"""Graph Editing — node/edge intents, clicks and run selection.

Invariants:
    - Every intent here is refused with 409 while a run is active
    - Unknown node ids are 404; self-loops are accepted=false (silent no-op)
    - Picking an algorithm always clears the start node

Design Decisions:
    - Click endpoints mirror the canvas interaction one-to-one, explicit
      endpoints (nodes, edges, start-node) serve scripted clients
    - Node/edge structure mutations delegate to SessionState intents only
"""

import logging
from uuid import UUID

from fastapi import APIRouter

from graphwalk.core.domain_types import NodeId
from graphwalk.core.errors import ErrorContext, ResourceNotFoundError
from graphwalk.core.session_state import SessionState
from graphwalk.api.routes.graph_lifecycle import (
    ensure_not_running, get_state_or_404, intent_response,
)
from graphwalk.schemas.graph import (
    AlgorithmUpdate, EdgeCreate, GraphTypeUpdate, IntentResponse, Point,
    StartNodeUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/graphs", tags=["graphs"])


def _editable_state(session_id: UUID, intent: str) -> SessionState:
    state = get_state_or_404(session_id)
    ensure_not_running(state, session_id, intent)
    return state


def _require_node(state: SessionState, session_id: UUID, node_id: int) -> NodeId:
    if not state.graph.has_node(NodeId(node_id)):
        raise ResourceNotFoundError(
            "Node", str(node_id),
            ErrorContext(session_id=str(session_id), node_id=node_id),
        )
    return NodeId(node_id)


# -- Structure -----------------------------------------------------------------


@router.post("/{session_id}/nodes", response_model=IntentResponse)
async def add_node(session_id: UUID, body: Point):
    state = _editable_state(session_id, "add_node")
    node_id = state.add_node(body.x, body.y)
    return intent_response(state, node_id is not None, node_id=node_id)


@router.delete("/{session_id}/nodes/{node_id}", response_model=IntentResponse)
async def delete_node(session_id: UUID, node_id: int):
    state = _editable_state(session_id, "delete_node")
    accepted = state.delete_node(_require_node(state, session_id, node_id))
    if accepted:
        logger.info("Node %s deleted", node_id,
                    extra={"session_id": str(session_id), "node_id": node_id})
    return intent_response(state, accepted)


@router.post("/{session_id}/edges", response_model=IntentResponse)
async def add_edge(session_id: UUID, body: EdgeCreate):
    state = _editable_state(session_id, "add_edge")
    source = _require_node(state, session_id, body.source)
    target = _require_node(state, session_id, body.target)
    edge_id = state.add_edge(source, target, body.weight)
    return intent_response(state, edge_id is not None, edge_id=edge_id)


# -- Clicks --------------------------------------------------------------------


@router.post("/{session_id}/canvas-click", response_model=IntentResponse)
async def click_canvas(session_id: UUID, body: Point):
    """Place a node, or drop the current selection."""
    state = _editable_state(session_id, "click_canvas")
    node_id = state.click_canvas(body.x, body.y)
    return intent_response(state, True, node_id=node_id)


@router.post("/{session_id}/nodes/{node_id}/click", response_model=IntentResponse)
async def click_node(session_id: UUID, node_id: int):
    """Pick start node, select, connect to the selection, or deselect."""
    state = _editable_state(session_id, "click_node")
    edges_before = len(state.graph.edges)
    accepted = state.click_node(_require_node(state, session_id, node_id))
    edge_id = (len(state.graph.edges) - 1
               if len(state.graph.edges) > edges_before else None)
    return intent_response(state, accepted, edge_id=edge_id)


# -- Run selection -------------------------------------------------------------


@router.put("/{session_id}/graph-type", response_model=IntentResponse)
async def set_graph_type(session_id: UUID, body: GraphTypeUpdate):
    state = _editable_state(session_id, "set_graph_type")
    return intent_response(state, state.set_graph_type(body.graph_type))


@router.put("/{session_id}/algorithm", response_model=IntentResponse)
async def set_algorithm(session_id: UUID, body: AlgorithmUpdate):
    state = _editable_state(session_id, "set_algorithm")
    return intent_response(state, state.set_algorithm(body.algorithm))


@router.put("/{session_id}/start-node", response_model=IntentResponse)
async def set_start_node(session_id: UUID, body: StartNodeUpdate):
    state = _editable_state(session_id, "set_start_node")
    node_id = _require_node(state, session_id, body.node_id)
    return intent_response(state, state.set_start_node(node_id))


@router.delete("/{session_id}/start-node", response_model=IntentResponse)
async def clear_start_node(session_id: UUID):
    state = _editable_state(session_id, "clear_start_node")
    return intent_response(state, state.clear_start_node())
