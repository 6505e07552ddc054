"""Graph Session Lifecycle — create/read/delete/reset and the in-memory registry.

Invariants:
    - SessionState is per-session, in-memory (module-level dict)
    - _sessions dict is the single source for session state
    - Deleting a session with an active run requests its cancellation first
    - Reset is refused while a run holds the lock (cancel first)

Design Decisions:
    - _sessions as module-level dict: single-process uvicorn, no persistence
      (graphs are throwaway by design, state lost on restart)
    - get_state_or_404 / ensure_not_running exported for the other route modules
"""

import logging
from uuid import UUID, uuid4

from fastapi import APIRouter, Response, status

from graphwalk.config import get_settings
from graphwalk.core.errors import (
    ErrorContext, ResourceNotFoundError, RunInProgressError,
)
from graphwalk.core.session_state import SessionState
from graphwalk.core.state_snapshot import session_to_snapshot
from graphwalk.schemas.graph import (
    IntentResponse, LocaleUpdate, SessionCreate, SessionResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/graphs", tags=["graphs"])

_sessions: dict[UUID, SessionState] = {}


def get_state_or_404(session_id: UUID) -> SessionState:
    """Get session state or raise 404. Exported for the other route modules."""
    state = _sessions.get(session_id)
    if state is None:
        raise ResourceNotFoundError(
            "Graph session", str(session_id),
            ErrorContext(session_id=str(session_id)),
        )
    return state


def ensure_not_running(state: SessionState, session_id: UUID, intent: str) -> None:
    """Surface the run lock as 409 instead of a silent rejection."""
    if state.is_running:
        raise RunInProgressError(
            ErrorContext(session_id=str(session_id), intent=intent),
        )


def intent_response(state: SessionState, accepted: bool, **ids) -> IntentResponse:
    return IntentResponse(
        accepted=accepted, snapshot=session_to_snapshot(state), **ids,
    )


@router.post(
    "", response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(body: SessionCreate):
    """Create a new, empty graph session."""
    state = SessionState(
        graph_type=body.graph_type,
        locale=body.locale or get_settings().default_locale,
    )
    session_id = uuid4()
    _sessions[session_id] = state
    logger.info("Graph session created", extra={"session_id": str(session_id)})
    return SessionResponse(id=session_id, snapshot=session_to_snapshot(state))


@router.get("/{session_id}")
async def get_session(session_id: UUID):
    """Current snapshot of a session."""
    return session_to_snapshot(get_state_or_404(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID):
    """Drop a session. An active run is asked to stop at its next pause."""
    state = get_state_or_404(session_id)
    if state.request_cancel():
        logger.info("Cancelling active run of deleted session",
            extra={"session_id": str(session_id)})
    _sessions.pop(session_id, None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/reset", response_model=IntentResponse)
async def reset_session(session_id: UUID):
    """Clear all nodes, edges and the selection."""
    state = get_state_or_404(session_id)
    ensure_not_running(state, session_id, "reset")
    return intent_response(state, state.reset())


@router.put("/{session_id}/locale", response_model=IntentResponse)
async def set_locale(session_id: UUID, body: LocaleUpdate):
    """Switch UI locale. Allowed during a run."""
    state = get_state_or_404(session_id)
    state.set_locale(body.locale)
    return intent_response(state, True)
