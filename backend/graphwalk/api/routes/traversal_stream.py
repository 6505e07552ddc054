"""Traversal Stream — SSE delivery of an animated run, plus cancellation.

Invariants:
    - Every stream instantiates a fresh TraversalEngine with the configured delay
    - Guard violations are reported before the stream opens (409 / 400)
    - One SSE line per engine event, flushed in order

Design Decisions:
    - StreamingResponse for SSE: event_generator yields formatted SSE lines
    - The handler pulls the first (reset) event itself: guard check and lock
      acquisition run with no await between them, so of two concurrent
      requests exactly one streams and the other gets 409
    - The stream closes the engine generator on exit, releasing the lock even
      when the client leaves mid-run
"""

import asyncio
import json
import logging
from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from graphwalk.config import get_settings
from graphwalk.core.domain_types import Algorithm
from graphwalk.core.errors import (
    ErrorContext, RunInProgressError, RunNotReadyError,
)
from graphwalk.services.traversal_engine import TraversalEngine
from graphwalk.api.routes.graph_lifecycle import (
    ensure_not_running, get_state_or_404,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/graphs", tags=["traversal"])

# SSE headers prevent proxy/browser buffering of streamed events.
# Without these, nginx (X-Accel-Buffering) and browsers (Cache-Control)
# may batch small chunks and merge animation frames.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


@router.get("/{session_id}/run")
async def run_traversal(session_id: UUID):
    """SSE stream — one step event per mark, then done."""
    state = get_state_or_404(session_id)
    ensure_not_running(state, session_id, "run")
    missing = _missing_run_inputs(state)
    if missing:
        raise RunNotReadyError(
            missing, ErrorContext(session_id=str(session_id), intent="run"),
        )

    events = _create_engine().run(state, str(session_id))
    # Pulling the reset step takes the run lock before the response is returned
    first = await anext(events, None)
    if first is None:
        raise RunInProgressError(
            ErrorContext(session_id=str(session_id), intent="run"),
        )

    async def event_generator():
        try:
            yield _sse_line(first)
            async for event in events:
                yield _sse_line(event)
        except asyncio.CancelledError:
            logger.info("Client disconnected from run stream (session=%s)", session_id)
            return
        finally:
            await events.aclose()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


@router.post("/{session_id}/cancel")
async def cancel_run(session_id: UUID):
    """Ask the active run to stop after its current pause."""
    state = get_state_or_404(session_id)
    cancelled = state.request_cancel()
    if cancelled:
        logger.info("Run cancellation requested", extra={"session_id": str(session_id)})
    return {"cancelled": cancelled}


# -- Helpers -------------------------------------------------------------------


def _create_engine() -> TraversalEngine:
    return TraversalEngine(step_delay_ms=get_settings().step_delay_ms)


def _missing_run_inputs(state) -> list[str]:
    missing = []
    if state.algorithm == Algorithm.NONE:
        missing.append("algorithm")
    if state.start_node is None or not state.graph.has_node(state.start_node):
        missing.append("start_node")
    return missing


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
