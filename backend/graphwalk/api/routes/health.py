"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up
"""

import logging
from fastapi import APIRouter, status

from graphwalk.api.routes.graph_lifecycle import _sessions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "graphwalk-api",
        "version": "1.0.0",
        "sessions": len(_sessions),
        "active_runs": sum(1 for s in _sessions.values() if s.is_running),
    }
