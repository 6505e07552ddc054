"""Service test fixtures — FastAPI test client and session seeding.

Invariants:
    - Every test starts and ends with an empty in-memory session registry
    - Runs stream with zero delay (STEP_DELAY_MS=0 from the root conftest)

Design Decisions:
    - httpx AsyncClient over ASGITransport: no server, full middleware stack
    - seed_session builds graphs through the HTTP API, not by poking state,
      so route tests exercise the same path a browser does
"""

import pytest
from httpx import ASGITransport, AsyncClient

from graphwalk.api.routes.graph_lifecycle import _sessions
from graphwalk.main import app


@pytest.fixture
async def client():
    _sessions.clear()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    _sessions.clear()


@pytest.fixture
def seed_session(client):
    """Factory: create a session with n nodes and the given edges.

    Returns the session id (str).
    """

    async def _seed(n=0, edges=(), locale="en", graph_type="undirected"):
        res = await client.post(
            "/api/v1/graphs", json={"locale": locale, "graph_type": graph_type},
        )
        session_id = res.json()["id"]
        for i in range(n):
            await client.post(
                f"/api/v1/graphs/{session_id}/nodes",
                json={"x": 40.0 * i, "y": 20.0},
            )
        for edge in edges:
            source, target, *rest = edge
            body = {"source": source, "target": target}
            if rest:
                body["weight"] = rest[0]
            await client.post(f"/api/v1/graphs/{session_id}/edges", json=body)
        return session_id

    return _seed
