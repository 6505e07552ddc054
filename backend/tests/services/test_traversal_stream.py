"""Traversal Stream — SSE run endpoint and cancellation over HTTP.

Invariants:
    - GET /run streams text/event-stream, one data line per engine event
    - Stream ends with a done event; run lock released afterwards
    - Missing algorithm / start node → 400 RUN_NOT_READY before streaming
    - Run while running → 409 RUN_IN_PROGRESS, including a second request
      arriving before the first stream is consumed
    - POST /cancel reports whether a run was actually cancelled

Design Decisions:
    - ASGITransport buffers the full body, so events are parsed after the fact
    - STEP_DELAY_MS=0 keeps the stream instant
"""

import json
from uuid import UUID

import pytest

from graphwalk.api.routes.graph_lifecycle import _sessions
from graphwalk.api.routes.traversal_stream import run_traversal
from graphwalk.core.errors import RunInProgressError


def _parse_sse(text):
    return [
        json.loads(chunk[len("data: "):])
        for chunk in text.split("\n\n")
        if chunk.startswith("data: ")
    ]


async def _prepare(client, seed_session, algorithm, n, edges, start=0, **kw):
    session_id = await seed_session(n, edges, **kw)
    base = f"/api/v1/graphs/{session_id}"
    await client.put(f"{base}/algorithm", json={"algorithm": algorithm})
    await client.put(f"{base}/start-node", json={"node_id": start})
    return session_id


async def test_dfs_stream_emits_steps_then_done(client, seed_session):
    session_id = await _prepare(client, seed_session, "dfs", 3, [(0, 1), (1, 2)])
    res = await client.get(f"/api/v1/graphs/{session_id}/run")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/event-stream")
    assert res.headers["cache-control"] == "no-cache"

    events = _parse_sse(res.text)
    steps = [e for e in events if e["type"] == "step"]
    assert len(steps) == 11
    assert steps[0]["data"]["label"] == "reset"
    assert events[-1]["type"] == "done"
    assert events[-1]["data"]["algorithm"] == "dfs"


async def test_stream_leaves_final_state_on_session(client, seed_session):
    session_id = await _prepare(client, seed_session, "bfs", 3, [(0, 1)])
    await client.get(f"/api/v1/graphs/{session_id}/run")

    snapshot = (await client.get(f"/api/v1/graphs/{session_id}")).json()
    assert snapshot["is_running"] is False
    assert [n["visit_state"] for n in snapshot["nodes"]] == [
        "visited", "visited", "unvisited",
    ]
    assert snapshot["edges"][0]["visit_state"] == "visiting"


async def test_dijkstra_stream_order(client, seed_session):
    session_id = await _prepare(
        client, seed_session, "dijkstra", 3,
        [(0, 1, 4), (0, 2, 1), (2, 1, 1)], graph_type="weighted",
    )
    res = await client.get(f"/api/v1/graphs/{session_id}/run")
    visiting = [
        e["data"]["target"]["id"] for e in _parse_sse(res.text)
        if e["type"] == "step" and e["data"]["label"] == "node_visiting"
    ]
    assert visiting == [0, 2, 1]


async def test_run_without_start_node_is_400(client, seed_session):
    session_id = await seed_session(2, [(0, 1)])
    await client.put(
        f"/api/v1/graphs/{session_id}/algorithm", json={"algorithm": "bfs"},
    )
    res = await client.get(f"/api/v1/graphs/{session_id}/run")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "RUN_NOT_READY"
    assert "start_node" in error["message"]


async def test_run_without_algorithm_is_400(client, seed_session):
    session_id = await seed_session(2)
    await client.put(
        f"/api/v1/graphs/{session_id}/start-node", json={"node_id": 0},
    )
    res = await client.get(f"/api/v1/graphs/{session_id}/run")
    assert res.status_code == 400
    assert "algorithm" in res.json()["error"]["message"]


async def test_run_while_running_is_409(client, seed_session):
    session_id = await _prepare(client, seed_session, "dfs", 2, [(0, 1)])
    _sessions[UUID(session_id)].is_running = True
    res = await client.get(f"/api/v1/graphs/{session_id}/run")
    assert res.status_code == 409


async def test_run_unknown_session_is_404(client):
    res = await client.get(
        "/api/v1/graphs/00000000-0000-0000-0000-000000000000/run",
    )
    assert res.status_code == 404


async def test_cancel_idle_session_reports_false(client, seed_session):
    session_id = await seed_session(1)
    res = await client.post(f"/api/v1/graphs/{session_id}/cancel")
    assert res.json() == {"cancelled": False}


async def test_cancel_running_session_sets_flag(client, seed_session):
    session_id = await seed_session(1)
    state = _sessions[UUID(session_id)]
    state.is_running = True
    res = await client.post(f"/api/v1/graphs/{session_id}/cancel")
    assert res.json() == {"cancelled": True}
    assert state.cancel_requested


async def test_rerun_resets_previous_visitation(client, seed_session):
    session_id = await _prepare(client, seed_session, "dfs", 2, [(0, 1)])
    await client.get(f"/api/v1/graphs/{session_id}/run")
    res = await client.get(f"/api/v1/graphs/{session_id}/run")
    reset = _parse_sse(res.text)[0]["data"]
    assert reset["label"] == "reset"
    assert {n["visit_state"] for n in reset["snapshot"]["nodes"]} == {"unvisited"}


async def test_run_lock_taken_before_stream_is_consumed(client, seed_session):
    session_id = await _prepare(client, seed_session, "dfs", 3, [(0, 1), (1, 2)])
    state = _sessions[UUID(session_id)]

    response = await run_traversal(UUID(session_id))
    assert state.is_running

    with pytest.raises(RunInProgressError):
        await run_traversal(UUID(session_id))

    first = await response.body_iterator.__anext__()
    assert '"label": "reset"' in first
    await response.body_iterator.aclose()
    assert not state.is_running
