"""Traversal Events — pure SSE event builders.

Tests cover:
    - step event shape and label serialization
    - node / edge targets
    - done event flags
"""

from graphwalk.core.domain_types import Algorithm, StepLabel
from graphwalk.services.traversal_events import (
    done_event, edge_target, node_target, step_event,
)


def test_step_event_shape():
    event = step_event(3, StepLabel.NODE_VISITING, node_target(2), {"nodes": []})
    assert event == {
        "type": "step",
        "data": {
            "seq": 3,
            "label": "node_visiting",
            "target": {"kind": "node", "id": 2},
            "snapshot": {"nodes": []},
        },
    }


def test_edge_target_lists_touched_ids():
    assert edge_target(0, 1, [0, 4]) == {
        "kind": "edge", "source": 0, "target": 1, "ids": [0, 4],
    }


def test_done_event_defaults():
    assert done_event(Algorithm.BFS, 9)["data"] == {
        "algorithm": "bfs", "steps": 9, "cancelled": False, "error": False,
    }


def test_done_event_cancelled():
    assert done_event(Algorithm.DIJKSTRA, 2, cancelled=True)["data"]["cancelled"]

