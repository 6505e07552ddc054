"""Traversal Events — pure SSE event builders for a traversal run.

Invariants:
    - All functions are pure (stateless, deterministic)
    - SSE event dicts follow the Graphwalk SSE protocol (type + data keys)
    - step events embed a full snapshot, never a diff

Design Decisions:
    - Extracted from traversal_engine.py so the protocol shape is testable
      without running an algorithm
"""

from graphwalk.core.domain_types import Algorithm, StepLabel


def step_event(
    seq: int, label: StepLabel, target: dict | None, snapshot: dict,
) -> dict:
    return {
        "type": "step",
        "data": {
            "seq": seq,
            "label": label.value,
            "target": target,
            "snapshot": snapshot,
        },
    }


def node_target(node_id: int) -> dict:
    return {"kind": "node", "id": node_id}


def edge_target(source: int, target: int, edge_ids: list[int]) -> dict:
    return {"kind": "edge", "source": source, "target": target, "ids": edge_ids}


def done_event(algorithm: Algorithm, steps: int, cancelled: bool = False,
               error: bool = False) -> dict:
    return {
        "type": "done",
        "data": {
            "algorithm": algorithm.value,
            "steps": steps,
            "cancelled": cancelled,
            "error": error,
        },
    }

