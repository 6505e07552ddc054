"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NodeId and EdgeId wrap ints; both are positional and contiguous from 0
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (SSE payloads are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

NodeId = NewType("NodeId", int)
EdgeId = NewType("EdgeId", int)


# ─── Enums ───────────────────────────────────────────────────────

class VisitState(str, Enum):
    """Per-node / per-edge animation marker. Monotonic within one run."""
    UNVISITED = "unvisited"
    VISITING = "visiting"
    VISITED = "visited"


class GraphType(str, Enum):
    """Global adjacency mode. Only DIRECTED makes adjacency one-way."""
    UNDIRECTED = "undirected"
    DIRECTED = "directed"
    WEIGHTED = "weighted"


class Algorithm(str, Enum):
    """Traversal selectable for a run. NONE means the user is still editing."""
    NONE = "none"
    DFS = "dfs"
    BFS = "bfs"
    DIJKSTRA = "dijkstra"


class Locale(str, Enum):
    """UI locales with a full string table."""
    FR = "fr"
    EN = "en"


class StepLabel(str, Enum):
    """Label attached to every published snapshot."""
    RESET = "reset"
    NODE_VISITING = "node_visiting"
    NODE_VISITED = "node_visited"
    EDGE_VISITING = "edge_visiting"
    EDGE_VISITED = "edge_visited"


# ─── Rendering ───────────────────────────────────────────────────

NODE_COLORS: dict[VisitState, str] = {
    VisitState.UNVISITED: "#1e293b",
    VisitState.VISITING: "#eab308",
    VisitState.VISITED: "#22c55e",
}

EDGE_COLORS: dict[VisitState, str] = {
    VisitState.UNVISITED: "#1e293b",
    VisitState.VISITING: "#eab308",
    VisitState.VISITED: "#22c55e",
}
