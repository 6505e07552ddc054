"""Traversal Engine — animated DFS / BFS / Dijkstra as an async event stream.

Invariants:
    - One run per SessionState at a time: the is_running flag is checked and
      set with no await in between, and released in `finally` whatever happens
    - A rejected run yields nothing and mutates nothing
    - Every mark is published as its own step event with a fresh snapshot;
      the generator does not advance until the consumer pulls, so no two
      marks are ever coalesced into one frame
    - The only suspension point is the pause after a node is marked visiting;
      cancellation is observed right after it
    - DFS marks edges visited on backtrack; BFS and Dijkstra leave them visiting

Design Decisions:
    - Async generator over callbacks: ordered, back-pressured delivery for free
    - Algorithm, start node and graph type captured at run start; step count,
      visit order and Dijkstra tables cleared per run, so an engine is reusable
    - DFS is real recursion over nested generators (graphs are hand-placed, small)
    - Dijkstra uses a linear scan, ties broken by node order; distances and
      predecessors kept on the engine instance, never published
    - sleep injectable so tests can assert pacing without waiting
"""

import asyncio
import logging
import math
from collections import deque

from graphwalk.core.domain_types import (
    Algorithm, GraphType, NodeId, StepLabel, VisitState,
)
from graphwalk.core.errors import ErrorContext, InternalError
from graphwalk.core.session_state import SessionState
from graphwalk.core.state_snapshot import session_to_snapshot
from graphwalk.services.traversal_events import (
    done_event, edge_target, node_target, step_event,
)

logger = logging.getLogger(__name__)


class RunCancelled(Exception):
    """Raised inside a walk when the session asked the run to stop."""


class TraversalEngine:
    """Runs one traversal and streams its steps as SSE events."""

    DEFAULT_STEP_DELAY_MS = 500

    def __init__(self, step_delay_ms: int = DEFAULT_STEP_DELAY_MS, sleep=asyncio.sleep):
        self.step_delay = step_delay_ms / 1000
        self._sleep = sleep
        self._clear_results()

    async def run(self, state: SessionState, session_id: str | None = None):
        """Async generator yielding step events, then a single done event."""
        log_extra = {"session_id": session_id, "algorithm": state.algorithm.value}
        if state.is_running:
            logger.warning("Run rejected: traversal already active", extra=log_extra)
            return
        if not state.can_run:
            logger.warning("Run rejected: no algorithm or start node", extra=log_extra)
            return

        state.is_running = True
        state.cancel_requested = False
        self._clear_results()
        algorithm, start, graph_type = (
            state.algorithm, state.start_node, state.graph_type,
        )
        logger.info("Traversal started from node %s", start, extra=log_extra)

        try:
            state.graph.reset_visitation()
            yield self._publish(state, StepLabel.RESET, None)
            async for event in self._walk(algorithm)(state, start, graph_type):
                yield event
            logger.info("Traversal finished", extra={**log_extra, "steps": self.steps})
            yield done_event(algorithm, self.steps)
        except RunCancelled:
            logger.info("Traversal cancelled", extra={**log_extra, "steps": self.steps})
            yield done_event(algorithm, self.steps, cancelled=True)
        except asyncio.CancelledError:
            logger.info("Traversal stream cancelled (client disconnect)", extra=log_extra)
            raise
        except Exception as e:
            logger.error("Unexpected error in traversal: %s", e,
                extra=log_extra, exc_info=True)
            yield InternalError(ErrorContext(
                session_id=session_id, intent="run",
            )).to_sse_event()
            yield done_event(algorithm, self.steps, error=True)
        finally:
            state.is_running = False
            state.cancel_requested = False

    def _clear_results(self) -> None:
        self.steps = 0
        self.visit_order: list[NodeId] = []
        self.distances: dict[NodeId, float] = {}
        self.previous: dict[NodeId, NodeId | None] = {}

    def _walk(self, algorithm: Algorithm):
        return {
            Algorithm.DFS: self._dfs,
            Algorithm.BFS: self._bfs,
            Algorithm.DIJKSTRA: self._dijkstra,
        }[algorithm]

    # -- Step primitive --------------------------------------------------------

    def _publish(self, state: SessionState, label: StepLabel, target: dict | None) -> dict:
        self.steps += 1
        return step_event(self.steps, label, target, session_to_snapshot(state))

    def _mark_node(self, state: SessionState, node_id: NodeId, visit: VisitState) -> dict:
        state.graph.set_node_state(node_id, visit)
        if visit == VisitState.VISITING:
            self.visit_order.append(node_id)
            label = StepLabel.NODE_VISITING
        else:
            label = StepLabel.NODE_VISITED
        return self._publish(state, label, node_target(node_id))

    def _mark_edges(self, state: SessionState, a: NodeId, b: NodeId,
                    visit: VisitState) -> dict:
        touched = state.graph.set_edges_between(a, b, visit)
        label = (StepLabel.EDGE_VISITING if visit == VisitState.VISITING
                 else StepLabel.EDGE_VISITED)
        return self._publish(state, label, edge_target(a, b, touched))

    async def _pause(self, state: SessionState) -> None:
        await self._sleep(self.step_delay)
        if state.cancel_requested:
            raise RunCancelled()

    # -- Algorithms ------------------------------------------------------------

    async def _dfs(self, state: SessionState, start: NodeId, graph_type: GraphType):
        visited: set[NodeId] = set()

        async def visit(node_id: NodeId):
            if node_id in visited:
                return
            visited.add(node_id)
            yield self._mark_node(state, node_id, VisitState.VISITING)
            await self._pause(state)

            for neighbor in state.graph.neighbors(node_id, graph_type):
                if neighbor in visited:
                    continue
                yield self._mark_edges(state, node_id, neighbor, VisitState.VISITING)
                async for event in visit(neighbor):
                    yield event
                # Edge turns visited on return, not before the recursion
                yield self._mark_edges(state, node_id, neighbor, VisitState.VISITED)

            yield self._mark_node(state, node_id, VisitState.VISITED)

        async for event in visit(start):
            yield event

    async def _bfs(self, state: SessionState, start: NodeId, graph_type: GraphType):
        queue: deque[NodeId] = deque([start])
        visited: set[NodeId] = {start}

        while queue:
            node_id = queue.popleft()
            yield self._mark_node(state, node_id, VisitState.VISITING)
            await self._pause(state)

            for neighbor in state.graph.neighbors(node_id, graph_type):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                queue.append(neighbor)
                yield self._mark_edges(state, node_id, neighbor, VisitState.VISITING)

            yield self._mark_node(state, node_id, VisitState.VISITED)

    async def _dijkstra(self, state: SessionState, start: NodeId, graph_type: GraphType):
        graph = state.graph
        self.distances = {n.id: math.inf for n in graph.nodes}
        self.distances[start] = 0
        self.previous = {n.id: None for n in graph.nodes}
        unsettled: list[NodeId] = [n.id for n in graph.nodes]

        while unsettled:
            current = min(unsettled, key=self.distances.__getitem__)
            if self.distances[current] == math.inf:
                break  # rest is unreachable, stays unvisited

            unsettled.remove(current)
            yield self._mark_node(state, current, VisitState.VISITING)
            await self._pause(state)

            for neighbor in graph.neighbors(current, graph_type):
                if neighbor not in unsettled:
                    continue
                candidate = (self.distances[current]
                             + graph.edge_weight(current, neighbor, graph_type))
                if candidate < self.distances[neighbor]:
                    self.distances[neighbor] = candidate
                    self.previous[neighbor] = current
                    yield self._mark_edges(state, current, neighbor, VisitState.VISITING)

            yield self._mark_node(state, current, VisitState.VISITED)
