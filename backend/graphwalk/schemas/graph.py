"""Graph Schemas — Pydantic models for session and intent payloads.

Invariants:
    - Coordinates are finite floats; node ids are non-negative ints
    - EdgeCreate.weight >= 0, defaults to 1 (write-once, no update schema exists)
    - Enum fields reuse core domain enums: invalid values fail with 400

Design Decisions:
    - IntentResponse carries the fresh snapshot: the client re-renders from the
      response without a follow-up GET
"""

from uuid import UUID

from pydantic import BaseModel, Field

from graphwalk.core.domain_types import Algorithm, GraphType, Locale


class SessionCreate(BaseModel):
    """Session creation — every field optional."""
    locale: Locale | None = None
    graph_type: GraphType = GraphType.UNDIRECTED


class SessionResponse(BaseModel):
    id: UUID
    snapshot: dict


class Point(BaseModel):
    """Canvas coordinates of a click or a node placement."""
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)


class EdgeCreate(BaseModel):
    source: int = Field(ge=0)
    target: int = Field(ge=0)
    weight: float = Field(1.0, ge=0, allow_inf_nan=False)


class GraphTypeUpdate(BaseModel):
    graph_type: GraphType


class AlgorithmUpdate(BaseModel):
    algorithm: Algorithm


class StartNodeUpdate(BaseModel):
    node_id: int = Field(ge=0)


class LocaleUpdate(BaseModel):
    locale: Locale


class IntentResponse(BaseModel):
    """Outcome of a user intent plus the snapshot after it."""
    accepted: bool
    snapshot: dict
    node_id: int | None = None
    edge_id: int | None = None
