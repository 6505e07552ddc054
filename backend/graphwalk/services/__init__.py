"""Services Layer — async orchestration on top of the pure core.

Invariants:
    - Services may await; core/ never does
    - Services never import from api/

Design Decisions:
    - Traversal runs are async generators of SSE-shaped event dicts, so the
      HTTP shell only has to format and forward them
"""
