"""Core Layer — pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Intents are deterministic state mutations on SessionState

Design Decisions:
    - Functional core separated from imperative shell: the traversal engine
      (services/) and the FastAPI routes (api/) own all async and IO
"""
