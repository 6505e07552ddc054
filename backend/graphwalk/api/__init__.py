"""API Layer — FastAPI routes and error handlers (the presentation adapter).

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses, except the SSE run stream

Design Decisions:
    - Thin routes delegate to SessionState intents and the TraversalEngine
"""
