"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user intents, API responses)
    - Domain enums from core/ used for enum fields
"""
