"""Pydantic Schemas: request body validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (JSON bodies only; query strings go through core/query_params)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
