"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Conversion to/from core aggregates happens here, never in routes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
