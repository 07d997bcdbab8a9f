"""Pydantic Schemas - response and OpenAPI contracts for API endpoints.

Invariants:
    - Schemas describe the system boundary (API requests and responses)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
