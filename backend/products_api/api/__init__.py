"""API Layer - FastAPI routes, request validation, CORS policy and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate persistence to the injected ProductRepository
"""
