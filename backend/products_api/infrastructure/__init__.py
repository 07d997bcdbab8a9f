"""Infrastructure Layer - database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All store calls wrapped with rollback and error mapping

Design Decisions:
    - Repository over raw sessions in handlers: handlers stay testable with a fake store
"""
