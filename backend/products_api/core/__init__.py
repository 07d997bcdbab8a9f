"""Core Layer - pure request rules and error types, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validation rules are
      evaluated without an HTTP stack, handlers only orchestrate IO
"""
