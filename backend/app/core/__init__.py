"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation, pricing and status rules are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
