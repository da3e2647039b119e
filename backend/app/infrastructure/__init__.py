"""Infrastructure Layer — database access, repositories and cross-cutting concerns.

Invariants:
    - Implements core/ protocols; never holds business rules itself
    - All store failures mapped to core/errors.py types

Design Decisions:
    - Repositories bound per request session, created by api/dependencies.py
"""
