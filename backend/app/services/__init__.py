"""Services Layer — orchestration between core logic and infrastructure.

Invariants:
    - Services depend on core protocols, not on SQLAlchemy
    - One service per aggregate (book orders, catalog)

Design Decisions:
    - IO sequenced here, rules kept pure in core/ (functional core, imperative shell)
"""
