"""Database Metadata — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - All sessions are async (AsyncSession), managed by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
