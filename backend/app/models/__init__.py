"""ORM Models — SQLAlchemy declarative models for the bookstore entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - BookOrder is the aggregate root for its items

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.book import Book  # noqa: F401
from app.models.book_order import BookOrder, BookOrderItem  # noqa: F401
