"""Book ORM — persists catalog entries read by order creation.

Invariants:
    - id is an integer primary key (autoincrement)
    - price is Numeric(10, 2) and strictly positive (CHECK constraint)
    - stock_quantity is a non-negative integer (CHECK constraint)
    - Read-only from the order flow's perspective; mutated by catalog management

Design Decisions:
    - Numeric(asdecimal=True): prices round-trip as Decimal, never float
    - No relationship to order items: items reference books, books do not own them
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Book(Base):
    """Catalog entity — title, price, stock and availability."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_books_price_positive"),
        CheckConstraint(
            "stock_quantity >= 0", name="ck_books_stock_non_negative",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False,
    )
    cover_image_url: Mapped[str | None] = mapped_column(
        String(2000), nullable=True,
    )
    stock_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    published_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    publisher: Mapped[str | None] = mapped_column(Text, nullable=True)
    available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
