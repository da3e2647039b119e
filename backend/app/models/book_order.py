"""Book Order ORM — order header plus its line items.

Invariants:
    - status defaults to 'pending'; values restricted to the order_status enum
    - total_amount is derived at creation and never recomputed
    - BookOrderItem.price is a snapshot of Book.price at order time (immutable)
    - Items are composed into the order: deleted with it (ORM cascade + FK ON DELETE CASCADE)
    - Header and items are always written in the same flush/commit

Design Decisions:
    - Items attached through the relationship: one unit of work, all-or-nothing insert
    - native_enum with values_callable: PostgreSQL enum labels are the lowercase values
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, Enum, ForeignKey, Integer, Numeric, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.domain_types import OrderStatus
from app.db.base import Base


order_status_enum = Enum(
    OrderStatus,
    name="order_status",
    values_callable=lambda statuses: [s.value for s in statuses],
)


class BookOrder(Base):
    """Order header — customer contact, total and lifecycle status."""
    __tablename__ = "book_orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_email: Mapped[str] = mapped_column(Text, nullable=False)
    customer_phone: Mapped[str] = mapped_column(Text, nullable=False)
    customer_address: Mapped[str] = mapped_column(Text, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False,
    )
    status: Mapped[OrderStatus] = mapped_column(
        order_status_enum, nullable=False, default=OrderStatus.PENDING,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    items: Mapped[list["BookOrderItem"]] = relationship(
        "BookOrderItem", back_populates="order",
        cascade="all, delete-orphan", passive_deletes=True, lazy="selectin",
    )


class BookOrderItem(Base):
    """Order line — book reference, quantity, snapshot price."""
    __tablename__ = "book_order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_book_order_items_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("book_orders.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    order: Mapped["BookOrder"] = relationship(
        "BookOrder", back_populates="items",
    )
