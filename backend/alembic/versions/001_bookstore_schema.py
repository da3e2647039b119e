"""Bookstore schema — books, book_orders, book_order_items.

Revision ID: 001_bookstore
Revises: None
Create Date: 2026-10-19

Monetary columns are NUMERIC(10, 2). order_status is a native PostgreSQL enum.
Order items cascade with their order; they reference books without owning them.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_bookstore"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDER_STATUSES = ("pending", "confirmed", "shipped", "completed", "cancelled")


def upgrade() -> None:
    order_status = sa.Enum(*ORDER_STATUSES, name="order_status")

    op.create_table(
        "books",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("author", sa.Text, nullable=False),
        sa.Column("isbn", sa.String(20), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("cover_image_url", sa.String(2000), nullable=True),
        sa.Column("stock_quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("published_year", sa.Integer, nullable=True),
        sa.Column("publisher", sa.Text, nullable=True),
        sa.Column("available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price > 0", name="ck_books_price_positive"),
        sa.CheckConstraint("stock_quantity >= 0", name="ck_books_stock_non_negative"),
    )

    op.create_table(
        "book_orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("customer_name", sa.Text, nullable=False),
        sa.Column("customer_email", sa.Text, nullable=False),
        sa.Column("customer_phone", sa.Text, nullable=False),
        sa.Column("customer_address", sa.Text, nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", order_status, nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_book_orders_created_at", "book_orders", ["created_at"])

    op.create_table(
        "book_order_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "order_id", sa.Integer,
            sa.ForeignKey("book_orders.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("book_id", sa.Integer, sa.ForeignKey("books.id"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity > 0", name="ck_book_order_items_quantity_positive"),
    )
    op.create_index("ix_book_order_items_order_id", "book_order_items", ["order_id"])


def downgrade() -> None:
    op.drop_index("ix_book_order_items_order_id", table_name="book_order_items")
    op.drop_table("book_order_items")
    op.drop_index("ix_book_orders_created_at", table_name="book_orders")
    op.drop_table("book_orders")
    op.drop_table("books")
    sa.Enum(name="order_status").drop(op.get_bind(), checkfirst=True)
