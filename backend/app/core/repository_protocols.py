"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection, never a global handle

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the validation/pricing functions that consume their results stay sync
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from app.core.domain_types import (
    BookId, BookListQuery, CatalogEntry, CustomerInfo,
    OrderId, OrderListQuery, OrderStatus, PricedOrder,
)


class BookOrderLike(Protocol):
    """Structural contract for persisted order headers.

    Avoids coupling services to the ORM model while keeping real type information.
    """
    id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    total_amount: Decimal
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime


class BookOrderItemLike(Protocol):
    id: int
    order_id: int
    book_id: int
    quantity: int
    price: Decimal
    created_at: datetime


class BookLike(Protocol):
    id: int
    title: str
    author: str
    price: Decimal
    stock_quantity: int
    available: bool


class CatalogReader(Protocol):
    """Read-only catalog lookup — returns only the books that exist."""
    async def get_books_by_ids(
        self, book_ids: Iterable[BookId],
    ) -> list[CatalogEntry]: ...


class OrderRepository(Protocol):
    """Contract for order persistence — implemented by shell."""
    async def insert_order(
        self, customer: CustomerInfo, priced: PricedOrder, notes: str | None,
    ) -> BookOrderLike: ...
    async def get(self, order_id: OrderId) -> BookOrderLike | None: ...
    async def list_orders(self, query: OrderListQuery) -> list[BookOrderLike]: ...
    async def update_status(
        self, order: BookOrderLike, status: OrderStatus,
    ) -> BookOrderLike: ...
    async def get_items(self, order_id: OrderId) -> list[BookOrderItemLike]: ...


class BookRepository(Protocol):
    """Contract for catalog management persistence — implemented by shell."""
    async def insert(self, fields: dict) -> BookLike: ...
    async def get(self, book_id: BookId) -> BookLike | None: ...
    async def list_books(self, query: BookListQuery) -> list[BookLike]: ...
    async def update(self, book: BookLike, fields: dict) -> BookLike: ...
