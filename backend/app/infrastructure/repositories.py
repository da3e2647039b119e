"""SQL Repositories — SQLAlchemy implementations of the core boundary protocols.

Invariants:
    - One repository instance per request session (never shared across requests)
    - Order header and items are committed in a single unit of work
    - Every write goes through rollback_on_error: failed writes leave nothing behind
    - Catalog reads deduplicate ids and silently omit missing books
    - Ids outside the INTEGER column range are treated as absent, never queried

Design Decisions:
    - Repositories return ORM objects typed by the *Like protocols: services
      never import models directly
    - Listing orders is newest first with id as tie-breaker so pages are stable
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import (
    BookId, BookListQuery, CatalogEntry, CustomerInfo,
    OrderId, OrderListQuery, OrderStatus, PricedOrder, is_storable_id,
)
from app.core.order_status import INITIAL_STATUS
from app.infrastructure.database import rollback_on_error
from app.models.book import Book
from app.models.book_order import BookOrder, BookOrderItem

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlCatalogReader:
    """Resolves book ids to their current catalog state."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_books_by_ids(
        self, book_ids: Iterable[BookId],
    ) -> list[CatalogEntry]:
        # Out-of-range ids cannot exist
        distinct_ids = [i for i in dict.fromkeys(book_ids) if is_storable_id(i)]
        if not distinct_ids:
            return []
        result = await self.db.execute(
            select(Book).where(Book.id.in_(distinct_ids)),
        )
        return [
            CatalogEntry(
                id=BookId(book.id),
                title=book.title,
                price=book.price,
                stock_quantity=book.stock_quantity,
                available=book.available,
            )
            for book in result.scalars().all()
        ]


class SqlOrderRepository:
    """Order header + item persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_order(
        self, customer: CustomerInfo, priced: PricedOrder, notes: str | None,
    ) -> BookOrder:
        """Write header and items atomically. Status is always the initial one."""
        now = _utcnow()
        order = BookOrder(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            customer_address=customer.address,
            total_amount=priced.total_amount,
            status=INITIAL_STATUS,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.items = [
            BookOrderItem(
                book_id=line.book_id,
                quantity=line.quantity,
                price=line.unit_price,
                created_at=now,
            )
            for line in priced.lines
        ]
        async with rollback_on_error(self.db, "insert_order"):
            self.db.add(order)
            await self.db.commit()
            await self.db.refresh(order)
        return order

    async def get(self, order_id: OrderId) -> BookOrder | None:
        if not is_storable_id(order_id):
            return None
        result = await self.db.execute(
            select(BookOrder).where(BookOrder.id == order_id),
        )
        return result.scalar_one_or_none()

    async def list_orders(self, query: OrderListQuery) -> list[BookOrder]:
        stmt = select(BookOrder).order_by(
            BookOrder.created_at.desc(), BookOrder.id.desc(),
        )
        if query.status is not None:
            stmt = stmt.where(BookOrder.status == query.status)
        stmt = stmt.limit(query.limit).offset(query.offset)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_status(
        self, order: BookOrder, status: OrderStatus,
    ) -> BookOrder:
        """Overwrite status and refresh updated_at. Last writer wins."""
        order.status = status
        order.updated_at = _utcnow()
        async with rollback_on_error(self.db, "update_status"):
            await self.db.commit()
            await self.db.refresh(order)
        return order

    async def get_items(self, order_id: OrderId) -> list[BookOrderItem]:
        if not is_storable_id(order_id):
            return []
        result = await self.db.execute(
            select(BookOrderItem)
            .where(BookOrderItem.order_id == order_id)
            .order_by(BookOrderItem.id),
        )
        return list(result.scalars().all())


class SqlBookRepository:
    """Catalog management persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, fields: dict) -> Book:
        now = _utcnow()
        book = Book(**fields, created_at=now, updated_at=now)
        async with rollback_on_error(self.db, "insert_book"):
            self.db.add(book)
            await self.db.commit()
            await self.db.refresh(book)
        return book

    async def get(self, book_id: BookId) -> Book | None:
        if not is_storable_id(book_id):
            return None
        result = await self.db.execute(select(Book).where(Book.id == book_id))
        return result.scalar_one_or_none()

    async def list_books(self, query: BookListQuery) -> list[Book]:
        stmt = select(Book).order_by(Book.id)
        if query.available is not None:
            stmt = stmt.where(Book.available.is_(query.available))
        stmt = stmt.limit(query.limit).offset(query.offset)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, book: Book, fields: dict) -> Book:
        for name, value in fields.items():
            setattr(book, name, value)
        book.updated_at = _utcnow()
        async with rollback_on_error(self.db, "update_book"):
            await self.db.commit()
            await self.db.refresh(book)
        return book
