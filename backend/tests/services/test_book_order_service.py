"""BookOrderService — orchestration with in-memory collaborators.

Invariants:
    - Validation failures never reach the repository
    - Catalog lookup receives distinct ids
    - set_status: NotFound for unknown ids; strict mode rejects illegal moves
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.core.domain_types import (
    BookId, CatalogEntry, CustomerInfo, OrderId, OrderLineRequest,
    OrderListQuery, OrderStatus,
)
from app.core.errors import (
    BooksNotFoundError, BooksUnavailableError, EmptyOrderError,
    InsufficientStockError, InvalidStatusTransitionError,
    OrderTotalTooLargeError, ResourceNotFoundError,
)
from app.services.book_orders import BookOrderService

CUSTOMER = CustomerInfo(
    name="Jane Reader", email="jane@example.com",
    phone="+15550100", address="12 Library Lane",
)


class FakeCatalog:
    def __init__(self, *entries: CatalogEntry):
        self.entries = {e.id: e for e in entries}
        self.requested: list[list[BookId]] = []

    async def get_books_by_ids(self, book_ids):
        ids = list(book_ids)
        self.requested.append(ids)
        return [self.entries[i] for i in dict.fromkeys(ids) if i in self.entries]


@dataclass
class FakeOrders:
    rows: dict[int, SimpleNamespace] = field(default_factory=dict)
    inserted: list = field(default_factory=list)

    async def insert_order(self, customer, priced, notes):
        now = datetime.now(timezone.utc)
        order = SimpleNamespace(
            id=len(self.rows) + 1,
            customer_name=customer.name, customer_email=customer.email,
            customer_phone=customer.phone, customer_address=customer.address,
            total_amount=priced.total_amount, status=OrderStatus.PENDING,
            notes=notes, created_at=now, updated_at=now,
        )
        self.rows[order.id] = order
        self.inserted.append(priced)
        return order

    async def get(self, order_id):
        return self.rows.get(order_id)

    async def list_orders(self, query):
        return list(self.rows.values())[query.offset:query.offset + query.limit]

    async def update_status(self, order, status):
        order.status = status
        order.updated_at = datetime.now(timezone.utc)
        return order

    async def get_items(self, order_id):
        return []


BOOK_A = CatalogEntry(BookId(1), "Book A", Decimal("19.99"), 10, True)
BOOK_B = CatalogEntry(BookId(2), "Book B", Decimal("29.99"), 5, True)
BOOK_C = CatalogEntry(BookId(3), "Book C", Decimal("39.99"), 3, False)


def _service(strict: bool = False):
    catalog = FakeCatalog(BOOK_A, BOOK_B, BOOK_C)
    orders = FakeOrders()
    return BookOrderService(catalog, orders, strict_transitions=strict), catalog, orders


def _lines(*pairs):
    return [OrderLineRequest(BookId(b), q) for b, q in pairs]


async def test_create_order_passes_priced_total_to_writer():
    service, _, orders = _service()
    order = await service.create_order(CUSTOMER, _lines((1, 2), (2, 1)), "gift")

    assert order.total_amount == Decimal("69.97")
    assert order.status == OrderStatus.PENDING
    assert [l.unit_price for l in orders.inserted[0].lines] == [
        Decimal("19.99"), Decimal("29.99"),
    ]


async def test_catalog_lookup_uses_distinct_ids():
    service, catalog, _ = _service()
    await service.create_order(CUSTOMER, _lines((1, 1), (2, 1), (1, 3)))
    assert catalog.requested == [[1, 2]]


@pytest.mark.parametrize("lines, error_type", [
    (((99, 1),), BooksNotFoundError),
    (((3, 1),), BooksUnavailableError),
    (((2, 6),), InsufficientStockError),
])
async def test_validation_failure_writes_nothing(lines, error_type):
    service, _, orders = _service()
    with pytest.raises(error_type):
        await service.create_order(CUSTOMER, _lines(*lines))
    assert orders.inserted == []


async def test_empty_lines_rejected_before_catalog_read():
    service, catalog, _ = _service()
    with pytest.raises(EmptyOrderError) as exc_info:
        await service.create_order(CUSTOMER, [])
    assert exc_info.value.code == "EMPTY_ORDER"
    assert exc_info.value.http_status == 400
    assert catalog.requested == []


async def test_total_above_money_capacity_rejected_before_write():
    pricey = CatalogEntry(BookId(9), "Folio", Decimal("99999999.99"), 10, True)
    orders = FakeOrders()
    service = BookOrderService(FakeCatalog(pricey), orders)

    with pytest.raises(OrderTotalTooLargeError) as exc_info:
        await service.create_order(CUSTOMER, _lines((9, 2)))
    assert exc_info.value.total == Decimal("199999999.98")
    assert exc_info.value.book_ids == [9]
    assert orders.inserted == []


async def test_total_exactly_at_capacity_is_accepted():
    pricey = CatalogEntry(BookId(9), "Folio", Decimal("99999999.99"), 10, True)
    service = BookOrderService(FakeCatalog(pricey), FakeOrders())
    order = await service.create_order(CUSTOMER, _lines((9, 1)))
    assert order.total_amount == Decimal("99999999.99")


async def test_get_order_returns_none_for_unknown_id():
    service, _, _ = _service()
    assert await service.get_order(OrderId(5)) is None


async def test_set_status_unknown_order_raises_not_found():
    service, _, _ = _service()
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.set_status(OrderId(99999), OrderStatus.CONFIRMED)
    assert "99999" in exc_info.value.message


async def test_set_status_unconstrained_by_default():
    service, _, _ = _service()
    order = await service.create_order(CUSTOMER, _lines((1, 1)))
    await service.set_status(OrderId(order.id), OrderStatus.COMPLETED)
    updated = await service.set_status(OrderId(order.id), OrderStatus.PENDING)
    assert updated.status == OrderStatus.PENDING


async def test_strict_mode_rejects_skipping_states():
    service, _, _ = _service(strict=True)
    order = await service.create_order(CUSTOMER, _lines((1, 1)))
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        await service.set_status(OrderId(order.id), OrderStatus.SHIPPED)
    assert exc_info.value.context.order_id == order.id
    assert order.status == OrderStatus.PENDING


async def test_strict_mode_allows_happy_path():
    service, _, _ = _service(strict=True)
    order = await service.create_order(CUSTOMER, _lines((1, 1)))
    for status in (
        OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.COMPLETED,
    ):
        order = await service.set_status(OrderId(order.id), status)
    assert order.status == OrderStatus.COMPLETED


async def test_list_orders_forwards_query():
    service, _, _ = _service()
    for _ in range(3):
        await service.create_order(CUSTOMER, _lines((1, 1)))
    page = await service.list_orders(OrderListQuery(limit=2, offset=1))
    assert [o.id for o in page] == [2, 3]


async def test_get_order_items_requires_existing_order():
    service, _, _ = _service()
    with pytest.raises(ResourceNotFoundError):
        await service.get_order_items(OrderId(7))
