"""Book Order Service — orchestrates catalog read, validation, pricing and persistence.

Invariants:
    - create_order: read catalog → validate → price → check total → write;
      nothing written on failure
    - total_amount always comes from price_order, never from the caller
    - New orders start as pending (forced by the repository)
    - set_status touches only status + updated_at
    - Validation and pricing stay pure (core/); this module only sequences IO around them

Design Decisions:
    - Collaborators injected through the constructor (CatalogReader, OrderRepository):
      no global store handle, in-memory fakes work in unit tests
    - Check-then-act: availability/stock are checked against the catalog snapshot
      and stock is not decremented, so concurrent orders can oversell
    - get_order returns None for unknown ids; callers decide how to surface absence
"""

import logging
from collections.abc import Sequence

from app.core.domain_types import (
    CustomerInfo, OrderId, OrderLineRequest, OrderListQuery, OrderStatus,
)
from app.core.enforce_order import (
    check_total_within_limit, requested_book_ids, validate_order_lines,
)
from app.core.errors import (
    EmptyOrderError, OrderValidationError, ResourceNotFoundError,
)
from app.core.order_status import check_status_transition
from app.core.pricing import price_order
from app.core.repository_protocols import (
    BookOrderItemLike, BookOrderLike, CatalogReader, OrderRepository,
)

logger = logging.getLogger(__name__)


class BookOrderService:
    """Order creation and lifecycle operations."""

    def __init__(
        self,
        catalog: CatalogReader,
        orders: OrderRepository,
        *,
        strict_transitions: bool = False,
    ):
        self.catalog = catalog
        self.orders = orders
        self.strict_transitions = strict_transitions

    async def create_order(
        self,
        customer: CustomerInfo,
        lines: Sequence[OrderLineRequest],
        notes: str | None = None,
    ) -> BookOrderLike:
        """Validate against the current catalog, price, then persist atomically."""
        if not lines:
            raise EmptyOrderError()

        books = await self.catalog.get_books_by_ids(requested_book_ids(lines))

        self._reject_if(validate_order_lines(lines, books))
        priced = price_order(lines, books)
        self._reject_if(check_total_within_limit(priced))

        order = await self.orders.insert_order(customer, priced, notes)
        logger.info(
            f"Order {order.id} created with {len(priced.lines)} line(s), "
            f"total {priced.total_amount}",
            extra={"order_id": order.id},
        )
        return order

    @staticmethod
    def _reject_if(error: OrderValidationError | None) -> None:
        if error is not None:
            logger.warning(
                f"Order rejected: {error.message}",
                extra={"error_code": error.code},
            )
            raise error

    async def get_order(self, order_id: OrderId) -> BookOrderLike | None:
        return await self.orders.get(order_id)

    async def get_order_or_raise(self, order_id: OrderId) -> BookOrderLike:
        order = await self.orders.get(order_id)
        if order is None:
            raise ResourceNotFoundError("Book order", order_id)
        return order

    async def list_orders(self, query: OrderListQuery) -> list[BookOrderLike]:
        """Newest first; status filter and pagination compose independently."""
        return await self.orders.list_orders(query)

    async def set_status(
        self, order_id: OrderId, new_status: OrderStatus,
    ) -> BookOrderLike:
        """Overwrite the order's status. No stock release, no notifications."""
        order = await self.get_order_or_raise(order_id)
        current = OrderStatus(order.status)
        error = check_status_transition(
            current, new_status, strict=self.strict_transitions,
        )
        if error is not None:
            error.context.order_id = order_id
            raise error

        updated = await self.orders.update_status(order, new_status)
        logger.info(
            f"Order {order_id} status {current.value} -> {new_status.value}",
            extra={"order_id": order_id, "status": new_status.value},
        )
        return updated

    async def get_order_items(
        self, order_id: OrderId,
    ) -> list[BookOrderItemLike]:
        """Line items of an existing order (not part of the create response)."""
        await self.get_order_or_raise(order_id)
        return await self.orders.get_items(order_id)
