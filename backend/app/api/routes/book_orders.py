"""Book Order Routes — create, read, list and status updates for orders.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Routes never contain business logic (delegate to BookOrderService)
    - Unknown order ids → ResourceNotFoundError → 404 via global handler
    - Create response carries the order header only; items via /{order_id}/items
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_order_service, resolve_page_size
from app.config import Settings, get_settings
from app.core.domain_types import OrderId, OrderListQuery, OrderStatus
from app.core.errors import ResourceNotFoundError
from app.schemas.book_order import (
    BookOrderCreate,
    BookOrderItemResponse,
    BookOrderResponse,
    BookOrderStatusUpdate,
)
from app.services.book_orders import BookOrderService

router = APIRouter(prefix="/api/v1/book-orders", tags=["book-orders"])


@router.post(
    "", response_model=BookOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_book_order(
    body: BookOrderCreate,
    service: BookOrderService = Depends(get_order_service),
):
    """Create an order priced from the current catalog."""
    order = await service.create_order(body.customer(), body.lines(), body.notes)
    return BookOrderResponse.model_validate(order)


@router.get("", response_model=list[BookOrderResponse])
async def list_book_orders(
    status_filter: OrderStatus | None = Query(None, alias="status"),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    service: BookOrderService = Depends(get_order_service),
    settings: Settings = Depends(get_settings),
):
    """List orders newest first."""
    query = OrderListQuery(
        status=status_filter,
        limit=resolve_page_size(limit, settings),
        offset=offset,
    )
    orders = await service.list_orders(query)
    return [BookOrderResponse.model_validate(o) for o in orders]


@router.get("/{order_id}", response_model=BookOrderResponse)
async def get_book_order(
    order_id: int, service: BookOrderService = Depends(get_order_service),
):
    order = await service.get_order(OrderId(order_id))
    if order is None:
        raise ResourceNotFoundError("Book order", order_id)
    return BookOrderResponse.model_validate(order)


@router.get(
    "/{order_id}/items", response_model=list[BookOrderItemResponse],
)
async def list_book_order_items(
    order_id: int, service: BookOrderService = Depends(get_order_service),
):
    items = await service.get_order_items(OrderId(order_id))
    return [BookOrderItemResponse.model_validate(i) for i in items]


@router.patch("/{order_id}/status", response_model=BookOrderResponse)
async def update_book_order_status(
    order_id: int,
    body: BookOrderStatusUpdate,
    service: BookOrderService = Depends(get_order_service),
):
    """Set the order's status. Only status and updated_at change."""
    order = await service.set_status(OrderId(order_id), body.status)
    return BookOrderResponse.model_validate(order)
