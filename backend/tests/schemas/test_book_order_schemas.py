"""Book Order Schemas — boundary validation for order requests and responses.

Invariants:
    - items must be non-empty; quantity > 0
    - customer fields stripped and non-blank; email validated
    - Responses serialize money as two-place strings and timestamps as UTC
"""

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from app.core.domain_types import OrderStatus
from app.schemas.book import BookUpdate
from app.schemas.book_order import (
    BookOrderCreate,
    BookOrderResponse,
    BookOrderStatusUpdate,
)


def _payload(**overrides):
    body = {
        "customer_name": "  Jane Reader ",
        "customer_email": "jane@example.com",
        "customer_phone": "+15550100",
        "customer_address": "12 Library Lane",
        "items": [{"book_id": 1, "quantity": 2}],
        "notes": None,
    }
    body.update(overrides)
    return body


def test_create_strips_customer_fields():
    order = BookOrderCreate(**_payload())
    assert order.customer().name == "Jane Reader"


def test_create_maps_lines_to_domain():
    order = BookOrderCreate(**_payload(items=[
        {"book_id": 1, "quantity": 2}, {"book_id": 4, "quantity": 1},
    ]))
    assert [(l.book_id, l.quantity) for l in order.lines()] == [(1, 2), (4, 1)]


def test_create_requires_items():
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(items=[]))


@pytest.mark.parametrize("quantity", [0, -3])
def test_create_rejects_non_positive_quantity(quantity):
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(items=[{"book_id": 1, "quantity": quantity}]))


def test_create_rejects_malformed_email():
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(customer_email="not-an-email"))


@pytest.mark.parametrize("email", ["jane@", "jane@@example.com", "jane doe@example.com"])
def test_create_rejects_invalid_email_syntax(email):
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(customer_email=email))


def test_create_strips_email_before_validation():
    order = BookOrderCreate(**_payload(customer_email="  jane@example.com "))
    assert order.customer().email == "jane@example.com"


def test_create_rejects_quantity_beyond_integer_range():
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(items=[{"book_id": 1, "quantity": 2**31}]))


def test_create_rejects_blank_address():
    with pytest.raises(ValidationError):
        BookOrderCreate(**_payload(customer_address="   "))


def test_notes_optional():
    payload = _payload()
    del payload["notes"]
    assert BookOrderCreate(**payload).notes is None


def test_status_update_accepts_enum_values_only():
    assert BookOrderStatusUpdate(status="shipped").status is OrderStatus.SHIPPED
    with pytest.raises(ValidationError):
        BookOrderStatusUpdate(status="lost")


def test_response_serializes_money_and_utc():
    naive = datetime(2026, 10, 19, 12, 0, 0)
    row = SimpleNamespace(
        id=1, customer_name="Jane", customer_email="jane@example.com",
        customer_phone="+1", customer_address="Lane",
        total_amount=Decimal("69.97"), status=OrderStatus.PENDING, notes=None,
        created_at=naive, updated_at=naive,
    )
    data = BookOrderResponse.model_validate(row).model_dump(mode="json")
    assert data["total_amount"] == "69.97"
    assert data["status"] == "pending"
    assert datetime.fromisoformat(data["created_at"]).tzinfo == timezone.utc


def test_book_update_only_sets_provided_fields():
    update = BookUpdate(stock_quantity=3)
    assert update.model_dump(exclude_unset=True) == {"stock_quantity": 3}


def test_book_update_rejects_null_price():
    with pytest.raises(ValidationError):
        BookUpdate(price=None)
