"""Book Order Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - BookOrderCreate: all customer fields required and non-blank, email validated
    - items is non-empty; each quantity is a positive integer
    - total_amount is never accepted from the client (not a request field)
    - BookOrderStatusUpdate.status restricted to OrderStatus values

Design Decisions:
    - EmailStr (email-validator) checks syntax only; no deliverability lookup
    - book_id is only bounded below: unknown ids surface as BOOKS_NOT_FOUND
    - Responses built with from_attributes straight from ORM rows
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.domain_types import (
    MAX_STORED_INT, BookId, CustomerInfo, OrderLineRequest, OrderStatus,
)
from app.schemas.common import Money, UtcDatetime


class OrderLineIn(BaseModel):
    """One requested line."""
    book_id: int = Field(gt=0)
    quantity: int = Field(gt=0, le=MAX_STORED_INT)

    def to_domain(self) -> OrderLineRequest:
        return OrderLineRequest(book_id=BookId(self.book_id), quantity=self.quantity)


class BookOrderCreate(BaseModel):
    """Order creation — customer contact captured at order time."""
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1, max_length=50)
    customer_address: str = Field(min_length=1, max_length=1000)
    items: list[OrderLineIn] = Field(min_length=1)
    notes: str | None = Field(None, max_length=2000)

    @field_validator(
        "customer_name", "customer_phone", "customer_address", "customer_email",
        mode="before",
    )
    @classmethod
    def strip_required(cls, v):
        # Runs before min_length and email parsing so whitespace-only input is rejected
        return v.strip() if isinstance(v, str) else v

    def customer(self) -> CustomerInfo:
        return CustomerInfo(
            name=self.customer_name,
            email=self.customer_email,
            phone=self.customer_phone,
            address=self.customer_address,
        )

    def lines(self) -> list[OrderLineRequest]:
        return [item.to_domain() for item in self.items]


class BookOrderStatusUpdate(BaseModel):
    status: OrderStatus


class BookOrderResponse(BaseModel):
    """Order header as returned to clients (items fetched separately)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    total_amount: Money
    status: OrderStatus
    notes: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class BookOrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    book_id: int
    quantity: int
    price: Money
    created_at: UtcDatetime
