"""Book Schemas — catalog create/update/response models.

Invariants:
    - price > 0 with at most 2 fractional digits; stock_quantity within the INTEGER column range
    - BookUpdate is partial: only fields present in the payload are applied
    - Required columns (title, author, price, stock_quantity, available) cannot be nulled
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import MAX_STORED_INT
from app.schemas.common import Money, PositiveMoney, UtcDatetime


class BookCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    author: str = Field(min_length=1, max_length=500)
    isbn: str | None = Field(None, max_length=20)
    description: str | None = None
    price: PositiveMoney
    cover_image_url: str | None = Field(None, max_length=2000)
    stock_quantity: int = Field(0, ge=0, le=MAX_STORED_INT)
    published_year: int | None = Field(None, ge=0, le=9999)
    publisher: str | None = None
    available: bool = True


class BookUpdate(BaseModel):
    """Partial update — use model_dump(exclude_unset=True)."""
    title: str | None = Field(None, min_length=1, max_length=500)
    author: str | None = Field(None, min_length=1, max_length=500)
    isbn: str | None = Field(None, max_length=20)
    description: str | None = None
    price: PositiveMoney | None = None
    cover_image_url: str | None = Field(None, max_length=2000)
    stock_quantity: int | None = Field(None, ge=0, le=MAX_STORED_INT)
    published_year: int | None = Field(None, ge=0, le=9999)
    publisher: str | None = None
    available: bool | None = None

    @field_validator("title", "author", "price", "stock_quantity", "available")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    isbn: str | None
    description: str | None
    price: Money
    cover_image_url: str | None
    stock_quantity: int
    published_year: int | None
    publisher: str | None
    available: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime
