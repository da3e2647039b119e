"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BookId, OrderId wrap ints — never use bare int ids in domain logic signatures
    - Money is always Decimal quantized to 2 places (never float)
    - All valid order states encoded as OrderStatus — no raw string matching
    - Value objects are frozen dataclasses: the pure core never sees ORM rows

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Explicit query structs (OrderListQuery, BookListQuery) over loose filter dicts
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", int)
OrderId = NewType("OrderId", int)

# Ids and counts are stored in 32-bit INTEGER columns
MAX_STORED_INT = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_STORED_INT


# ─── Money ───────────────────────────────────────────────────────

CENT = Decimal("0.01")
# Largest value a NUMERIC(10,2) column holds
MAX_MONEY = Decimal("99999999.99")


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize to two fractional digits, half-up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states — maps to DB `order_status` enum."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class CatalogEntry:
    """Current catalog state of a book, as read at order time."""
    id: BookId
    title: str
    price: Decimal
    stock_quantity: int
    available: bool


@dataclass(frozen=True)
class OrderLineRequest:
    """One requested line: book and a positive quantity."""
    book_id: BookId
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    book_id: BookId
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PricedOrder:
    """Authoritative pricing for an order, computed from catalog prices."""
    lines: tuple[PricedLine, ...]
    total_amount: Decimal


@dataclass(frozen=True)
class CustomerInfo:
    """Contact fields captured at order time (not linked to an account)."""
    name: str
    email: str
    phone: str
    address: str


# ─── Query Structs ───────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class OrderListQuery:
    """Filter and pagination for listing orders; fields compose independently."""
    status: OrderStatus | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass(frozen=True)
class BookListQuery:
    available: bool | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0
