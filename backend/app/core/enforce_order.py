"""Order Validation — gates an order request against the current catalog.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the error on violation, None on success
    - validate_order_lines chains checks in fixed order — first error wins:
      existence, then availability, then stock
    - check_total_within_limit runs on the priced order, before any write
    - Stock is never decremented here (checked against the read snapshot only)

Design Decisions:
    - Return errors (not raise): mirrors gate checks elsewhere in core and lets
      callers decide whether to raise, log, or aggregate
    - Stock compared per line, not per book total: a book listed twice is
      checked against each line's own quantity
"""

from collections.abc import Sequence
from decimal import Decimal

from app.core.domain_types import (
    MAX_MONEY, BookId, CatalogEntry, OrderLineRequest, PricedOrder,
)
from app.core.errors import (
    BooksNotFoundError,
    BooksUnavailableError,
    InsufficientStockError,
    OrderTotalTooLargeError,
    OrderValidationError,
)


def requested_book_ids(lines: Sequence[OrderLineRequest]) -> list[BookId]:
    """Distinct book ids in first-seen order."""
    return list(dict.fromkeys(line.book_id for line in lines))


def index_catalog(books: Sequence[CatalogEntry]) -> dict[BookId, CatalogEntry]:
    return {book.id: book for book in books}


def check_books_exist(
    lines: Sequence[OrderLineRequest], catalog: dict[BookId, CatalogEntry],
) -> BooksNotFoundError | None:
    """Rule 1: every requested book must exist. No partial orders."""
    missing = [i for i in requested_book_ids(lines) if i not in catalog]
    if missing:
        return BooksNotFoundError(missing)
    return None


def check_books_available(
    lines: Sequence[OrderLineRequest], catalog: dict[BookId, CatalogEntry],
) -> BooksUnavailableError | None:
    """Rule 2: no requested book may be flagged unavailable."""
    unavailable = [
        catalog[i] for i in requested_book_ids(lines)
        if i in catalog and not catalog[i].available
    ]
    if unavailable:
        return BooksUnavailableError(
            [b.id for b in unavailable], [b.title for b in unavailable],
        )
    return None


def check_stock(
    lines: Sequence[OrderLineRequest], catalog: dict[BookId, CatalogEntry],
) -> InsufficientStockError | None:
    """Rule 3: each line's quantity must fit the book's stock."""
    for line in lines:
        book = catalog.get(line.book_id)
        if book is not None and book.stock_quantity < line.quantity:
            return InsufficientStockError(
                book.id, book.title, line.quantity, book.stock_quantity,
            )
    return None


def validate_order_lines(
    lines: Sequence[OrderLineRequest], books: Sequence[CatalogEntry],
) -> OrderValidationError | None:
    """Chain all order checks. Returns first error or None."""
    catalog = index_catalog(books)
    return (
        check_books_exist(lines, catalog)
        or check_books_available(lines, catalog)
        or check_stock(lines, catalog)
    )


def check_total_within_limit(
    priced: PricedOrder, limit: Decimal = MAX_MONEY,
) -> OrderTotalTooLargeError | None:
    """Rule 4: the priced total must fit the recorded money precision."""
    if priced.total_amount > limit:
        return OrderTotalTooLargeError(
            priced.total_amount, limit,
            list(dict.fromkeys(line.book_id for line in priced.lines)),
        )
    return None
