"""Error Hierarchy — typed, categorized exceptions for all bookstore failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Order validation errors (400-level) are raised before any write happens
    - Infrastructure errors (500-level) are critical and never retried internally
    - to_response() produces the REST error envelope

Design Decisions:
    - Single hierarchy with BookstoreError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ConstraintViolationError keeps the store's message: integrity failures are
      surfaced as their own taxonomy member instead of a generic 500
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: int | None = None
    book_ids: list[int] | None = None
    debug_info: dict[str, Any] | None = None


class BookstoreError(Exception):
    """Base exception for all bookstore errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "order_id": self.context.order_id,
                    "book_ids": self.context.book_ids,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(BookstoreError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class OrderValidationError(BookstoreError):
    """Order request violates a catalog invariant. Nothing has been written."""
    def __init__(
        self, message: str, code: str, book_ids: list[int],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.book_ids = book_ids
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.book_ids = book_ids


class BooksNotFoundError(OrderValidationError):
    """One or more requested books do not exist."""
    def __init__(self, missing_ids: list[int], context: ErrorContext | None = None):
        super().__init__(
            "One or more books not found: "
            f"{', '.join(str(i) for i in missing_ids)}",
            "BOOKS_NOT_FOUND", missing_ids, context,
        )


class BooksUnavailableError(OrderValidationError):
    """One or more requested books are flagged unavailable."""
    def __init__(
        self, unavailable_ids: list[int], titles: list[str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"One or more books are not available: {', '.join(titles)}",
            "BOOKS_UNAVAILABLE", unavailable_ids, context,
        )
        self.titles = titles


class InsufficientStockError(OrderValidationError):
    """Requested quantity exceeds the book's stock."""
    def __init__(
        self, book_id: int, title: str, requested: int, in_stock: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Insufficient stock for book: {title} "
            f"(requested {requested}, in stock {in_stock})",
            "INSUFFICIENT_STOCK", [book_id], context,
        )
        self.title = title
        self.requested = requested
        self.in_stock = in_stock


class EmptyOrderError(OrderValidationError):
    """Order request carries no lines."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An order needs at least one line", "EMPTY_ORDER", [], context,
        )


class OrderTotalTooLargeError(OrderValidationError):
    """Computed total exceeds what an order can record."""
    def __init__(
        self, total: Decimal, limit: Decimal, book_ids: list[int],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Order total {total} exceeds the maximum of {limit}",
            "ORDER_TOTAL_TOO_LARGE", book_ids, context,
        )
        self.total = total
        self.limit = limit


class InvalidStatusTransitionError(BookstoreError):
    """Status change rejected by the strict transition table."""
    def __init__(
        self, current: str, requested: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot move order from '{current}' to '{requested}'",
            "INVALID_STATUS_TRANSITION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.current = current
        self.requested = requested


# ─── Infrastructure Errors (409/500-level) ──────────────────────

class ConstraintViolationError(BookstoreError):
    """Store rejected a write (uniqueness, foreign key, check)."""
    def __init__(self, store_message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Constraint violated: {store_message}",
            "CONSTRAINT_VIOLATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.store_message = store_message


class DatabaseError(BookstoreError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
