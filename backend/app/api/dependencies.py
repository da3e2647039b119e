"""Route Dependencies — build services per request from the request's DB session.

Invariants:
    - Every request gets fresh repositories bound to its own AsyncSession
    - Services receive collaborators explicitly; nothing reaches for a global store
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.infrastructure.repositories import (
    SqlBookRepository, SqlCatalogReader, SqlOrderRepository,
)
from app.services.book_orders import BookOrderService
from app.services.books import BookCatalogService


def get_order_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BookOrderService:
    return BookOrderService(
        SqlCatalogReader(db),
        SqlOrderRepository(db),
        strict_transitions=settings.enforce_status_transitions,
    )


def get_book_service(db: AsyncSession = Depends(get_db)) -> BookCatalogService:
    return BookCatalogService(SqlBookRepository(db))


def resolve_page_size(limit: int | None, settings: Settings) -> int:
    """Default when unspecified, clamped to the configured maximum."""
    if limit is None:
        return settings.default_page_size
    return min(limit, settings.max_page_size)
