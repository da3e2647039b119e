"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.db_manager points at the test engine (get_db reads it per request)
    - Catalog fixture mirrors the two-book scenario: A 19.99 x10, B 29.99 x5,
      plus an unavailable book C

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features such as the native enum not exercised here)
    - httpx ASGITransport does not run the lifespan, so the manager is injected directly
"""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.main import app
from app.models.book import Book


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine):
    """FastAPI test client wired to the test database."""
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = DatabaseSessionManager.from_engine(test_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.db_manager = original_manager


@pytest.fixture
async def catalog(test_db):
    """Insert books A, B (available) and C (unavailable)."""
    books = {
        "A": Book(
            title="Book A", author="Author A",
            price=Decimal("19.99"), stock_quantity=10, available=True,
        ),
        "B": Book(
            title="Book B", author="Author B",
            price=Decimal("29.99"), stock_quantity=5, available=True,
        ),
        "C": Book(
            title="Book C", author="Author C",
            price=Decimal("39.99"), stock_quantity=3, available=False,
        ),
    }
    test_db.add_all(books.values())
    await test_db.commit()
    for book in books.values():
        await test_db.refresh(book)
    return books


@pytest.fixture
def order_payload():
    """Build a createBookOrder body for the given (book, quantity) lines."""
    def _build(*lines, notes="Leave at the door"):
        return {
            "customer_name": "Jane Reader",
            "customer_email": "jane@example.com",
            "customer_phone": "+15550100",
            "customer_address": "12 Library Lane, Springfield",
            "items": [
                {"book_id": book_id, "quantity": quantity}
                for book_id, quantity in lines
            ],
            "notes": notes,
        }
    return _build
