"""Book Catalog Service — create, read, list and update catalog entries."""

import logging

from app.core.domain_types import BookId, BookListQuery
from app.core.errors import ResourceNotFoundError
from app.core.repository_protocols import BookLike, BookRepository

logger = logging.getLogger(__name__)


class BookCatalogService:

    def __init__(self, books: BookRepository):
        self.books = books

    async def create_book(self, fields: dict) -> BookLike:
        book = await self.books.insert(fields)
        logger.info(f"Book {book.id} created", extra={"book_id": book.id})
        return book

    async def get_book(self, book_id: BookId) -> BookLike | None:
        return await self.books.get(book_id)

    async def list_books(self, query: BookListQuery) -> list[BookLike]:
        return await self.books.list_books(query)

    async def update_book(self, book_id: BookId, fields: dict) -> BookLike:
        """Apply only the provided fields; updated_at always refreshed."""
        book = await self.books.get(book_id)
        if book is None:
            raise ResourceNotFoundError("Book", book_id)
        book = await self.books.update(book, fields)
        logger.info(
            f"Book {book_id} updated: {', '.join(sorted(fields)) or 'no fields'}",
            extra={"book_id": book_id},
        )
        return book
