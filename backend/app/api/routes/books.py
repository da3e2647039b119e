"""Book Routes — catalog management endpoints.

Invariants:
    - PATCH applies only the fields present in the payload
    - Unknown book ids → 404 via global handler
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_book_service, resolve_page_size
from app.config import Settings, get_settings
from app.core.domain_types import BookId, BookListQuery
from app.core.errors import ResourceNotFoundError
from app.schemas.book import BookCreate, BookResponse, BookUpdate
from app.services.books import BookCatalogService

router = APIRouter(prefix="/api/v1/books", tags=["books"])


@router.post(
    "", response_model=BookResponse, status_code=status.HTTP_201_CREATED,
)
async def create_book(
    body: BookCreate, service: BookCatalogService = Depends(get_book_service),
):
    book = await service.create_book(body.model_dump())
    return BookResponse.model_validate(book)


@router.get("", response_model=list[BookResponse])
async def list_books(
    available: bool | None = Query(None),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    service: BookCatalogService = Depends(get_book_service),
    settings: Settings = Depends(get_settings),
):
    query = BookListQuery(
        available=available,
        limit=resolve_page_size(limit, settings),
        offset=offset,
    )
    books = await service.list_books(query)
    return [BookResponse.model_validate(b) for b in books]


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int, service: BookCatalogService = Depends(get_book_service),
):
    book = await service.get_book(BookId(book_id))
    if book is None:
        raise ResourceNotFoundError("Book", book_id)
    return BookResponse.model_validate(book)


@router.patch("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: int,
    body: BookUpdate,
    service: BookCatalogService = Depends(get_book_service),
):
    book = await service.update_book(
        BookId(book_id), body.model_dump(exclude_unset=True),
    )
    return BookResponse.model_validate(book)
