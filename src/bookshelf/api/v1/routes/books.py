from uuid import UUID

from fastapi import APIRouter, Depends, status

from bookshelf.api.dependencies import get_book_service
from bookshelf.schemas import (
    BookSuccessResponse,
    BooksSuccessResponse,
    CreateBookRequest,
    ErrorResponse,
    SuccessResponse,
    UpdateBookRequest,
    ValidationErrorResponse,
)
from bookshelf.services import BookService

router = APIRouter(prefix="/books", tags=["books"])

_BAD_REQUEST = {400: {"model": ValidationErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookSuccessResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, 409: {"model": ErrorResponse}},
)
async def create_book(payload: CreateBookRequest, service: BookService = Depends(get_book_service)):
    book = await service.create_book(payload)
    return BookSuccessResponse.from_entity("Book created successfully", book)


@router.get("", response_model=BooksSuccessResponse, responses=_NOT_FOUND)
async def get_all_books(service: BookService = Depends(get_book_service)):
    books = await service.get_all_books()
    return BooksSuccessResponse.from_entities("Books retrieved successfully", books)


@router.get("/{book_id}", response_model=BookSuccessResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def get_book(book_id: UUID, service: BookService = Depends(get_book_service)):
    book = await service.get_book_by_id(book_id)
    return BookSuccessResponse.from_entity("Book retrieved successfully", book)


@router.patch("/{book_id}", response_model=SuccessResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def update_book(
    book_id: UUID,
    payload: UpdateBookRequest,
    service: BookService = Depends(get_book_service),
):
    await service.update_book(payload, book_id)
    return SuccessResponse(message="Book updated successfully")


@router.delete("/{book_id}", response_model=SuccessResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def delete_book(book_id: UUID, service: BookService = Depends(get_book_service)):
    await service.delete_book(book_id)
    return SuccessResponse(message="Book deleted successfully")
