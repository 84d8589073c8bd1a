from uuid import UUID

from fastapi import APIRouter, Depends, status

from bookshelf.api.dependencies import get_author_service
from bookshelf.schemas import (
    AuthorSuccessResponse,
    AuthorsSuccessResponse,
    CreateAuthorRequest,
    ErrorResponse,
    SuccessResponse,
    UpdateAuthorRequest,
    ValidationErrorResponse,
)
from bookshelf.services import AuthorService

router = APIRouter(prefix="/authors", tags=["authors"])

_BAD_REQUEST = {400: {"model": ValidationErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthorSuccessResponse,
    responses=_BAD_REQUEST,
)
async def create_author(payload: CreateAuthorRequest, service: AuthorService = Depends(get_author_service)):
    author = await service.create_author(payload)
    return AuthorSuccessResponse.from_entity("Author created successfully", author)


@router.get("", response_model=AuthorsSuccessResponse, responses=_NOT_FOUND)
async def get_all_authors(service: AuthorService = Depends(get_author_service)):
    authors = await service.get_all_authors()
    return AuthorsSuccessResponse.from_entities("Authors retrieved successfully", authors)


@router.get("/{author_id}", response_model=AuthorSuccessResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def get_author(author_id: UUID, service: AuthorService = Depends(get_author_service)):
    author = await service.get_author_by_id(author_id)
    return AuthorSuccessResponse.from_entity("Author retrieved successfully", author)


@router.patch("/{author_id}", response_model=SuccessResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def update_author(
    author_id: UUID,
    payload: UpdateAuthorRequest,
    service: AuthorService = Depends(get_author_service),
):
    await service.update_author(payload, author_id)
    return SuccessResponse(message="Author updated successfully")


@router.delete(
    "/{author_id}",
    response_model=SuccessResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, 409: {"model": ErrorResponse}},
)
async def delete_author(author_id: UUID, service: AuthorService = Depends(get_author_service)):
    await service.delete_author(author_id)
    return SuccessResponse(message="Author deleted successfully")
