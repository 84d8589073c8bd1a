from .author import CreateAuthorRequest, UpdateAuthorRequest, AuthorResponse
from .book import CreateBookRequest, UpdateBookRequest, BookResponse
from .responses import (
    SuccessResponse,
    BookSuccessResponse,
    BooksSuccessResponse,
    AuthorSuccessResponse,
    AuthorsSuccessResponse,
    ErrorResponse,
    FieldError,
    ValidationErrorResponse,
)

__all__ = [
    "CreateAuthorRequest",
    "UpdateAuthorRequest",
    "AuthorResponse",
    "CreateBookRequest",
    "UpdateBookRequest",
    "BookResponse",
    "SuccessResponse",
    "BookSuccessResponse",
    "BooksSuccessResponse",
    "AuthorSuccessResponse",
    "AuthorsSuccessResponse",
    "ErrorResponse",
    "FieldError",
    "ValidationErrorResponse",
]
