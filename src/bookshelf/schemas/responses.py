"""
JSON envelopes.

Success: {"status": "success", "message": ..., <payload key>: ...}
Error:   {"status": "error", "message": ...}
Validation error adds "errors": [{"field": ..., "message": ...}]
"""
from typing import Literal, Sequence

from pydantic import BaseModel

from bookshelf.models import Author, Book
from .author import AuthorResponse
from .book import BookResponse


class SuccessResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str


class BookSuccessResponse(SuccessResponse):
    book: BookResponse

    @classmethod
    def from_entity(cls, message: str, book: Book) -> "BookSuccessResponse":
        return cls(message=message, book=BookResponse.model_validate(book))


class BooksSuccessResponse(SuccessResponse):
    books: list[BookResponse]

    @classmethod
    def from_entities(cls, message: str, books: Sequence[Book]) -> "BooksSuccessResponse":
        return cls(message=message, books=[BookResponse.model_validate(b) for b in books])


class AuthorSuccessResponse(SuccessResponse):
    author: AuthorResponse

    @classmethod
    def from_entity(cls, message: str, author: Author) -> "AuthorSuccessResponse":
        return cls(message=message, author=AuthorResponse.model_validate(author))


class AuthorsSuccessResponse(SuccessResponse):
    authors: list[AuthorResponse]

    @classmethod
    def from_entities(cls, message: str, authors: Sequence[Author]) -> "AuthorsSuccessResponse":
        return cls(message=message, authors=[AuthorResponse.model_validate(a) for a in authors])


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: list[FieldError]
