"""
Book use cases.

The only rule beyond plain delegation lives in `create_book`: the author reference has to
parse as a UUID and point at an existing author before anything is inserted. Errors from
the repositories are already classified and propagate unchanged.
"""
import logging
from uuid import UUID

from bookshelf.exceptions.base import AuthorNotFoundError, BookNotFoundError, InvalidAuthorIDError
from bookshelf.models import Book
from bookshelf.schemas.book import CreateBookRequest, UpdateBookRequest
from .protocols import AuthorExistenceChecker, BookRepositoryProtocol

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, books: BookRepositoryProtocol, authors: AuthorExistenceChecker):
        self.books = books
        self.authors = authors

    async def create_book(self, data: CreateBookRequest) -> Book:
        """
        Raises:
            InvalidAuthorIDError: author_id is not a UUID (no storage access happens)
            AuthorNotFoundError: no author with that id (no insert happens)
            DuplicateBookError: title already taken
        """
        try:
            author_id = UUID(data.author_id)
        except ValueError:
            logger.info("book_service.create.invalid_author_id")
            raise InvalidAuthorIDError() from None

        if not await self.authors.exists(author_id):
            logger.info("book_service.create.author_missing", extra={"author_id": str(author_id)})
            raise AuthorNotFoundError()

        return await self.books.create(
            title=data.title,
            description=data.description,
            author_id=author_id,
        )

    async def get_all_books(self) -> list[Book]:
        books = await self.books.get_all()
        # an empty collection is reported as not-found
        if not books:
            raise BookNotFoundError()
        return books

    async def get_book_by_id(self, book_id: UUID) -> Book:
        return await self.books.get_by_id(book_id)

    async def update_book(self, data: UpdateBookRequest, book_id: UUID) -> None:
        await self.books.update(book_id, {"description": data.description})

    async def delete_book(self, book_id: UUID) -> None:
        await self.books.delete(book_id)
