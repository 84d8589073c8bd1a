"""
Book repository.

Every read eager-loads the book's author (`Book.author` is lazy="raise"), so a book
returned from here can always be rendered together with its author.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookshelf.models.book import Book
from bookshelf.exceptions.base import AuthorNotFoundError, BookNotFoundError, DuplicateBookError
from .base_repository import BaseRepository


class BookRepository(BaseRepository[Book]):
    """
    Repository for Book entity operations.

    - duplicate titles (uq_books_title) -> DuplicateBookError
    - author_id pointing at no author (fk_books_author_id_authors) -> AuthorNotFoundError.
      The service checks existence first; this covers an author deleted in between.
    """

    not_found_error = BookNotFoundError
    duplicate_error = DuplicateBookError
    reference_error = AuthorNotFoundError
    load_options = (selectinload(Book.author),)

    def __init__(self, db: AsyncSession):
        super().__init__(Book, db)
