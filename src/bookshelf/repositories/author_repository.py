"""
Author repository.

Authors are referenced by books, so this repository also serves as the existence probe
the book service runs before inserting a book (`exists`, inherited from BaseRepository).
"""
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.models.author import Author
from bookshelf.exceptions.base import AuthorNotFoundError, AuthorHasBooksError
from .base_repository import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Deleting an author that still owns books trips the RESTRICT foreign key on
    books.author_id, which surfaces as AuthorHasBooksError.
    """

    not_found_error = AuthorNotFoundError
    reference_error = AuthorHasBooksError

    def __init__(self, db: AsyncSession):
        super().__init__(Author, db)
