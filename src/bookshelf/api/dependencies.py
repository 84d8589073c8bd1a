"""
FastAPI dependency wiring: session -> repositories -> services.

All repositories of one request share the request's session, and with it the single
transaction opened by `get_async_session`.

The session is declared with `scope="function"`: its exit code (commit or rollback) runs
as soon as the endpoint returns, before the response is serialized and sent. A failing
commit therefore surfaces as an error response instead of following a success.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database.session import get_async_session
from bookshelf.repositories import AuthorRepository, BookRepository
from bookshelf.services import AuthorService, BookService

RequestSession = Depends(get_async_session, scope="function")


def get_author_repository(db: AsyncSession = RequestSession) -> AuthorRepository:
    return AuthorRepository(db)


def get_book_repository(db: AsyncSession = RequestSession) -> BookRepository:
    return BookRepository(db)


def get_author_service(authors: AuthorRepository = Depends(get_author_repository)) -> AuthorService:
    return AuthorService(authors)


def get_book_service(
    books: BookRepository = Depends(get_book_repository),
    authors: AuthorRepository = Depends(get_author_repository),
) -> BookService:
    return BookService(books, authors)
