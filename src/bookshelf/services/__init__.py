from .protocols import AuthorExistenceChecker, AuthorRepositoryProtocol, BookRepositoryProtocol
from .author_service import AuthorService
from .book_service import BookService

__all__ = [
    "AuthorExistenceChecker",
    "AuthorRepositoryProtocol",
    "BookRepositoryProtocol",
    "AuthorService",
    "BookService",
]
