"""
Centralized access to all database models.

Importing this package registers every model with Base.metadata, which is what
`init_models()` and the test fixtures rely on before calling `create_all`.

    from bookshelf.models import Author, Book
"""

from .author import Author
from .book import Book

__all__ = [
    "Author",
    "Book",
]
