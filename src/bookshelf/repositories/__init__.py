"""
Repository layer.

Usage:
    from bookshelf.repositories import AuthorRepository, BookRepository
"""

from .base_repository import BaseRepository
from .author_repository import AuthorRepository
from .book_repository import BookRepository

__all__ = [
    "BaseRepository",
    "AuthorRepository",
    "BookRepository",
]
