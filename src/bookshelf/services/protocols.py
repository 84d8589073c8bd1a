"""
What the services need from storage.

Services are typed against these protocols rather than the concrete repositories, so a
test can hand them an AsyncMock (or any object with the right coroutines).
"""
from typing import Any, Protocol
from uuid import UUID

from bookshelf.models import Author, Book


class AuthorExistenceChecker(Protocol):
    """The one question the book service asks about authors."""

    async def exists(self, entity_id: UUID) -> bool: ...


class AuthorRepositoryProtocol(AuthorExistenceChecker, Protocol):
    async def create(self, **kwargs: Any) -> Author: ...

    async def get_all(self) -> list[Author]: ...

    async def get_by_id(self, entity_id: UUID) -> Author: ...

    async def update(self, entity_id: UUID, fields: dict[str, Any]) -> None: ...

    async def delete(self, entity_id: UUID) -> None: ...


class BookRepositoryProtocol(Protocol):
    async def create(self, **kwargs: Any) -> Book: ...

    async def get_all(self) -> list[Book]: ...

    async def get_by_id(self, entity_id: UUID) -> Book: ...

    async def update(self, entity_id: UUID, fields: dict[str, Any]) -> None: ...

    async def delete(self, entity_id: UUID) -> None: ...
