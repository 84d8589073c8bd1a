"""Author use cases. Plain delegation to the author repository."""
import logging
from uuid import UUID

from bookshelf.exceptions.base import AuthorNotFoundError
from bookshelf.models import Author
from bookshelf.schemas.author import CreateAuthorRequest, UpdateAuthorRequest
from .protocols import AuthorRepositoryProtocol

logger = logging.getLogger(__name__)


class AuthorService:
    def __init__(self, authors: AuthorRepositoryProtocol):
        self.authors = authors

    async def create_author(self, data: CreateAuthorRequest) -> Author:
        return await self.authors.create(name=data.name)

    async def get_all_authors(self) -> list[Author]:
        authors = await self.authors.get_all()
        if not authors:
            logger.debug("author_service.get_all.empty")
            raise AuthorNotFoundError()
        return authors

    async def get_author_by_id(self, author_id: UUID) -> Author:
        return await self.authors.get_by_id(author_id)

    async def update_author(self, data: UpdateAuthorRequest, author_id: UUID) -> None:
        await self.authors.update(author_id, {"name": data.name})

    async def delete_author(self, author_id: UUID) -> None:
        """Raises AuthorHasBooksError while any book still references the author."""
        await self.authors.delete(author_id)
