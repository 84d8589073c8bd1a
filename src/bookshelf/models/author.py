from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from bookshelf.database.base import Base
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .book import Book


class Author(Base):
    """
    SQLAlchemy model for Author.

    An author owns zero or more books. Deleting an author that still owns books is
    refused by the database (the books.author_id foreign key is ON DELETE RESTRICT).
    """
    __tablename__ = "authors"

    # Unique identifier, generated by the application at insert time
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Timestamp for last update (auto-updated on modification)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # One-to-Many: never loaded implicitly; no ORM cascade, the FK restricts deletes
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
        passive_deletes="all",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id!r}, name={self.name!r})>"
