from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from bookshelf.database.base import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .author import Author


class Book(Base):
    """
    SQLAlchemy model for Book.

    Title is unique across the system (constraint `uq_books_title`). The author
    relationship is declared lazy="raise": reads must eager-load it explicitly, which
    the BookRepository always does.
    """
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    # Foreign key to authors table
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("authors.id", ondelete="RESTRICT"),
        index=True,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # Many-to-One: each book belongs to exactly one author
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id!r}, title={self.title!r}, author_id={self.author_id!r})>"
