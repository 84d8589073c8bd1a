"""Book request/response models.

`author_id` stays a plain string on the way in: parsing it is the book service's job,
and a malformed value is reported as "invalid author ID" rather than a field error.
"""
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .author import AuthorResponse


class CreateBookRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    author_id: str = Field(min_length=1)


class UpdateBookRequest(BaseModel):
    # title and author are immutable after creation
    description: str = Field(min_length=1)


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    author: AuthorResponse
