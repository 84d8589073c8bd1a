"""Author request/response models."""
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateAuthorRequest(BaseModel):
    name: str = Field(min_length=1)


class UpdateAuthorRequest(BaseModel):
    name: str = Field(min_length=1)


class AuthorResponse(BaseModel):
    """Public author shape, also nested inside every book."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
