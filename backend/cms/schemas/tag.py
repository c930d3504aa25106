import uuid

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str = Field(..., min_length=1, max_length=100)


class TagResponse(BaseModel):
    """Tag response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class TagWithCount(TagResponse):
    """Tag with the number of published programs linked to it."""

    program_count: int = 0
