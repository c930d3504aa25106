import uuid

from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    """Base category schema."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=1000)
    color: str = Field("", pattern=r"^(#[0-9A-Fa-f]{6})?$")  # Hex color code


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""

    pass


class CategoryResponse(BaseModel):
    """Category response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    color: str


class CategoryWithCount(CategoryResponse):
    """Category with the number of published programs linked to it."""

    program_count: int = 0
