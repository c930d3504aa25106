import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for a viewer submitting a comment."""

    content: str = Field(..., min_length=1, max_length=2000)
    user_name: str = Field(..., min_length=1, max_length=100)
    user_email: str = Field(..., max_length=200, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CommentResponse(BaseModel):
    """Comment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    content: str
    user_name: str
    is_approved: bool
    created_at: datetime
