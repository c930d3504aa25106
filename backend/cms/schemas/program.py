import uuid
from datetime import datetime, timedelta

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator

from cms.models.base import as_naive_utc
from cms.models.enums import Language, ProgramStatus, ProgramType, display_name
from cms.models.program import Program
from cms.schemas.category import CategoryResponse
from cms.schemas.comment import CommentResponse
from cms.schemas.tag import TagResponse

_url_adapter = TypeAdapter(AnyHttpUrl)


class ProgramBase(BaseModel):
    """Fields supplied when creating or replacing a program."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field("", max_length=2000)
    thumbnail_url: str = Field("", max_length=1000)
    video_url: str = Field(..., min_length=1, max_length=1000)
    duration: timedelta
    published_date: datetime
    type: ProgramType
    language: Language
    status: ProgramStatus = ProgramStatus.DRAFT
    category_ids: list[uuid.UUID] = []
    tag_ids: list[uuid.UUID] = []

    @field_validator("video_url")
    @classmethod
    def validate_video_url(cls, value: str) -> str:
        _url_adapter.validate_python(value)
        return value

    @field_validator("thumbnail_url")
    @classmethod
    def validate_thumbnail_url(cls, value: str) -> str:
        # Thumbnail is optional; an empty string means none
        if value:
            _url_adapter.validate_python(value)
        return value

    @field_validator("published_date")
    @classmethod
    def normalize_published_date(cls, value: datetime) -> datetime:
        return as_naive_utc(value)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("duration must not be negative")
        return value


class ProgramCreate(ProgramBase):
    """Schema for creating a program."""

    pass


class ProgramUpdate(ProgramBase):
    """Schema for replacing every field of an existing program."""

    id: uuid.UUID
    expected_version: int | None = Field(
        None, ge=1, description="Reject the update if the stored version differs"
    )


class ProgramResponse(BaseModel):
    """Program response schema with denormalized categories, tags and comments."""

    id: uuid.UUID
    title: str
    description: str
    thumbnail_url: str
    video_url: str
    duration: timedelta
    published_date: datetime
    type: int
    type_name: str
    language: int
    language_name: str
    status: int
    status_name: str
    view_count: int
    rating: float
    version: int
    created_at: datetime
    updated_at: datetime
    created_by: str | None = None
    updated_by: str | None = None
    categories: list[CategoryResponse] = []
    tags: list[TagResponse] = []
    comments: list[CommentResponse] = []

    @classmethod
    def from_program(cls, program: Program) -> "ProgramResponse":
        """Map a hydrated program, hiding soft-deleted links and unapproved comments."""
        return cls(
            id=program.id,
            title=program.title,
            description=program.description,
            thumbnail_url=program.thumbnail_url,
            video_url=program.video_url,
            duration=program.duration,
            published_date=program.published_date,
            type=program.program_type,
            type_name=display_name(program.type_enum),
            language=program.language,
            language_name=display_name(program.language_enum),
            status=program.status,
            status_name=display_name(program.status_enum),
            view_count=program.view_count,
            rating=float(program.rating or 0),
            version=program.version,
            created_at=program.created_at,
            updated_at=program.updated_at,
            created_by=program.created_by,
            updated_by=program.updated_by,
            categories=[
                CategoryResponse.model_validate(link.category)
                for link in program.program_categories
                if not link.category.is_deleted
            ],
            tags=[
                TagResponse.model_validate(link.tag)
                for link in program.program_tags
                if not link.tag.is_deleted
            ],
            comments=[
                CommentResponse.model_validate(comment)
                for comment in program.comments
                if comment.is_approved and not comment.is_deleted
            ],
        )
