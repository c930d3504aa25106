import math
import uuid
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from cms.config import settings
from cms.models.base import as_naive_utc
from cms.models.enums import SortKey

T = TypeVar("T")


class SearchCriteria(BaseModel):
    """Filters, pagination and ordering for a program search."""

    search_term: str | None = None
    type: int | None = Field(None, ge=1, le=5)
    language: int | None = Field(None, ge=1, le=4)
    # None means published only; 0 (ALL_STATUSES) disables the status filter
    status: int | None = Field(None, ge=0, le=5)
    category_ids: list[uuid.UUID] = []
    tag_ids: list[uuid.UUID] = []
    from_date: datetime | None = None
    to_date: datetime | None = None
    page: int = Field(1, ge=1)
    page_size: int = Field(settings.default_page_size, ge=1)
    sort_by: str = "createdat"
    sort_descending: bool = True

    @field_validator("from_date", "to_date")
    @classmethod
    def normalize_dates(cls, value: datetime | None) -> datetime | None:
        # Bounds compare against naive UTC published dates
        return as_naive_utc(value)

    @property
    def sort_key(self) -> SortKey:
        return SortKey.parse(self.sort_by)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def clamped(self, max_page_size: int) -> "SearchCriteria":
        """Copy with page_size capped at max_page_size."""
        return self.model_copy(update={"page_size": min(self.page_size, max_page_size)})


class SearchResult(BaseModel, Generic[T]):
    """One page of search results."""

    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, items: list, total_count: int, page: int, page_size: int):
        total_pages = math.ceil(total_count / page_size) if total_count > 0 else 1
        return cls(
            items=items,
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )
