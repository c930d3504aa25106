import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Uuid


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime | None) -> datetime | None:
    """Convert an offset-aware datetime to the naive UTC form used in storage."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class AuditMixin:
    """Columns shared by every first-class entity."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Timestamps (set by the store, never by callers)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Soft delete
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    created_by = Column(String(255), nullable=True)
    updated_by = Column(String(255), nullable=True)
