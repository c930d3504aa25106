from sqlalchemy import Column, DateTime, Integer, Interval, Numeric, String
from sqlalchemy.orm import relationship

from cms.database import Base
from cms.models.base import AuditMixin
from cms.models.enums import Language, ProgramStatus, ProgramType


class Program(AuditMixin, Base):
    """A video program (podcast, documentary, interview, ...)."""

    __tablename__ = "programs"

    title = Column(String(500), nullable=False, index=True)
    description = Column(String(2000), nullable=False, default="")
    thumbnail_url = Column(String(1000), nullable=False, default="")
    video_url = Column(String(1000), nullable=False)

    # Program metadata
    duration = Column(Interval, nullable=False)
    published_date = Column(DateTime, nullable=False, index=True)
    program_type = Column("type", Integer, nullable=False, index=True)
    language = Column(Integer, nullable=False, index=True)
    status = Column(
        Integer, nullable=False, default=int(ProgramStatus.DRAFT), index=True
    )

    # Popularity
    view_count = Column(Integer, default=0, nullable=False)
    rating = Column(Numeric(3, 2), default=0, nullable=False)

    # Optimistic concurrency token, bumped on every ORM update
    version = Column(Integer, nullable=False)

    # Relationships
    program_categories = relationship(
        "ProgramCategory", back_populates="program", cascade="all, delete-orphan"
    )
    program_tags = relationship(
        "ProgramTag", back_populates="program", cascade="all, delete-orphan"
    )
    comments = relationship(
        "Comment", back_populates="program", cascade="all, delete-orphan"
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def type_enum(self) -> ProgramType:
        return ProgramType(self.program_type)

    @property
    def language_enum(self) -> Language:
        return Language(self.language)

    @property
    def status_enum(self) -> ProgramStatus:
        return ProgramStatus(self.status)

    @property
    def is_published(self) -> bool:
        return self.status == ProgramStatus.PUBLISHED
