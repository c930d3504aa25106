from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from cms.database import Base
from cms.models.base import AuditMixin


class ProgramTag(Base):
    """Association row linking a program to a tag."""

    __tablename__ = "program_tags"

    program_id = Column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id = Column(Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    # Relationships
    program = relationship("Program", back_populates="program_tags")
    tag = relationship("Tag", back_populates="program_tags")


class Tag(AuditMixin, Base):
    """Tag model for program tagging."""

    __tablename__ = "tags"

    name = Column(String(100), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    program_tags = relationship(
        "ProgramTag", back_populates="tag", cascade="all, delete-orphan"
    )
