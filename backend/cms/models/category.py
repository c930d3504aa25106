from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from cms.database import Base
from cms.models.base import AuditMixin


class ProgramCategory(Base):
    """Association row linking a program to a category."""

    __tablename__ = "program_categories"

    program_id = Column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True
    )
    category_id = Column(
        Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )

    # Relationships
    program = relationship("Program", back_populates="program_categories")
    category = relationship("Category", back_populates="program_categories")


class Category(AuditMixin, Base):
    """Category model for program categorization."""

    __tablename__ = "categories"

    name = Column(String(200), unique=True, nullable=False, index=True)
    description = Column(String(1000), nullable=False, default="")
    color = Column(String(7), nullable=False, default="")  # Hex color code
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    program_categories = relationship(
        "ProgramCategory", back_populates="category", cascade="all, delete-orphan"
    )
