from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from cms.database import Base
from cms.models.base import AuditMixin


class Comment(AuditMixin, Base):
    """Viewer comment on a program; hidden until approved."""

    __tablename__ = "comments"

    content = Column(String(2000), nullable=False)
    user_name = Column(String(100), nullable=False)
    user_email = Column(String(200), nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)

    program_id = Column(
        Uuid,
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    program = relationship("Program", back_populates="comments")
