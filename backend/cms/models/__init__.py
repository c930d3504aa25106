from cms.models.program import Program
from cms.models.category import Category, ProgramCategory
from cms.models.tag import Tag, ProgramTag
from cms.models.comment import Comment
from cms.models.enums import (
    ALL_STATUSES,
    Language,
    ProgramStatus,
    ProgramType,
    SortKey,
)

__all__ = [
    "Program",
    "Category",
    "ProgramCategory",
    "Tag",
    "ProgramTag",
    "Comment",
    "ALL_STATUSES",
    "Language",
    "ProgramStatus",
    "ProgramType",
    "SortKey",
]
