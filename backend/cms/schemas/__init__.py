from cms.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryResponse,
    CategoryWithCount,
)
from cms.schemas.tag import TagCreate, TagResponse, TagWithCount
from cms.schemas.comment import CommentCreate, CommentResponse
from cms.schemas.program import (
    ProgramBase,
    ProgramCreate,
    ProgramResponse,
    ProgramUpdate,
)
from cms.schemas.search import SearchCriteria, SearchResult

__all__ = [
    "CategoryBase",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryWithCount",
    "TagCreate",
    "TagResponse",
    "TagWithCount",
    "CommentCreate",
    "CommentResponse",
    "ProgramBase",
    "ProgramCreate",
    "ProgramResponse",
    "ProgramUpdate",
    "SearchCriteria",
    "SearchResult",
]
