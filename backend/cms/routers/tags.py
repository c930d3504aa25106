"""Tags router for public tag browsing."""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from cms.database import get_db
from cms.models.enums import ProgramStatus
from cms.models.program import Program
from cms.models.tag import ProgramTag, Tag
from cms.schemas.tag import TagWithCount

router = APIRouter(prefix="/tags")


@router.get("/", response_model=List[TagWithCount])
async def get_tags(
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(None, description="Search tags by name"),
    limit: int | None = Query(
        None, ge=1, le=500, description="Limit number of results"
    ),
):
    """
    Get active tags with published program counts.

    Args:
        search: Optional search query to filter tags by name
        limit: Optional limit on number of tags returned

    Returns list of tags ordered by usage count (most used first).
    """
    query = (
        db.query(Tag, func.count(Program.id).label("program_count"))
        .outerjoin(ProgramTag, ProgramTag.tag_id == Tag.id)
        .outerjoin(
            Program,
            and_(
                Program.id == ProgramTag.program_id,
                Program.status == int(ProgramStatus.PUBLISHED),
                Program.is_deleted.is_(False),
            ),
        )
        .filter(Tag.is_deleted.is_(False), Tag.is_active.is_(True))
    )

    # Apply search if provided
    if search:
        search_term = f"%{search}%"
        query = query.filter(Tag.name.ilike(search_term))

    query = query.group_by(Tag.id).order_by(func.count(Program.id).desc(), Tag.name)

    # Apply limit if provided
    if limit:
        query = query.limit(limit)

    return [
        {"id": tag.id, "name": tag.name, "program_count": count}
        for tag, count in query.all()
    ]
