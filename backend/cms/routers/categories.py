"""Categories router for public category browsing."""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from cms.database import get_db
from cms.models.category import Category, ProgramCategory
from cms.models.enums import ProgramStatus
from cms.models.program import Program
from cms.schemas.category import CategoryWithCount

router = APIRouter(prefix="/categories")


def _categories_with_counts(db: Session):
    """Active categories joined to their published, live programs."""
    return (
        db.query(
            Category,
            func.count(Program.id).label("program_count"),
        )
        .outerjoin(ProgramCategory, ProgramCategory.category_id == Category.id)
        .outerjoin(
            Program,
            and_(
                Program.id == ProgramCategory.program_id,
                Program.status == int(ProgramStatus.PUBLISHED),
                Program.is_deleted.is_(False),
            ),
        )
        .filter(Category.is_deleted.is_(False), Category.is_active.is_(True))
        .group_by(Category.id)
        .order_by(func.count(Program.id).desc(), Category.name)
    )


def _to_response(category: Category, program_count: int) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "color": category.color,
        "program_count": program_count,
    }


@router.get("/", response_model=List[CategoryWithCount])
async def get_categories(db: Annotated[Session, Depends(get_db)]):
    """
    Get all active categories with published program counts.

    Returns list of categories ordered by usage (most used first).
    """
    return [
        _to_response(category, count)
        for category, count in _categories_with_counts(db).all()
    ]


@router.get("/popular", response_model=List[CategoryWithCount])
async def get_popular_categories(
    db: Annotated[Session, Depends(get_db)],
    limit: int = Query(10, ge=1, le=100),
):
    """
    Get the categories with the most published programs.

    Args:
        limit: Number of categories to return (default: 10)
    """
    return [
        _to_response(category, count)
        for category, count in _categories_with_counts(db).limit(limit).all()
    ]
