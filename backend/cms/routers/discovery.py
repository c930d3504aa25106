"""Discovery router: public, read-only access to published programs."""

import uuid
from datetime import datetime
from typing import Annotated, List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from cms.cache import ReadThroughCache, get_cache, make_cache_key
from cms.config import settings
from cms.database import get_db
from cms.dependencies import get_program_service, get_view_counter
from cms.logger import api_logger
from cms.models.comment import Comment
from cms.models.enums import ProgramStatus, SortKey
from cms.repositories.program_repository import ProgramPage
from cms.repositories.unit_of_work import UnitOfWork
from cms.schemas.comment import CommentCreate, CommentResponse
from cms.schemas.program import ProgramResponse
from cms.schemas.search import SearchCriteria, SearchResult
from cms.services.program_service import ProgramService
from cms.services.view_counter import ViewCounter
from cms.utils.params import parse_uuid_list

router = APIRouter(prefix="/discovery")

PUBLISHED = int(ProgramStatus.PUBLISHED)


def page_response(page: ProgramPage) -> SearchResult[ProgramResponse]:
    """Map a page of programs to its response shape."""
    return SearchResult[ProgramResponse].build(
        items=[ProgramResponse.from_program(program) for program in page.items],
        total_count=page.total_count,
        page=page.page,
        page_size=page.page_size,
    )


def _published_listing(
    service: ProgramService, sort_key: SortKey, count: int
) -> list[dict]:
    criteria = SearchCriteria(
        status=PUBLISHED,
        page_size=count,
        sort_by=sort_key.value,
        sort_descending=True,
    )
    page = service.search(criteria)
    return [
        ProgramResponse.from_program(program).model_dump(mode="json")
        for program in page.items
    ]


@router.get("/search", response_model=SearchResult[ProgramResponse])
async def search_programs(
    service: Annotated[ProgramService, Depends(get_program_service)],
    cache: Annotated[ReadThroughCache, Depends(get_cache)],
    search_term: str | None = Query(None, description="Search in title and description"),
    program_type: int | None = Query(None, alias="type", ge=1, le=5),
    language: int | None = Query(None, ge=1, le=4),
    category_ids: str | None = Query(None, description="Comma-separated category IDs"),
    tag_ids: str | None = Query(None, description="Comma-separated tag IDs"),
    from_date: datetime | None = Query(None),
    to_date: datetime | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1),
    sort_by: str = Query("createdat", description="Sort field"),
    sort_desc: bool = Query(True, description="Sort descending"),
):
    """
    Search published programs (cached for 5 minutes).

    Supports:
    - Substring search on title and description
    - Filtering by type, language, categories, tags and published date range
    - Sorting by title, publisheddate, viewcount, rating, duration (default: creation time)
    """
    criteria = SearchCriteria(
        search_term=search_term.strip() if search_term and search_term.strip() else None,
        type=program_type,
        language=language,
        status=PUBLISHED,
        category_ids=parse_uuid_list(category_ids),
        tag_ids=parse_uuid_list(tag_ids),
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=min(page_size, settings.public_max_page_size),
        sort_by=SortKey.parse(sort_by).value,
        sort_descending=sort_desc,
    )

    cache_key = make_cache_key("search", **criteria.model_dump(mode="json"))
    return cache.get_or_compute(
        cache_key,
        settings.search_cache_ttl,
        lambda: page_response(service.search(criteria)).model_dump(mode="json"),
    )


@router.get("/programs/{program_id}", response_model=ProgramResponse)
async def get_program(
    program_id: uuid.UUID,
    background_tasks: BackgroundTasks,
    service: Annotated[ProgramService, Depends(get_program_service)],
    view_counter: Annotated[ViewCounter, Depends(get_view_counter)],
):
    """Get a published program by ID. Each successful fetch counts as a view."""
    program = service.get_program(program_id)

    if not program or not program.is_published:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
        )

    background_tasks.add_task(view_counter.record_view, program.id)
    return ProgramResponse.from_program(program)


@router.get(
    "/categories/{category_id}/programs",
    response_model=SearchResult[ProgramResponse],
)
async def get_programs_by_category(
    category_id: uuid.UUID,
    service: Annotated[ProgramService, Depends(get_program_service)],
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1),
):
    """Get published programs in a category, newest first."""
    criteria = SearchCriteria(
        category_ids=[category_id],
        status=PUBLISHED,
        page=page,
        page_size=min(page_size, settings.public_max_page_size),
        sort_by=SortKey.PUBLISHED_DATE.value,
        sort_descending=True,
    )
    return page_response(service.search(criteria))


@router.get("/tags/{tag_id}/programs", response_model=SearchResult[ProgramResponse])
async def get_programs_by_tag(
    tag_id: uuid.UUID,
    service: Annotated[ProgramService, Depends(get_program_service)],
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1),
):
    """Get published programs with a tag, newest first."""
    criteria = SearchCriteria(
        tag_ids=[tag_id],
        status=PUBLISHED,
        page=page,
        page_size=min(page_size, settings.public_max_page_size),
        sort_by=SortKey.PUBLISHED_DATE.value,
        sort_descending=True,
    )
    return page_response(service.search(criteria))


@router.get("/trending", response_model=List[ProgramResponse])
async def get_trending_programs(
    service: Annotated[ProgramService, Depends(get_program_service)],
    cache: Annotated[ReadThroughCache, Depends(get_cache)],
    count: int = Query(10, ge=1, description="Number of programs to return"),
):
    """Get the most viewed published programs (cached for 15 minutes)."""
    count = min(count, settings.public_max_page_size)
    return cache.get_or_compute(
        make_cache_key("trending", count=count),
        settings.trending_cache_ttl,
        lambda: _published_listing(service, SortKey.VIEW_COUNT, count),
    )


@router.get("/recent", response_model=List[ProgramResponse])
async def get_recent_programs(
    service: Annotated[ProgramService, Depends(get_program_service)],
    cache: Annotated[ReadThroughCache, Depends(get_cache)],
    count: int = Query(10, ge=1, description="Number of programs to return"),
):
    """Get the most recently published programs (cached for 10 minutes)."""
    count = min(count, settings.public_max_page_size)
    return cache.get_or_compute(
        make_cache_key("recent", count=count),
        settings.recent_cache_ttl,
        lambda: _published_listing(service, SortKey.PUBLISHED_DATE, count),
    )


@router.post(
    "/programs/{program_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    program_id: uuid.UUID,
    payload: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Submit a comment on a published program.

    Comments are stored unapproved and stay hidden until an editor approves them.
    """
    with UnitOfWork(db) as uow:
        program = uow.programs.get(program_id)
        if not program or not program.is_published:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
            )

        comment = uow.comments.add(
            Comment(
                program_id=program.id,
                content=payload.content,
                user_name=payload.user_name,
                user_email=payload.user_email,
                created_by=payload.user_name,
                updated_by=payload.user_name,
            )
        )
        uow.flush()
        response = CommentResponse.model_validate(comment)

    api_logger.info(f"Comment {response.id} submitted for program {program_id}")
    return response
