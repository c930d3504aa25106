"""Editorial router: create/update/delete and search across all statuses."""

import uuid
from typing import Annotated, List

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    HTTPException,
    Path,
    Response,
    status,
)
from sqlalchemy.orm import Session

from cms.config import settings
from cms.database import get_db
from cms.dependencies import get_actor, get_program_service, get_view_counter
from cms.exceptions import ConflictError, NotFoundError
from cms.logger import api_logger
from cms.models.category import Category
from cms.models.tag import Tag
from cms.repositories.unit_of_work import UnitOfWork
from cms.routers.discovery import page_response
from cms.schemas.category import CategoryCreate, CategoryResponse
from cms.schemas.comment import CommentResponse
from cms.schemas.program import ProgramCreate, ProgramResponse, ProgramUpdate
from cms.schemas.search import SearchCriteria, SearchResult
from cms.schemas.tag import TagCreate, TagResponse
from cms.services.program_service import ProgramService
from cms.services.view_counter import ViewCounter

router = APIRouter(prefix="/cms")


@router.post(
    "/programs", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED
)
async def create_program(
    payload: ProgramCreate,
    response: Response,
    service: Annotated[ProgramService, Depends(get_program_service)],
    actor: Annotated[str, Depends(get_actor)],
):
    """Create a program with its categories and tags."""
    program = service.create(payload, actor)
    response.headers["Location"] = f"{settings.api_prefix}/cms/programs/{program.id}"
    return ProgramResponse.from_program(program)


@router.put("/programs/{program_id}", response_model=ProgramResponse)
async def update_program(
    program_id: uuid.UUID,
    payload: ProgramUpdate,
    service: Annotated[ProgramService, Depends(get_program_service)],
    actor: Annotated[str, Depends(get_actor)],
):
    """
    Replace an existing program.

    Every field, category and tag is replaced; nothing is merged. Pass
    expected_version to reject the update if someone else changed the
    program first.
    """
    if program_id != payload.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="ID mismatch"
        )

    try:
        program = service.update(program_id, payload, actor)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
        )

    return ProgramResponse.from_program(program)


@router.delete("/programs/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program(
    program_id: uuid.UUID,
    service: Annotated[ProgramService, Depends(get_program_service)],
    actor: Annotated[str, Depends(get_actor)],
):
    """Soft-delete a program."""
    if not service.soft_delete(program_id, actor):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/programs/{program_id}", response_model=ProgramResponse)
async def get_program(
    program_id: uuid.UUID,
    background_tasks: BackgroundTasks,
    service: Annotated[ProgramService, Depends(get_program_service)],
    view_counter: Annotated[ViewCounter, Depends(get_view_counter)],
):
    """Get a program in any status. Each fetch counts as a view."""
    program = service.get_program(program_id)

    if not program:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Program not found"
        )

    background_tasks.add_task(view_counter.record_view, program.id)
    return ProgramResponse.from_program(program)


@router.post("/programs/search", response_model=SearchResult[ProgramResponse])
async def search_programs(
    criteria: SearchCriteria,
    service: Annotated[ProgramService, Depends(get_program_service)],
):
    """
    Search programs in any status.

    Without a status only published programs match; pass status=0 to search
    every status.
    """
    criteria = criteria.clamped(settings.editorial_max_page_size)
    return page_response(service.search(criteria))


@router.get("/programs/status/{program_status}", response_model=List[ProgramResponse])
async def get_programs_by_status(
    program_status: Annotated[int, Path(ge=1, le=5)],
    service: Annotated[ProgramService, Depends(get_program_service)],
):
    """
    Get programs by status for workflow management.

    Status: 1=Draft, 2=UnderReview, 3=Published, 4=Archived, 5=Rejected.
    """
    criteria = SearchCriteria(
        status=program_status, page_size=settings.editorial_max_page_size
    )
    page = service.search(criteria)
    return [ProgramResponse.from_program(program) for program in page.items]


@router.post(
    "/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    payload: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    actor: Annotated[str, Depends(get_actor)],
):
    """Create a category. Names are unique."""
    with UnitOfWork(db) as uow:
        if uow.categories.get_by_name(payload.name, include_deleted=True):
            raise ConflictError(f"Category '{payload.name}' already exists")

        category = uow.categories.add(
            Category(
                name=payload.name,
                description=payload.description,
                color=payload.color,
                created_by=actor,
                updated_by=actor,
            )
        )
        uow.flush()
        response = CategoryResponse.model_validate(category)

    api_logger.info(f"Category {response.name} created by {actor}")
    return response


@router.get("/categories", response_model=List[CategoryResponse])
async def get_categories(db: Annotated[Session, Depends(get_db)]):
    """Get every category that is not deleted, active or not."""
    return UnitOfWork(db).categories.list_all()


@router.post("/tags", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    db: Annotated[Session, Depends(get_db)],
    actor: Annotated[str, Depends(get_actor)],
):
    """Create a tag. Names are unique."""
    with UnitOfWork(db) as uow:
        if uow.tags.get_by_name(payload.name, include_deleted=True):
            raise ConflictError(f"Tag '{payload.name}' already exists")

        tag = uow.tags.add(Tag(name=payload.name, created_by=actor, updated_by=actor))
        uow.flush()
        response = TagResponse.model_validate(tag)

    api_logger.info(f"Tag {response.name} created by {actor}")
    return response


@router.get("/tags", response_model=List[TagResponse])
async def get_tags(db: Annotated[Session, Depends(get_db)]):
    """Get every tag that is not deleted, active or not."""
    return UnitOfWork(db).tags.list_all()


@router.post("/comments/{comment_id}/approve", response_model=CommentResponse)
async def approve_comment(
    comment_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    actor: Annotated[str, Depends(get_actor)],
):
    """Approve a comment so it shows on its program."""
    with UnitOfWork(db) as uow:
        comment = uow.comments.get(comment_id)
        if not comment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
            )

        comment.is_approved = True
        comment.updated_by = actor
        uow.flush()
        response = CommentResponse.model_validate(comment)

    return response
