import uuid
from dataclasses import dataclass, field

from sqlalchemy import or_, update
from sqlalchemy.orm import Session, joinedload, selectinload

from cms.models.category import ProgramCategory
from cms.models.enums import ALL_STATUSES, ProgramStatus, SortKey
from cms.models.program import Program
from cms.models.tag import ProgramTag
from cms.schemas.search import SearchCriteria

SORT_COLUMNS = {
    SortKey.TITLE: Program.title,
    SortKey.PUBLISHED_DATE: Program.published_date,
    SortKey.VIEW_COUNT: Program.view_count,
    SortKey.RATING: Program.rating,
    SortKey.DURATION: Program.duration,
    SortKey.CREATED_AT: Program.created_at,
}


@dataclass
class ProgramPage:
    """Programs for one page plus the pre-pagination match count."""

    items: list[Program] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _hydrate(with_comments: bool = False) -> list:
    options = [
        selectinload(Program.program_categories).joinedload(ProgramCategory.category),
        selectinload(Program.program_tags).joinedload(ProgramTag.tag),
    ]
    if with_comments:
        options.append(selectinload(Program.comments))
    return options


class ProgramRepository:
    """Reads and writes for programs and their category/tag links."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, include_deleted: bool):
        query = self.db.query(Program)
        if not include_deleted:
            query = query.filter(Program.is_deleted.is_(False))
        return query

    def get(
        self, program_id: uuid.UUID, include_deleted: bool = False
    ) -> Program | None:
        """Fetch one program with categories, tags and comments loaded."""
        return (
            self._base_query(include_deleted)
            .options(*_hydrate(with_comments=True))
            .filter(Program.id == program_id)
            .first()
        )

    def search(
        self, criteria: SearchCriteria, include_deleted: bool = False
    ) -> ProgramPage:
        """
        Run a filtered, sorted and paginated program search.

        All supplied filters are combined with AND. A missing status means
        published programs only; ALL_STATUSES disables the status filter.
        """
        query = self._base_query(include_deleted)

        # Apply filters
        term = (criteria.search_term or "").strip()
        if term:
            pattern = f"%{_escape_like(term)}%"
            query = query.filter(
                or_(
                    Program.title.ilike(pattern, escape="\\"),
                    Program.description.ilike(pattern, escape="\\"),
                )
            )

        if criteria.type is not None:
            query = query.filter(Program.program_type == criteria.type)

        if criteria.language is not None:
            query = query.filter(Program.language == criteria.language)

        if criteria.status is None:
            query = query.filter(Program.status == int(ProgramStatus.PUBLISHED))
        elif criteria.status != ALL_STATUSES:
            query = query.filter(Program.status == criteria.status)

        if criteria.category_ids:
            query = query.filter(
                Program.program_categories.any(
                    ProgramCategory.category_id.in_(criteria.category_ids)
                )
            )

        if criteria.tag_ids:
            query = query.filter(
                Program.program_tags.any(ProgramTag.tag_id.in_(criteria.tag_ids))
            )

        if criteria.from_date is not None:
            query = query.filter(Program.published_date >= criteria.from_date)

        if criteria.to_date is not None:
            query = query.filter(Program.published_date <= criteria.to_date)

        # Get total count before pagination
        total = query.count()

        # Pages past the end are empty; the offset may not fit a database integer
        if criteria.offset >= total:
            return ProgramPage(
                items=[], total_count=total, page=criteria.page, page_size=criteria.page_size
            )

        # Apply sorting; id breaks ties so pages never overlap
        sort_column = SORT_COLUMNS[criteria.sort_key]
        if criteria.sort_descending:
            query = query.order_by(sort_column.desc(), Program.id.desc())
        else:
            query = query.order_by(sort_column.asc(), Program.id.asc())

        # Apply pagination
        items = (
            query.options(*_hydrate())
            .offset(criteria.offset)
            .limit(criteria.page_size)
            .all()
        )

        return ProgramPage(
            items=items,
            total_count=total,
            page=criteria.page,
            page_size=criteria.page_size,
        )

    def add(self, program: Program) -> Program:
        self.db.add(program)
        return program

    def add_category_links(
        self, program_id: uuid.UUID, category_ids: list[uuid.UUID]
    ) -> list[ProgramCategory]:
        links = [
            ProgramCategory(program_id=program_id, category_id=category_id)
            for category_id in dict.fromkeys(category_ids)
        ]
        self.db.add_all(links)
        return links

    def add_tag_links(
        self, program_id: uuid.UUID, tag_ids: list[uuid.UUID]
    ) -> list[ProgramTag]:
        links = [
            ProgramTag(program_id=program_id, tag_id=tag_id)
            for tag_id in dict.fromkeys(tag_ids)
        ]
        self.db.add_all(links)
        return links

    def increment_view_count(self, program_id: uuid.UUID) -> int:
        """Atomically add one view in SQL. Returns the number of rows touched."""
        result = self.db.execute(
            update(Program)
            .where(Program.id == program_id, Program.is_deleted.is_(False))
            .values(view_count=Program.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
