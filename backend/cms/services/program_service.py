"""Program write workflow and lookups."""

import uuid

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from cms.exceptions import ConflictError, NotFoundError, ValidationFailedError
from cms.logger import api_logger
from cms.models.program import Program
from cms.repositories.program_repository import ProgramPage
from cms.repositories.unit_of_work import UnitOfWork
from cms.schemas.program import ProgramBase, ProgramUpdate
from cms.schemas.search import SearchCriteria

# Scalar fields replaced wholesale on create and update
SCALAR_FIELDS = (
    "title",
    "description",
    "thumbnail_url",
    "video_url",
    "duration",
    "published_date",
    "language",
    "status",
)


class ProgramService:
    """Creates, replaces, soft-deletes and looks up programs."""

    def __init__(self, db: Session):
        self.db = db
        self.uow = UnitOfWork(db)

    @staticmethod
    def _apply_fields(program: Program, data: ProgramBase) -> None:
        for name in SCALAR_FIELDS:
            value = getattr(data, name)
            if name in ("language", "status"):
                value = int(value)
            setattr(program, name, value)
        program.program_type = int(data.type)

    def get_program(
        self, program_id: uuid.UUID, include_deleted: bool = False
    ) -> Program | None:
        """Get a fully hydrated program, or None when absent."""
        return self.uow.programs.get(program_id, include_deleted=include_deleted)

    def search(
        self, criteria: SearchCriteria, include_deleted: bool = False
    ) -> ProgramPage:
        """
        Search programs.

        Raises:
            ValidationFailedError: from_date is later than to_date
        """
        if (
            criteria.from_date is not None
            and criteria.to_date is not None
            and criteria.from_date > criteria.to_date
        ):
            raise ValidationFailedError("from_date must not be later than to_date")

        return self.uow.programs.search(criteria, include_deleted=include_deleted)

    def create(self, data: ProgramBase, actor: str) -> Program:
        """
        Create a program and its category/tag links in one transaction.

        Args:
            data: Validated program fields, including category and tag IDs
            actor: Name recorded as creator and last updater

        Returns:
            The created program with categories, tags and comments loaded
        """
        with self.uow as uow:
            program = Program(created_by=actor, updated_by=actor)
            self._apply_fields(program, data)
            uow.programs.add(program)
            uow.flush()

            uow.programs.add_category_links(program.id, data.category_ids)
            uow.programs.add_tag_links(program.id, data.tag_ids)
            uow.flush()
            program_id = program.id

        api_logger.info(f"Program {program_id} created by {actor}")
        return self.get_program(program_id)

    def update(self, program_id: uuid.UUID, data: ProgramUpdate, actor: str) -> Program:
        """
        Replace every field and link of an existing program.

        Raises:
            NotFoundError: No live program has this ID
            ConflictError: expected_version was given and does not match
        """
        with self.uow as uow:
            program = uow.programs.get(program_id)
            if program is None:
                raise NotFoundError(f"Program {program_id} not found")

            if data.expected_version is not None and program.version != data.expected_version:
                raise ConflictError(
                    f"Program {program_id} is at version {program.version}, "
                    f"expected {data.expected_version}"
                )

            self._apply_fields(program, data)
            program.updated_by = actor
            # Always write the row so updated_at and version move forward
            flag_modified(program, "updated_by")

            # Replace links: drop every existing row, then insert the new set
            program.program_categories.clear()
            program.program_tags.clear()
            uow.flush()

            uow.programs.add_category_links(program.id, data.category_ids)
            uow.programs.add_tag_links(program.id, data.tag_ids)
            uow.flush()

        api_logger.info(f"Program {program_id} updated by {actor}")
        return self.get_program(program_id)

    def soft_delete(self, program_id: uuid.UUID, actor: str) -> bool:
        """
        Mark a program deleted. Links and comments stay in place.

        Returns:
            True if a live program was deleted, False if none was found
        """
        with self.uow as uow:
            program = uow.programs.get(program_id)
            if program is None:
                return False

            program.is_deleted = True
            program.updated_by = actor

        api_logger.info(f"Program {program_id} soft-deleted by {actor}")
        return True
