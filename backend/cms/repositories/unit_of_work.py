"""Transaction scope shared by the program write workflow."""

from sqlalchemy.orm import Session

from cms.logger import db_logger
from cms.models.category import Category
from cms.models.comment import Comment
from cms.models.tag import Tag
from cms.repositories.base import Repository
from cms.repositories.program_repository import ProgramRepository


class UnitOfWork:
    """
    One database transaction over the program, category, tag and comment
    repositories.

    Use as a context manager: the transaction commits when the block exits
    cleanly and rolls back when anything inside raises. The original
    exception is always re-raised.

        with UnitOfWork(db) as uow:
            uow.programs.add(program)
    """

    def __init__(self, db: Session):
        self.db = db
        self.programs = ProgramRepository(db)
        self.categories = Repository(db, Category)
        self.tags = Repository(db, Tag)
        self.comments = Repository(db, Comment)

    def __enter__(self) -> "UnitOfWork":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            db_logger.warning(f"Rolling back transaction after {exc_type.__name__}: {exc}")
            self.rollback()
            return False

        try:
            self.commit()
        except Exception:
            self.rollback()
            raise
        return False

    def begin(self) -> None:
        if not self.db.in_transaction():
            self.db.begin()

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
