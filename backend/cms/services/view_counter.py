"""View-count side effect of program detail fetches."""

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from cms.logger import db_logger
from cms.repositories.program_repository import ProgramRepository


class ViewCounter:
    """Records program views in their own short transaction."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def record_view(self, program_id: uuid.UUID) -> bool:
        """
        Add one view to a program.

        Never raises: a failed increment is logged and reported as False so
        the detail fetch that triggered it is unaffected.
        """
        db = self._session_factory()
        try:
            updated = ProgramRepository(db).increment_view_count(program_id)
            db.commit()
            return updated > 0
        except SQLAlchemyError as e:
            db.rollback()
            db_logger.error(f"Failed to record view for program {program_id}: {e}")
            return False
        finally:
            db.close()
