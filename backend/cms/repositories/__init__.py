from cms.repositories.base import Repository
from cms.repositories.program_repository import ProgramPage, ProgramRepository
from cms.repositories.unit_of_work import UnitOfWork

__all__ = ["Repository", "ProgramPage", "ProgramRepository", "UnitOfWork"]
