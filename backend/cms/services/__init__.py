from cms.services.program_service import ProgramService
from cms.services.view_counter import ViewCounter
from cms.services.seed import seed_reference_data

__all__ = ["ProgramService", "ViewCounter", "seed_reference_data"]
