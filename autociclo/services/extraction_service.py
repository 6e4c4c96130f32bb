# autociclo/services/extraction_service.py
"""
Extract a new part from a vehicle: create the part and assign it in one step.
Both writes share a single transaction, so a failed assignment (missing
vehicle, constraint violation, ...) never leaves an orphaned part behind.
"""

from typing import Optional

from autociclo.database import Database
from autociclo.schemas.inventory import AssignmentCreate, ExtractionDetails, ExtractionResult
from autociclo.schemas.part import PartCreate
from autociclo.services import inventory_service, part_service
from autociclo.utils.logger import get_logger

logger = get_logger(__name__)


def extract_part(db: Database, vehicle_id: int, part: PartCreate,
                 details: Optional[ExtractionDetails] = None) -> ExtractionResult:
    details = details or ExtractionDetails()

    def _extract() -> ExtractionResult:
        part_id = part_service.create_part(db, part)
        assignment_id = inventory_service.create_assignment(
            db, AssignmentCreate(vehicle_id=vehicle_id, part_id=part_id, **details.model_dump())
        )
        return ExtractionResult(part_id=part_id, assignment_id=assignment_id)

    result = db.run_in_transaction(_extract)
    logger.info(f"🔧 Part {part.code} extracted from vehicle {vehicle_id} (assignment {result.assignment_id})")
    return result
