# autociclo/services/inventory_service.py
"""
Inventory assignments: the N:N join recording which parts came out of which vehicle.
A (vehicle, part) pair can be assigned only once; the check runs before the
insert and the unique constraint on the table backs it up.
"""

from typing import List, Optional

from sqlalchemy import and_, delete, func, insert, select, update

from autociclo.database import Database
from autociclo.exceptions import DuplicateAssignmentError
from autociclo.models.inventory_assignment import InventoryAssignment
from autociclo.models.part import Part
from autociclo.models.vehicle import Vehicle
from autociclo.schemas.inventory import (
    AssignmentCreate, AssignmentDetail, AssignmentOut, AssignmentUpdate,
)
from autociclo.utils.logger import get_logger

logger = get_logger(__name__)

assignments = InventoryAssignment.__table__
vehicles = Vehicle.__table__
parts = Part.__table__


def _detail_query():
    return (
        select(
            assignments,
            vehicles.c.plate,
            vehicles.c.make,
            vehicles.c.model,
            parts.c.code.label("part_code"),
            parts.c.name.label("part_name"),
            parts.c.category.label("part_category"),
        )
        .select_from(
            assignments
            .join(vehicles, assignments.c.vehicle_id == vehicles.c.id)
            .join(parts, assignments.c.part_id == parts.c.id)
        )
        .order_by(assignments.c.extraction_date.desc(), assignments.c.id.desc())
    )


def _details(db: Database, stmt) -> List[AssignmentDetail]:
    return [AssignmentDetail.model_validate(row) for row in db.query_many(stmt)]


def create_assignment(db: Database, assignment: AssignmentCreate) -> int:
    """Assign a part to a vehicle. Raises DuplicateAssignmentError if already assigned."""
    if assignment_exists(db, assignment.vehicle_id, assignment.part_id):
        raise DuplicateAssignmentError(assignment.vehicle_id, assignment.part_id)
    result = db.execute(insert(assignments).values(**assignment.model_dump()))
    logger.info(
        f"Part {assignment.part_id} assigned to vehicle {assignment.vehicle_id} "
        f"(id={result.inserted_id}, qty={assignment.quantity})"
    )
    return result.inserted_id


def list_assignments(db: Database) -> List[AssignmentDetail]:
    return _details(db, _detail_query())


def list_by_vehicle(db: Database, vehicle_id: int) -> List[AssignmentDetail]:
    return _details(db, _detail_query().where(assignments.c.vehicle_id == vehicle_id))


def list_by_part(db: Database, part_id: int) -> List[AssignmentDetail]:
    return _details(db, _detail_query().where(assignments.c.part_id == part_id))


def get_assignment(db: Database, assignment_id: int) -> Optional[AssignmentOut]:
    row = db.query_one(select(assignments).where(assignments.c.id == assignment_id))
    return AssignmentOut.model_validate(row) if row else None


def update_assignment(db: Database, vehicle_id: int, part_id: int, data: AssignmentUpdate) -> bool:
    """Overwrite quantity, condition, date, price and notes of one (vehicle, part) pair."""
    values = data.model_dump(include={"quantity", "condition", "extraction_date", "unit_price", "notes"})
    stmt = (
        update(assignments)
        .where(and_(assignments.c.vehicle_id == vehicle_id, assignments.c.part_id == part_id))
        .values(**values)
    )
    result = db.execute(stmt)
    logger.info(f"Assignment updated: vehicle={vehicle_id} part={part_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def delete_assignment(db: Database, assignment_id: int) -> bool:
    result = db.execute(delete(assignments).where(assignments.c.id == assignment_id))
    logger.info(f"Assignment deleted: id={assignment_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def assignment_exists(db: Database, vehicle_id: int, part_id: int) -> bool:
    stmt = select(func.count().label("total")).select_from(assignments).where(
        assignments.c.vehicle_id == vehicle_id, assignments.c.part_id == part_id
    )
    row = db.query_one(stmt)
    return bool(row and row["total"] > 0)


def total_parts_extracted(db: Database) -> int:
    """SUM(quantity) over every assignment; 0 on an empty table."""
    row = db.query_one(select(func.coalesce(func.sum(assignments.c.quantity), 0).label("total")))
    return int(row["total"]) if row else 0
