# autociclo/services/vehicle_service.py
"""
Vehicle CRUD, paginated search, and grouping statistics.
Used by the extraction flow, the dashboard statistics, and the UI screens.

Plate is immutable after creation: update_vehicle never writes it.
Deleting a vehicle removes its inventory assignments through ON DELETE CASCADE.
"""

from typing import Dict, List, Optional

from sqlalchemy import delete, desc, distinct, func, insert, select, update

from autociclo.config import settings
from autociclo.database import Database
from autociclo.exceptions import DuplicatePlateError, ValidationError
from autociclo.models.enums import VehicleStatus
from autociclo.models.inventory_assignment import InventoryAssignment
from autociclo.models.vehicle import Vehicle
from autociclo.schemas.common import Page
from autociclo.schemas.vehicle import (
    MakeCount, VehicleCreate, VehicleOut, VehicleUpdate, VehicleWithPartCount,
)
from autociclo.utils.logger import get_logger
from autociclo.utils.query_builder import QueryFilters, paginate

logger = get_logger(__name__)

vehicles = Vehicle.__table__
assignments = InventoryAssignment.__table__

SEARCH_COLUMNS = (vehicles.c.plate, vehicles.c.make, vehicles.c.model)
NEWEST_FIRST = (vehicles.c.entry_date.desc(), vehicles.c.id.desc())


def _status_value(status) -> str:
    try:
        return VehicleStatus(status).value
    except ValueError:
        raise ValidationError({"status": f"unknown vehicle status '{status}'"}) from None


def create_vehicle(db: Database, vehicle: VehicleCreate) -> int:
    """Insert a vehicle. Raises DuplicatePlateError if the plate is taken."""
    if plate_exists(db, vehicle.plate):
        raise DuplicatePlateError(vehicle.plate)
    result = db.execute(insert(vehicles).values(**vehicle.model_dump()))
    logger.info(f"Vehicle created: id={result.inserted_id} plate={vehicle.plate}")
    return result.inserted_id


def list_vehicles(db: Database, page: int = 1, page_size: Optional[int] = None,
                  search_term: Optional[str] = None,
                  status: Optional[VehicleStatus] = None) -> Page[VehicleOut]:
    """Substring search over plate/make/model AND status filter, newest entry first."""
    if page_size is None:
        page_size = settings.PAGE_SIZE
    filters = QueryFilters().search(search_term, *SEARCH_COLUMNS)
    if status:
        filters.equals(vehicles.c.status, _status_value(status))
    rows, total = paginate(db, vehicles, filters, NEWEST_FIRST, page, page_size)
    return Page[VehicleOut](
        items=[VehicleOut.model_validate(row) for row in rows],
        total=total, page=page, page_size=page_size,
    )


def get_vehicle(db: Database, vehicle_id: int) -> Optional[VehicleOut]:
    row = db.query_one(select(vehicles).where(vehicles.c.id == vehicle_id))
    return VehicleOut.model_validate(row) if row else None


def get_vehicle_with_part_count(db: Database, vehicle_id: int) -> Optional[VehicleWithPartCount]:
    """Vehicle plus the number of distinct parts assigned to it (0 when none)."""
    stmt = (
        select(vehicles, func.count(distinct(assignments.c.part_id)).label("part_count"))
        .select_from(vehicles.outerjoin(assignments, assignments.c.vehicle_id == vehicles.c.id))
        .where(vehicles.c.id == vehicle_id)
        .group_by(vehicles.c.id)
    )
    row = db.query_one(stmt)
    return VehicleWithPartCount.model_validate(row) if row else None


def update_vehicle(db: Database, vehicle_id: int, data: VehicleUpdate) -> bool:
    """Overwrite every column except id and plate. Returns False if no row matched."""
    values = data.model_dump(exclude={"id", "plate"})
    result = db.execute(update(vehicles).where(vehicles.c.id == vehicle_id).values(**values))
    logger.info(f"Vehicle updated: id={vehicle_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def delete_vehicle(db: Database, vehicle_id: int) -> bool:
    result = db.execute(delete(vehicles).where(vehicles.c.id == vehicle_id))
    logger.info(f"Vehicle deleted: id={vehicle_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def plate_exists(db: Database, plate: str, exclude_id: Optional[int] = None) -> bool:
    return db.exists_record(vehicles, "plate", plate, exclude_id)


def search_vehicles(db: Database, term: str) -> List[VehicleOut]:
    stmt = QueryFilters().search(term, *SEARCH_COLUMNS).apply(select(vehicles)).order_by(*NEWEST_FIRST)
    return [VehicleOut.model_validate(row) for row in db.query_many(stmt)]


def get_vehicles_by_status(db: Database, status: VehicleStatus) -> List[VehicleOut]:
    stmt = select(vehicles).where(vehicles.c.status == _status_value(status)).order_by(*NEWEST_FIRST)
    return [VehicleOut.model_validate(row) for row in db.query_many(stmt)]


def count_by_make(db: Database) -> List[MakeCount]:
    total = func.count().label("total")
    stmt = (
        select(vehicles.c.make, total)
        .group_by(vehicles.c.make)
        .order_by(desc(total), vehicles.c.make)
    )
    return [MakeCount.model_validate(row) for row in db.query_many(stmt)]


def count_by_status(db: Database) -> Dict[str, int]:
    """Vehicle count for every status, zeros included."""
    stmt = select(vehicles.c.status, func.count().label("total")).group_by(vehicles.c.status)
    counts = {status.value: 0 for status in VehicleStatus}
    for row in db.query_many(stmt):
        counts[row["status"]] = row["total"]
    return counts


def top_by_mileage(db: Database, limit: Optional[int] = None) -> List[VehicleOut]:
    if limit is None:
        limit = settings.TOP_MILEAGE_LIMIT
    stmt = select(vehicles).order_by(vehicles.c.mileage.desc(), vehicles.c.id).limit(limit)
    return [VehicleOut.model_validate(row) for row in db.query_many(stmt)]
