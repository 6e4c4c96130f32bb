# autociclo/services/part_service.py
"""
Part catalogue CRUD, paginated search, low-stock alerts and category statistics.
Code is immutable after creation: update_part never writes it.
Deleting a part removes its inventory assignments through ON DELETE CASCADE.
"""

from typing import List, Optional

from sqlalchemy import delete, desc, func, insert, select, update

from autociclo.config import settings
from autociclo.database import Database
from autociclo.exceptions import DuplicateCodeError
from autociclo.models.enums import PartCategory
from autociclo.models.part import Part
from autociclo.schemas.common import Page
from autociclo.schemas.part import CategoryCount, PartCreate, PartOut, PartUpdate
from autociclo.utils.logger import get_logger
from autociclo.utils.query_builder import QueryFilters, paginate

logger = get_logger(__name__)

parts = Part.__table__

SEARCH_COLUMNS = (parts.c.name, parts.c.code, parts.c.category)
BY_NAME = (parts.c.name.asc(), parts.c.id.asc())


def create_part(db: Database, part: PartCreate) -> int:
    """Insert a part. Raises DuplicateCodeError if the code is taken."""
    if code_exists(db, part.code):
        raise DuplicateCodeError(part.code)
    result = db.execute(insert(parts).values(**part.model_dump()))
    logger.info(f"Part created: id={result.inserted_id} code={part.code}")
    return result.inserted_id


def list_parts(db: Database, page: int = 1, page_size: Optional[int] = None,
               search_term: Optional[str] = None) -> Page[PartOut]:
    if page_size is None:
        page_size = settings.PAGE_SIZE
    filters = QueryFilters().search(search_term, *SEARCH_COLUMNS)
    rows, total = paginate(db, parts, filters, BY_NAME, page, page_size)
    return Page[PartOut](
        items=[PartOut.model_validate(row) for row in rows],
        total=total, page=page, page_size=page_size,
    )


def get_part(db: Database, part_id: int) -> Optional[PartOut]:
    row = db.query_one(select(parts).where(parts.c.id == part_id))
    return PartOut.model_validate(row) if row else None


def update_part(db: Database, part_id: int, data: PartUpdate) -> bool:
    values = data.model_dump(exclude={"id", "code"})
    result = db.execute(update(parts).where(parts.c.id == part_id).values(**values))
    logger.info(f"Part updated: id={part_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def delete_part(db: Database, part_id: int) -> bool:
    result = db.execute(delete(parts).where(parts.c.id == part_id))
    logger.info(f"Part deleted: id={part_id} rows={result.rows_affected}")
    return result.rows_affected > 0


def code_exists(db: Database, code: str, exclude_id: Optional[int] = None) -> bool:
    return db.exists_record(parts, "code", code, exclude_id)


def search_parts(db: Database, term: str) -> List[PartOut]:
    stmt = QueryFilters().search(term, *SEARCH_COLUMNS).apply(select(parts)).order_by(*BY_NAME)
    return [PartOut.model_validate(row) for row in db.query_many(stmt)]


def get_low_stock(db: Database) -> List[PartOut]:
    """Parts whose available stock is below their minimum."""
    stmt = select(parts).where(parts.c.available_stock < parts.c.minimum_stock).order_by(*BY_NAME)
    low = [PartOut.model_validate(row) for row in db.query_many(stmt)]
    if low:
        logger.debug(f"{len(low)} parts below minimum stock")
    return low


def get_parts_by_category(db: Database, category: PartCategory) -> List[PartOut]:
    stmt = select(parts).where(parts.c.category == PartCategory(category).value).order_by(*BY_NAME)
    return [PartOut.model_validate(row) for row in db.query_many(stmt)]


def count_by_category(db: Database) -> List[CategoryCount]:
    total = func.count().label("total")
    stmt = (
        select(parts.c.category, total)
        .group_by(parts.c.category)
        .order_by(desc(total), parts.c.category)
    )
    return [CategoryCount.model_validate(row) for row in db.query_many(stmt)]
