# autociclo/utils/query_builder.py
"""
Small WHERE-clause builder and pagination helper.
Predicates are kept as an ordered list of SQLAlchemy expressions, so every
user-supplied value travels as a bound parameter.
"""

from typing import Any, List, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.sql import ColumnElement, Select

from autociclo.exceptions import ValidationError


class QueryFilters:
    def __init__(self):
        self._predicates: List[ColumnElement] = []

    def __len__(self):
        return len(self._predicates)

    def add(self, predicate: ColumnElement) -> "QueryFilters":
        self._predicates.append(predicate)
        return self

    def search(self, term: Optional[str], *columns) -> "QueryFilters":
        """Case-insensitive substring match on any of the columns. Blank terms are ignored."""
        term = (term or "").strip()
        if term:
            self.add(or_(*(col.icontains(term, autoescape=True) for col in columns)))
        return self

    def equals(self, column, value: Any) -> "QueryFilters":
        if value is not None and value != "":
            self.add(column == value)
        return self

    def apply(self, stmt: Select) -> Select:
        return stmt.where(*self._predicates) if self._predicates else stmt


def paginate(db, table, filters: QueryFilters, order_by: Sequence, page: int, page_size: int):
    """
    Two queries: COUNT(*) of matching rows, then the LIMIT/OFFSET slice.
    Page numbers are 1-indexed. Returns (rows, total).
    """
    errors = {}
    if page < 1:
        errors["page"] = "must be >= 1"
    if page_size < 1:
        errors["page_size"] = "must be >= 1"
    if errors:
        raise ValidationError(errors)

    count_stmt = filters.apply(select(func.count().label("total")).select_from(table))
    total = db.query_one(count_stmt)["total"]

    stmt = (
        filters.apply(select(table))
        .order_by(*order_by)
        .limit(page_size)
        .offset((page - 1) * page_size)
    )
    return db.query_many(stmt), total
