# autociclo/models/enums.py
"""
Closed value sets for the enum-like columns.
Schemas validate against these; the tables repeat them as CHECK constraints.
"""

from enum import Enum


class VehicleStatus(str, Enum):
    COMPLETE = "complete"
    DISMANTLING = "dismantling"
    DISMANTLED = "dismantled"


class PartCategory(str, Enum):
    ENGINE = "engine"
    BODY = "body"
    INTERIOR = "interior"
    ELECTRONICS = "electronics"
    WHEELS = "wheels"
    OTHER = "other"


class PartCondition(str, Enum):
    NEW = "new"
    USED = "used"
    REPAIRED = "repaired"


class StockStatus(str, Enum):
    """Derived from stock levels, never stored."""

    OUT = "out"
    LOW = "low"
    NORMAL = "normal"


def check_in(column: str, enum_cls) -> str:
    """SQL fragment `column IN ('a', 'b', ...)` for a CHECK constraint."""
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"
