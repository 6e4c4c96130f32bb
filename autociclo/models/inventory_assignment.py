# autociclo/models/inventory_assignment.py
"""
N:N join between vehicles and parts, one row per extraction event.
Surrogate id for delete-by-id, plus a unique (vehicle_id, part_id) pair.
Both foreign keys cascade on delete.
"""

from sqlalchemy import (
    CheckConstraint, Column, Date, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from autociclo.database import Base
from autociclo.models.enums import PartCondition, check_in


class InventoryAssignment(Base):
    __tablename__ = "inventory_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    condition = Column(String(20), nullable=False)
    extraction_date = Column(Date, nullable=False)
    unit_price = Column(Float, nullable=False, default=0)
    notes = Column(Text)

    __table_args__ = (
        UniqueConstraint("vehicle_id", "part_id", name="uq_assignments_vehicle_part"),
        CheckConstraint(check_in("condition", PartCondition), name="ck_assignments_condition"),
        CheckConstraint("quantity >= 1", name="ck_assignments_quantity"),
        CheckConstraint("unit_price >= 0", name="ck_assignments_unit_price"),
        Index("idx_assignments_vehicle", "vehicle_id"),
        Index("idx_assignments_part", "part_id"),
    )

    def __repr__(self):
        return f"<InventoryAssignment {self.id} vehicle={self.vehicle_id} part={self.part_id} qty={self.quantity}>"
