# autociclo/schemas/inventory.py
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from autociclo.models.enums import PartCondition


class ExtractionDetails(BaseModel):
    """Assignment fields that do not identify the vehicle/part pair."""

    quantity: int = Field(1, ge=1)
    condition: PartCondition = PartCondition.USED
    extraction_date: date = Field(default_factory=date.today)
    unit_price: float = Field(0, ge=0)
    notes: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True


class AssignmentCreate(ExtractionDetails):
    vehicle_id: int
    part_id: int


class AssignmentUpdate(ExtractionDetails):
    pass


class AssignmentOut(AssignmentCreate):
    id: int

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True


class AssignmentDetail(AssignmentOut):
    """Assignment joined with the vehicle and part it links."""

    plate: str
    make: str
    model: str
    part_code: str
    part_name: str
    part_category: str


class ExtractionResult(BaseModel):
    part_id: int
    assignment_id: int


class AssignmentForm(BaseModel):
    """Editable text representation used by input forms."""

    vehicle_id: str = ""
    part_id: str = ""
    quantity: str = ""
    condition: str = PartCondition.USED.value
    extraction_date: str = ""
    unit_price: str = ""
    notes: str = ""
