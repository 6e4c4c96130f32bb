# autociclo/schemas/vehicle.py
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from autociclo.models.enums import VehicleStatus
from autociclo.schemas.common import MIN_YEAR, PLATE_PATTERN


class VehicleBase(BaseModel):
    """Every editable vehicle field. Plate lives on VehicleCreate: it cannot change."""

    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int
    color: Optional[str] = None
    entry_date: date
    status: VehicleStatus = VehicleStatus.COMPLETE
    purchase_price: float = Field(0, ge=0)
    mileage: int = Field(0, ge=0)
    gps_location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("year")
    @classmethod
    def year_in_range(cls, value: int) -> int:
        current = date.today().year
        if not MIN_YEAR <= value <= current:
            raise ValueError(f"year must be between {MIN_YEAR} and {current}")
        return value

    class Config:
        use_enum_values = True
        validate_default = True


class VehicleCreate(VehicleBase):
    plate: str = Field(pattern=PLATE_PATTERN)


class VehicleUpdate(VehicleBase):
    pass


class VehicleOut(VehicleCreate):
    id: int

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True


class VehicleWithPartCount(VehicleOut):
    part_count: int = 0


class MakeCount(BaseModel):
    make: str
    total: int


class VehicleForm(BaseModel):
    """Editable text representation used by input forms."""

    plate: str = ""
    make: str = ""
    model: str = ""
    year: str = ""
    color: str = ""
    entry_date: str = ""
    status: str = VehicleStatus.COMPLETE.value
    purchase_price: str = ""
    mileage: str = ""
    gps_location: str = ""
    notes: str = ""
