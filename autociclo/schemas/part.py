# autociclo/schemas/part.py
from typing import Optional

from pydantic import BaseModel, Field

from autociclo.models.enums import PartCategory, StockStatus
from autociclo.schemas.common import PART_CODE_PATTERN


def stock_status(available_stock: int, minimum_stock: int) -> StockStatus:
    if available_stock == 0:
        return StockStatus.OUT
    if available_stock < minimum_stock:
        return StockStatus.LOW
    return StockStatus.NORMAL


class PartBase(BaseModel):
    """Every editable part field. Code lives on PartCreate: it cannot change."""

    name: str = Field(min_length=1)
    category: PartCategory
    sale_price: float = Field(0, ge=0)
    available_stock: int = Field(0, ge=0)
    minimum_stock: int = Field(1, ge=1)
    storage_location: Optional[str] = None
    compatible_makes: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None

    class Config:
        use_enum_values = True
        validate_default = True


class PartCreate(PartBase):
    code: str = Field(pattern=PART_CODE_PATTERN)


class PartUpdate(PartBase):
    pass


class PartOut(PartCreate):
    id: int

    class Config:
        from_attributes = True
        use_enum_values = True
        validate_default = True

    @property
    def stock_status(self) -> StockStatus:
        return stock_status(self.available_stock, self.minimum_stock)


class CategoryCount(BaseModel):
    category: str
    total: int


class PartForm(BaseModel):
    """Editable text representation used by input forms."""

    code: str = ""
    name: str = ""
    category: str = PartCategory.OTHER.value
    sale_price: str = ""
    available_stock: str = ""
    minimum_stock: str = ""
    storage_location: str = ""
    compatible_makes: str = ""
    image: str = ""
    description: str = ""
