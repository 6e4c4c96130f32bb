# autociclo/schemas/common.py
import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

# Business-key formats shared by schemas and the form layer
PLATE_PATTERN = r"^\d{4}[A-Z]{3}$"
PART_CODE_PATTERN = r"^[A-Z0-9-]+$"
MIN_YEAR = 1900


class Page(BaseModel, Generic[T]):
    """One page of a listing plus the total number of matching rows."""

    items: List[T]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages
