# autociclo/schemas/statistics.py
from typing import Dict, List

from pydantic import BaseModel

from autociclo.schemas.vehicle import MakeCount


class DashboardStats(BaseModel):
    total_vehicles: int
    vehicles_by_status: Dict[str, int]
    vehicles_by_make: List[MakeCount]
    total_parts: int
    parts_by_category: Dict[str, int]
    low_stock_parts: int
    total_parts_extracted: int
