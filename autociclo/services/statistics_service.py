# autociclo/services/statistics_service.py
"""Aggregates for the statistics dashboard."""

from autociclo.database import Database
from autociclo.models.enums import PartCategory
from autociclo.schemas.statistics import DashboardStats
from autociclo.services import inventory_service, part_service, vehicle_service


def get_dashboard_stats(db: Database) -> DashboardStats:
    by_category = {category.value: 0 for category in PartCategory}
    for row in part_service.count_by_category(db):
        by_category[row.category] = row.total

    return DashboardStats(
        total_vehicles=db.count("vehicles"),
        vehicles_by_status=vehicle_service.count_by_status(db),
        vehicles_by_make=vehicle_service.count_by_make(db),
        total_parts=db.count("parts"),
        parts_by_category=by_category,
        low_stock_parts=len(part_service.get_low_stock(db)),
        total_parts_extracted=inventory_service.total_parts_extracted(db),
    )
