"""Unit tests for the inventory assignment service."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from autociclo.exceptions import DuplicateAssignmentError, DuplicateKeyError
from autociclo.schemas.inventory import AssignmentCreate, AssignmentUpdate
from autociclo.schemas.part import PartCreate
from autociclo.schemas.vehicle import VehicleCreate
from autociclo.services import part_service, vehicle_service
from autociclo.services.inventory_service import (
    assignment_exists, create_assignment, delete_assignment, get_assignment, list_assignments,
    list_by_part, list_by_vehicle, total_parts_extracted, update_assignment,
)


@pytest.fixture
def vehicle_id(db):
    return vehicle_service.create_vehicle(db, VehicleCreate(
        plate="1234ABC", make="Seat", model="Ibiza", year=2008, entry_date=date(2024, 1, 1)))


@pytest.fixture
def part_id(db):
    return part_service.create_part(db, PartCreate(
        code="MOT-001", name="Alternador", category="engine", sale_price=85.0))


def make_assignment(vehicle_id, part_id, **overrides):
    data = dict(vehicle_id=vehicle_id, part_id=part_id, quantity=1, condition="used",
                extraction_date=date(2024, 2, 1), unit_price=80.0)
    data.update(overrides)
    return AssignmentCreate(**data)


class TestCreate:
    def test_create_and_exists(self, db, vehicle_id, part_id):
        assert not assignment_exists(db, vehicle_id, part_id)
        assignment_id = create_assignment(db, make_assignment(vehicle_id, part_id, notes="Ok"))

        assert assignment_exists(db, vehicle_id, part_id)
        stored = get_assignment(db, assignment_id)
        assert stored.quantity == 1
        assert stored.condition == "used"
        assert stored.notes == "Ok"

    def test_duplicate_pair_rejected_without_new_row(self, db, vehicle_id, part_id):
        create_assignment(db, make_assignment(vehicle_id, part_id))
        with pytest.raises(DuplicateAssignmentError) as exc:
            create_assignment(db, make_assignment(vehicle_id, part_id, quantity=5))

        assert isinstance(exc.value, DuplicateKeyError)
        assert (exc.value.vehicle_id, exc.value.part_id) == (vehicle_id, part_id)
        assert db.count("inventory_assignments") == 1

    def test_get_missing_returns_none(self, db):
        assert get_assignment(db, 123) is None


class TestDetailReads:
    def test_detail_rows_carry_vehicle_and_part_fields(self, db, vehicle_id, part_id):
        create_assignment(db, make_assignment(vehicle_id, part_id))
        [row] = list_assignments(db)

        assert row.plate == "1234ABC"
        assert (row.make, row.model) == ("Seat", "Ibiza")
        assert row.part_code == "MOT-001"
        assert row.part_name == "Alternador"
        assert row.part_category == "engine"
        assert row.extraction_date == date(2024, 2, 1)

    def test_ordered_by_extraction_date_desc_and_filtered(self, db, vehicle_id, part_id):
        other_part = part_service.create_part(db, PartCreate(code="CAR-001", name="Capó", category="body"))
        other_vehicle = vehicle_service.create_vehicle(db, VehicleCreate(
            plate="5678DEF", make="Ford", model="Focus", year=2012, entry_date=date(2024, 1, 5)))

        create_assignment(db, make_assignment(vehicle_id, part_id, extraction_date=date(2024, 1, 1)))
        create_assignment(db, make_assignment(vehicle_id, other_part, extraction_date=date(2024, 3, 1)))
        create_assignment(db, make_assignment(other_vehicle, part_id, extraction_date=date(2024, 2, 1)))

        assert [r.extraction_date.month for r in list_assignments(db)] == [3, 2, 1]
        assert [r.part_code for r in list_by_vehicle(db, vehicle_id)] == ["CAR-001", "MOT-001"]
        assert [r.plate for r in list_by_part(db, part_id)] == ["5678DEF", "1234ABC"]
        assert list_by_vehicle(db, 999) == []


class TestUpdateDelete:
    def test_update_by_pair(self, db, vehicle_id, part_id):
        assignment_id = create_assignment(db, make_assignment(vehicle_id, part_id))
        changes = AssignmentUpdate(quantity=4, condition="repaired",
                                   extraction_date=date(2024, 5, 5), unit_price=60.0, notes="Revisado")

        assert update_assignment(db, vehicle_id, part_id, changes) is True
        stored = get_assignment(db, assignment_id)
        assert stored.quantity == 4
        assert stored.condition == "repaired"
        assert stored.unit_price == 60.0
        assert stored.notes == "Revisado"
        assert update_assignment(db, vehicle_id, part_id + 1, changes) is False

    def test_delete_by_id(self, db, vehicle_id, part_id):
        assignment_id = create_assignment(db, make_assignment(vehicle_id, part_id))

        assert delete_assignment(db, assignment_id) is True
        assert not assignment_exists(db, vehicle_id, part_id)
        assert delete_assignment(db, assignment_id) is False
        assert db.count("vehicles") == 1
        assert db.count("parts") == 1


class TestTotals:
    def test_total_is_zero_on_empty_table(self, db):
        assert total_parts_extracted(db) == 0

    def test_total_sums_quantities(self, db, vehicle_id, part_id):
        other_part = part_service.create_part(db, PartCreate(code="CAR-001", name="Capó", category="body"))
        create_assignment(db, make_assignment(vehicle_id, part_id, quantity=2))
        create_assignment(db, make_assignment(vehicle_id, other_part, quantity=3))

        assert total_parts_extracted(db) == 5
