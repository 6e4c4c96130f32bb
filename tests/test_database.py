"""Unit tests for the connection manager and query primitives."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from unittest.mock import patch
from sqlalchemy import inspect, insert, select
import autociclo.database as database_module
from autociclo.database import Database, get_database
from autociclo.exceptions import StorageError
from autociclo.models.vehicle import Vehicle

vehicles = Vehicle.__table__

EXPECTED_INDEXES = {
    "idx_vehicles_plate", "idx_vehicles_status", "idx_vehicles_make",
    "idx_parts_code", "idx_parts_category", "idx_parts_name",
    "idx_assignments_vehicle", "idx_assignments_part",
}


def insert_vehicle(plate="1234ABC", make="Seat"):
    return insert(vehicles).values(
        plate=plate, make=make, model="Ibiza", year=2008,
        entry_date=date(2024, 1, 10), status="complete",
    )


class Boom(Exception):
    pass


class TestSchema:
    def test_tables_created(self, db):
        names = set(inspect(db.engine).get_table_names())
        assert {"vehicles", "parts", "inventory_assignments"} <= names

    def test_all_indexes_created(self, db):
        inspector = inspect(db.engine)
        found = {
            ix["name"]
            for table in ("vehicles", "parts", "inventory_assignments")
            for ix in inspector.get_indexes(table)
        }
        assert EXPECTED_INDEXES <= found

    def test_init_is_idempotent_and_keeps_data(self, db):
        db.execute(insert_vehicle())
        db.init()
        db.init()
        assert db.count("vehicles") == 1

    def test_foreign_keys_enabled(self, db):
        row = db.query_one("PRAGMA foreign_keys")
        assert row["foreign_keys"] == 1

    def test_check_constraint_backstops_bad_status(self, db):
        with pytest.raises(StorageError):
            db.execute(
                "INSERT INTO vehicles (plate, make, model, year, entry_date, status, purchase_price, mileage) "
                "VALUES ('1234ABC', 'Seat', 'Ibiza', 2008, '2024-01-10', 'scrapped', 0, 0)"
            )

    def test_drop_tables_then_init_recreates(self, db):
        db.execute(insert_vehicle())
        db.drop_tables()
        assert inspect(db.engine).get_table_names() == []
        db.init()
        assert db.count("vehicles") == 0


class TestQueryPrimitives:
    def test_execute_returns_inserted_id_and_rowcount(self, db):
        first = db.execute(insert_vehicle("1111AAA"))
        second = db.execute(insert_vehicle("2222BBB"))
        assert first.inserted_id == 1
        assert second.inserted_id == 2
        assert second.rows_affected == 1

    def test_execute_update_reports_rows_affected(self, db):
        db.execute(insert_vehicle("1111AAA"))
        db.execute(insert_vehicle("2222BBB"))
        result = db.execute("UPDATE vehicles SET mileage = :km", {"km": 10})
        assert result.rows_affected == 2
        assert result.inserted_id is None

    def test_query_one_returns_none_for_no_rows(self, db):
        assert db.query_one(select(vehicles).where(vehicles.c.id == 99)) is None

    def test_query_many_preserves_sql_order(self, db):
        db.execute(insert_vehicle("1111AAA", make="Seat"))
        db.execute(insert_vehicle("2222BBB", make="Audi"))
        rows = db.query_many(select(vehicles.c.make).order_by(vehicles.c.make))
        assert [r["make"] for r in rows] == ["Audi", "Seat"]

    def test_raw_sql_with_named_params(self, db):
        db.execute(insert_vehicle("1111AAA", make="Seat"))
        rows = db.query_many("SELECT plate FROM vehicles WHERE make = :make", {"make": "Seat"})
        assert rows == [{"plate": "1111AAA"}]

    def test_engine_error_wrapped_with_context(self, db):
        with pytest.raises(StorageError) as exc:
            db.query_many("SELECT * FROM nowhere WHERE id = :id", {"id": 1})
        assert "nowhere" in exc.value.statement
        assert exc.value.params == {"id": 1}
        assert exc.value.original is not None

    def test_transaction_commits_on_success(self, db):
        def body():
            db.execute(insert_vehicle("1111AAA"))
            db.execute(insert_vehicle("2222BBB"))
            return "done"

        assert db.run_in_transaction(body) == "done"
        assert db.count("vehicles") == 2

    def test_transaction_rolls_back_and_reraises_same_exception(self, db):
        def body():
            db.execute(insert_vehicle("1111AAA"))
            raise Boom("stop")

        with pytest.raises(Boom):
            db.run_in_transaction(body)
        assert db.count("vehicles") == 0

    def test_transaction_rolls_back_on_storage_error(self, db):
        def body():
            db.execute(insert_vehicle("1111AAA"))
            db.execute(insert_vehicle("1111AAA"))   # unique violation

        with pytest.raises(StorageError):
            db.run_in_transaction(body)
        assert db.count("vehicles") == 0

    def test_nested_transaction_joins_outer(self, db):
        def inner():
            db.execute(insert_vehicle("2222BBB"))

        def outer():
            db.execute(insert_vehicle("1111AAA"))
            db.run_in_transaction(inner)
            raise Boom("outer fails after inner finished")

        with pytest.raises(Boom):
            db.run_in_transaction(outer)
        assert db.count("vehicles") == 0

    def test_transaction_state_is_per_handle_and_cleared(self, db):
        other = Database("sqlite://")
        other.init()

        def body():
            db.execute(insert_vehicle("1111AAA"))
            other.execute(insert_vehicle("2222BBB"))
            raise Boom("only this handle rolls back")

        with pytest.raises(Boom):
            db.run_in_transaction(body)
        assert db.count("vehicles") == 0
        assert other.count("vehicles") == 1

        db.execute(insert_vehicle("3333CCC"))
        assert db.count("vehicles") == 1
        other.close()

    def test_exists_record(self, db):
        vehicle_id = db.execute(insert_vehicle("1234ABC")).inserted_id
        assert db.exists_record("vehicles", "plate", "1234ABC") is True
        assert db.exists_record("vehicles", "plate", "9999ZZZ") is False
        assert db.exists_record("vehicles", "plate", "1234ABC", exclude_id=vehicle_id) is False
        assert db.exists_record("vehicles", "plate", "1234ABC", exclude_id=vehicle_id + 1) is True

    def test_unknown_table_rejected(self, db):
        with pytest.raises(ValueError):
            db.exists_record("invoices", "number", "A-1")


class TestGetDatabase:
    def test_first_caller_initialises_later_callers_share(self):
        with patch.object(database_module, "_database", None), \
             patch("autociclo.database.Database") as mock_cls:
            first = get_database()
            second = get_database()

        assert first is second
        mock_cls.assert_called_once()
        mock_cls.return_value.init.assert_called_once()

    def test_failed_init_leaves_no_handle(self):
        with patch.object(database_module, "_database", None), \
             patch("autociclo.database.Database") as mock_cls:
            mock_cls.return_value.init.side_effect = StorageError("disk I/O error")
            with pytest.raises(StorageError):
                get_database()
            assert database_module._database is None

    def test_separate_databases_are_isolated(self):
        a, b = Database("sqlite://"), Database("sqlite://")
        a.init()
        b.init()
        a.execute(insert_vehicle())
        assert a.count("vehicles") == 1
        assert b.count("vehicles") == 0
        a.close()
        b.close()
