"""Unit tests for sample data seeding and database reset."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch
from autociclo.services import seed_service
from autociclo.services.seed_service import reset_database, seed_if_empty


class TestSeed:
    def test_seeds_empty_database(self, db):
        assert seed_if_empty(db) is True

        assert db.count("vehicles") == 5
        assert db.count("parts") == 8
        assert db.count("inventory_assignments") == 8

    def test_second_call_is_a_noop(self, db):
        seed_if_empty(db)
        assert seed_if_empty(db) is False
        assert db.count("vehicles") == 5
        assert db.count("inventory_assignments") == 8

    def test_failure_is_logged_not_raised(self, db):
        with patch.object(seed_service, "_insert_samples", side_effect=RuntimeError("disk full")):
            assert seed_if_empty(db) is False
        assert db.count("vehicles") == 0

    def test_bad_sample_rolls_back_whole_batch(self, db):
        broken = [(0, 0, dict(quantity=0, condition="used"))]
        with patch.object(seed_service, "SAMPLE_ASSIGNMENTS", broken):
            assert seed_if_empty(db) is False

        assert db.count("vehicles") == 0
        assert db.count("parts") == 0
        assert db.count("inventory_assignments") == 0


class TestReset:
    def test_reset_empties_every_table(self, db):
        seed_if_empty(db)
        reset_database(db)

        assert db.count("vehicles") == 0
        assert db.count("parts") == 0
        assert db.count("inventory_assignments") == 0

    def test_reset_then_seed_again(self, db):
        seed_if_empty(db)
        reset_database(db)
        assert seed_if_empty(db) is True
        assert db.count("parts") == 8
