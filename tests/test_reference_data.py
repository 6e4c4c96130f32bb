"""Tests for the bundled lookup catalogs."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from autociclo.utils import reference_data


def test_makes_are_sorted_and_present():
    makes = reference_data.list_makes()
    assert makes == sorted(makes)
    assert "Seat" in makes
    assert reference_data.make_exists("Volkswagen")
    assert not reference_data.make_exists("Trabant")


def test_models_per_make():
    assert "Ibiza" in reference_data.list_models("Seat")
    assert reference_data.model_exists("Seat", "Leon")
    assert not reference_data.model_exists("Seat", "Golf")
    assert reference_data.list_models("Trabant") == []


def test_storage_locations():
    assert reference_data.vehicle_storage_locations()
    assert reference_data.part_storage_locations()
