# autociclo/utils/reference_data.py
"""
Read-only lookup catalogs bundled with the package: vehicle makes/models and
storage locations. Loaded once from autociclo/data/ and never written.
"""

import json
import os
from functools import lru_cache
from typing import Dict, List

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")


@lru_cache(maxsize=None)
def _load(filename: str):
    with open(os.path.join(DATA_DIR, filename), encoding="utf-8") as f:
        return json.load(f)


def _makes() -> Dict[str, List[str]]:
    return _load("vehicle_makes.json")


def list_makes() -> List[str]:
    return sorted(_makes())


def list_models(make: str) -> List[str]:
    return list(_makes().get(make, []))


def make_exists(make: str) -> bool:
    return make in _makes()


def model_exists(make: str, model: str) -> bool:
    return model in _makes().get(make, [])


def vehicle_storage_locations() -> List[str]:
    return list(_load("storage_locations.json")["vehicles"])


def part_storage_locations() -> List[str]:
    return list(_load("storage_locations.json")["parts"])
