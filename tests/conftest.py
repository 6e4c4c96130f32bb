"""Shared fixtures: every test gets a fresh, initialised in-memory database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from autociclo.database import Database


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.init()
    yield database
    database.close()
