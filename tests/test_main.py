"""Tests for application startup and shutdown."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock, patch
from autociclo import main


class TestStartup:
    @patch("autociclo.main.seed_if_empty")
    @patch("autociclo.main.get_database")
    def test_startup_without_seeding(self, mock_get_db, mock_seed):
        mock_get_db.return_value = MagicMock()
        with patch.object(main.settings, "SEED_SAMPLE_DATA", False):
            db = main.startup()

        assert db is mock_get_db.return_value
        mock_seed.assert_not_called()

    @patch("autociclo.main.seed_if_empty")
    @patch("autociclo.main.get_database")
    def test_startup_seeds_when_enabled(self, mock_get_db, mock_seed):
        mock_get_db.return_value = MagicMock()
        with patch.object(main.settings, "SEED_SAMPLE_DATA", True):
            main.startup()

        mock_seed.assert_called_once_with(mock_get_db.return_value)

    def test_shutdown_closes_database(self):
        db = MagicMock()
        main.shutdown(db)
        db.close.assert_called_once()
