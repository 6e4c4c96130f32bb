# autociclo/main.py
"""
Application entry point for the data layer.
Opens the database, makes sure the schema exists and, in development,
seeds sample data. Schema failures are fatal and propagate to the caller.
"""

from autociclo.config import settings
from autociclo.database import Database, get_database
from autociclo.services.seed_service import seed_if_empty
from autociclo.utils.logger import get_logger

logger = get_logger(__name__)


def startup() -> Database:
    logger.info("🚀 AutoCiclo data layer starting up...")
    db = get_database()
    logger.info("✅ Database tables ready")

    if settings.SEED_SAMPLE_DATA:
        seed_if_empty(db)

    logger.info(f"📄 Page size: {settings.PAGE_SIZE}")
    return db


def shutdown(db: Database):
    logger.info("🛑 AutoCiclo data layer shutting down...")
    db.close()
