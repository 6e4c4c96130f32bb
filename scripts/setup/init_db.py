# scripts/setup/init_db.py
"""
Initialize database: creates all tables and indexes.
Optionally wipes everything first (--reset) and/or loads sample data (--seed).
Usage: python scripts/setup/init_db.py [--reset] [--seed]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text

from autociclo.config import settings
from autociclo.database import Database
from autociclo.exceptions import StorageError
from autociclo.services.seed_service import reset_database, seed_if_empty


def main():
    parser = argparse.ArgumentParser(description="Initialize the AutoCiclo database")
    parser.add_argument("--reset", action="store_true",
                        help="Drop every table before recreating the schema (destroys data)")
    parser.add_argument("--seed", action="store_true",
                        help="Insert sample vehicles, parts and assignments if the database is empty")
    args = parser.parse_args()

    print("🗄️  AutoCiclo DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    db = Database()

    # Test connection
    try:
        db.query_one(text("SELECT 1"))
        print("✅ Database connection OK")
    except StorageError as e:
        print(f"❌ Cannot open database: {e}")
        sys.exit(1)

    if args.reset:
        print("\n⚠️  Resetting database...")
        reset_database(db)
        print("✅ Tables dropped and recreated")
    else:
        print("\n📋 Creating tables...")
        db.init()
        print("✅ All tables created")

    if args.seed:
        if seed_if_empty(db):
            print("🌱 Sample data inserted")
        else:
            print("ℹ️  Sample data not inserted (database not empty or seeding failed, see logs)")

    # List tables and row counts
    inspector = inspect(db.engine)
    tables = sorted(inspector.get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t} ({db.count(t)} rows)")

    db.close()
    print("\n🎉 Database ready!")


if __name__ == "__main__":
    main()
