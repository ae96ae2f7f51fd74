# scripts/setup/init_db.py
"""
Create the Guardião tables and report what the database holds.

Usage:
  python scripts/setup/init_db.py            # create missing tables
  python scripts/setup/init_db.py --check    # only report, change nothing
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError

from guardiao.config import settings
from guardiao.database import Base, create_tables, engine


def expected_tables() -> list[str]:
    import guardiao.models  # noqa  (registers every model on Base.metadata)
    return sorted(Base.metadata.tables)


def report():
    present = set(inspect(engine).get_table_names())
    missing = [t for t in expected_tables() if t not in present]

    with engine.connect() as conn:
        for name in expected_tables():
            if name in present:
                rows = conn.execute(select(func.count()).select_from(Base.metadata.tables[name])).scalar()
                print(f"   ✓ {name:<22} {rows} rows")
            else:
                print(f"   ✗ {name:<22} missing")
    return missing


def main():
    parser = argparse.ArgumentParser(description="Initialize the Guardião database")
    parser.add_argument("--check", action="store_true", help="report table status without creating anything")
    args = parser.parse_args()

    print(f"🗄️  Guardião database: {settings.DATABASE_URL}")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect: {e}")
        print("   Start PostgreSQL or set DATABASE_URL=sqlite:///./guardiao.db")
        sys.exit(1)

    if not args.check:
        create_tables()

    missing = report()
    if missing:
        print(f"\n⚠️  {len(missing)} table(s) missing; run without --check to create them.")
        sys.exit(2)

    print("\n🎉 Ready: uvicorn guardiao.main:app --host 0.0.0.0 --port 8080")


if __name__ == "__main__":
    main()
