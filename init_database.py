"""
Database Initialization Script for the Garden Plan API

This script creates the schema required by the FastAPI backend.
Run this before starting the API server.

Usage:
    python init_database.py
"""

import asyncio
import sys

from sqlalchemy import inspect, text

from gardenplan.api.config import settings
from gardenplan.api.core.database import engine, Base
from gardenplan.api.models import Bed, Plant, BedPlacement


async def init_database():
    """Initialize database schema"""
    print("=" * 60)
    print("Garden Plan Database Initialization")
    print("=" * 60)
    print()

    # Test database connection
    print("1. Testing database connection...")
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            print(f"   ✓ Connected to {engine.url.render_as_string(hide_password=True)}")
    except Exception as e:
        print(f"   ✗ Database connection failed: {e}")
        print()
        print("Please ensure:")
        print("  1. The database server is running and reachable")
        print("  2. POSTGRES_* or DATABASE_URL_OVERRIDE are set correctly in .env")
        return False

    print()

    # Create tables
    print("2. Creating database tables...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            print("   ✓ Created tables:")
            for model in (Bed, Plant, BedPlacement):
                print(f"      - {model.__tablename__}")
    except Exception as e:
        print(f"   ✗ Failed to create tables: {e}")
        return False

    print()

    # Verify tables
    print("3. Verifying tables...")
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    missing = [m.__tablename__ for m in (Bed, Plant, BedPlacement) if m.__tablename__ not in tables]
    if missing:
        print(f"   ✗ Missing tables: {', '.join(missing)}")
        return False
    print(f"   ✓ Found {len(tables)} tables")

    print()
    print(f"Database ready for {settings.APP_NAME}")
    await engine.dispose()
    return True


if __name__ == "__main__":
    success = asyncio.run(init_database())
    sys.exit(0 if success else 1)
