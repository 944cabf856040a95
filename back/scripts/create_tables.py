#!/usr/bin/env python
"""
Script to create database tables for the Janakural backend
"""

# Standard library imports
import asyncio
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Local application imports
from app.core.db import async_engine

# Import all models to register them with Base
import app.models  # noqa: F401
from app.models.base import Base


async def create_tables() -> None:
    """Create all tables in the database"""
    print("Creating database tables...")

    try:
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        sys.exit(1)
    finally:
        await async_engine.dispose()

    print("✅ All tables created successfully!")
    print("\nTables:")
    for table_name in sorted(Base.metadata.tables):
        print(f"  - {table_name}")


if __name__ == "__main__":
    asyncio.run(create_tables())
