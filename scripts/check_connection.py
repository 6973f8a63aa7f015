#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the configured database is reachable.
Usage: python scripts/check_connection.py
"""
import asyncio

from internship_registry.core.config import get_settings
from internship_registry.core.logging import configure_logging
from internship_registry.db.database import Database


async def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    print("=" * 50)
    print("INTERNSHIP REGISTRY - CONNECTION CHECK")
    print("=" * 50)

    url = settings.database_url
    print(f"\nBackend: {settings.db_type}")
    print(f"    URL: {url.render_as_string(hide_password=True)}")

    database = Database.from_settings(settings)
    try:
        if await database.ping():
            print("    ✅ Database: CONNECTED")
        else:
            print("    ❌ Database: FAILED")
    finally:
        await database.dispose()

    print("\n" + "=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
