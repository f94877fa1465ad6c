"""Integration test configuration.

Integration tests need a migrated PostgreSQL at ``DATABASE__URL``. When it
cannot be reached they are skipped rather than failed.
"""

import asyncio

import pytest
from sqlalchemy import text

from port42.config import Settings
from port42.persistence.database import create_engine


@pytest.fixture(scope="session", autouse=True)
def database_available():
    async def _ping() -> None:
        engine = create_engine(Settings())
        try:
            async with engine.connect() as connection:
                # Fails until the latest migration has been applied
                await connection.execute(
                    text("SELECT 1 FROM community_members LIMIT 1")
                )
        finally:
            await engine.dispose()

    try:
        asyncio.run(_ping())
    except Exception as e:
        pytest.skip(f"Database not available: {e}")
