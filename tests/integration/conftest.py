"""Shared fixtures for SQL store tests."""

import pytest
import pytest_asyncio

from userhub.config import Settings
from userhub.db.database import close_db, create_tables, init_db


@pytest.fixture
def sql_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite database file."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'userhub.db'}",
        SESSION_SECRET="test-secret-key-for-testing",
        BCRYPT_ROUNDS=4,
    )


@pytest_asyncio.fixture
async def session_factory(sql_settings):
    """Session factory with the schema created."""
    factory = await init_db(sql_settings)
    await create_tables()
    yield factory
    await close_db()
