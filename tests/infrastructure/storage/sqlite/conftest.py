"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database migrated to the latest schema."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def pool(initialized_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    pool = ConnectionPool(initialized_db, pool_size=2, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock
