"""Pytest configuration.

Environment defaults are set before anything imports lectern, because the
settings singleton is built at import time:
1. SQLite (aiosqlite) instead of PostgreSQL
2. Low bcrypt cost so integration tests stay fast
3. JSON logging (testing environment)
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from lectern.infrastructure.persistence.database import Database  # noqa: E402


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Fresh file-backed SQLite database with all tables, per test.

    A file (not :memory:) so every pooled connection sees the same schema.
    """
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'lectern.db'}")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.close()


@pytest.fixture(autouse=True)
def _clear_structlog_context():
    """Trace IDs bound by one test never leak into the next."""
    import structlog

    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
