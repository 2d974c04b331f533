import asyncio
import pytest
from fastapi.testclient import TestClient

from app import create_app
from database import DatabaseManager
from forum import Forum
from security import SecurityManager


@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh database file for one test."""
    return str(tmp_path / "test.db")


@pytest.fixture
def db_manager(db_path):
    """Create and initialize a DatabaseManager instance."""
    db = DatabaseManager(db_path)
    asyncio.run(db.initialize())
    return db


@pytest.fixture
def security_manager():
    """Minimum bcrypt cost keeps the suite fast."""
    return SecurityManager(rounds=4)


@pytest.fixture
def forum(db_manager, security_manager):
    return Forum(db_manager, security_manager)


@pytest.fixture
def client(db_path, security_manager):
    app = create_app(db_path, security_manager)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
