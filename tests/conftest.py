"""
conftest.py
-----------
Shared pytest fixtures for calendar manager tests.

Provides fixtures for:
- Database setup and teardown
- Session-bound entity managers
- Sample events
"""
import pytest
from pathlib import Path
from datetime import date
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db_url(test_db_path):
    """SQLAlchemy URL of the temporary test database."""
    return f"sqlite:///{test_db_path}"


# ----- Database Fixtures -----

@pytest.fixture
def test_db(test_db_url):
    """
    Create test database instance with schema.

    Returns a CalendarDB instance whose tables are created straight
    from the ORM metadata (no migration step).
    """
    from calendar_manager.core.config import CalendarConfig
    from calendar_manager.database.manager import CalendarDB
    from calendar_manager.database.models import Base

    db = CalendarDB(CalendarConfig(database_url=test_db_url, auto_migrate=False))
    Base.metadata.create_all(db.engine)

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def event_manager(db_session):
    """Create EventManager instance for testing."""
    from calendar_manager.database.managers.event_manager import EventManager
    return EventManager(db_session)


@pytest.fixture
def location_manager(db_session):
    """Create LocationManager instance for testing."""
    from calendar_manager.database.managers.location_manager import LocationManager
    return LocationManager(db_session)


# ----- Sample Data Fixtures -----

@pytest.fixture
def launch_event(event_manager):
    """Persisted event on 2024-05-01 at HQ."""
    return event_manager.create({
        "date": date(2024, 5, 1),
        "description": "Launch",
        "location": "HQ",
    })
