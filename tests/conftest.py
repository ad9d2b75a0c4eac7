"""Pytest fixtures and configuration for TooDoo tests."""

import os

# Keep the app's module-level engine off the working directory.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
import uuid
from datetime import datetime, timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from toodoo.database.database import Base
from toodoo.database import models  # noqa: F401  (registers tables)
from toodoo.database.repository import CategoryRepository, ToDoRepository
from toodoo.models.category import Category
from toodoo.models.todo import ToDo
from toodoo.notifications.alarm import InMemoryAlarmFacility
from toodoo.notifications.events import EventBus
from toodoo.notifications.reminders import ReminderScheduler
from toodoo.services.todo_service import ToDoService


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def category_repository(db_session: Session):
    return CategoryRepository(db_session)


@pytest.fixture
def todo_repository(db_session: Session):
    return ToDoRepository(db_session)


@pytest.fixture
def alarm_facility():
    return InMemoryAlarmFacility()


@pytest.fixture
def registration_errors():
    """Collects RegistrationErrors reported by the scheduler."""
    return []


@pytest.fixture
def scheduler(alarm_facility, registration_errors):
    return ReminderScheduler(alarm_facility, on_error=registration_errors.append)


@pytest.fixture
def todo_service(db_session: Session, scheduler):
    return ToDoService(db_session, scheduler)


@pytest.fixture
def sample_category_base():
    """Base category data; override fields per test."""
    return {
        "id": str(uuid.uuid4()),
        "name": "Personal",
        "color": "EE6352",
        "icon": "progress",
        "order": 0,
        "created_at": datetime(2024, 1, 1, 9, 0, 0),
    }


@pytest.fixture
def sample_category(sample_category_base):
    return Category(**sample_category_base)


@pytest.fixture
def sample_todo_base(sample_category):
    """Base to-do data attached to sample_category."""
    now = datetime(2024, 1, 1, 9, 30, 0)
    return {
        "id": str(uuid.uuid4()),
        "goal": "Buy milk",
        "category_id": sample_category.id,
        "created_at": now,
        "updated_at": now,
        "remind_at": None,
        "completed": False,
        "trashed": False,
    }


@pytest.fixture
def sample_todo(sample_todo_base):
    return ToDo(**sample_todo_base)


@pytest.fixture
def remind_at():
    """A remind time in the future (local, minute precision)."""
    return (datetime.now() + timedelta(days=1)).replace(second=0, microsecond=0)


@pytest.fixture
def stored_category(category_repository, sample_category):
    return category_repository.create(sample_category)


@pytest.fixture
def test_client(db_session: Session, scheduler, monkeypatch):
    """FastAPI test client using the test session and scheduler.

    Startup resync reads from the test database into the test scheduler.
    """
    from toodoo.api import app as app_module
    from toodoo.api.app import app, get_event_bus, get_reminder_scheduler
    from toodoo.database.database import get_db

    bus = EventBus()
    monkeypatch.setattr(app_module, "SessionLocal", sessionmaker(bind=db_session.get_bind()))
    monkeypatch.setattr(app_module, "reminder_scheduler", scheduler)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # The db_session fixture closes the session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reminder_scheduler] = lambda: scheduler
    app.dependency_overrides[get_event_bus] = lambda: bus

    with TestClient(app) as client:
        client.event_bus = bus
        yield client

    app.dependency_overrides.clear()
