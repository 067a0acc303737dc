import os

# Keep the application's own engine off disk during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date, timedelta

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool, create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

from event_registration.core.locks import LocalLockProvider, RedisLockProvider
from event_registration.database.db import Base, get_db
from event_registration.domain import Event
from event_registration.main import app
from event_registration.models.events import EventRecord
from event_registration.models.registrations import RegistrationRecord
from event_registration.repositories.memory import InMemoryEventRepository
from event_registration.repositories.sql import SqlAlchemyEventRepository
from event_registration.routes.deps import get_lock_provider
from event_registration.services.ledger import RegistrationLedger

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_AUTH = ("admin", "admin123")


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Set up and tear down the database for the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as conn:
        conn.execute(delete(RegistrationRecord))
        conn.execute(delete(EventRecord))


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def redis_locks(fake_redis) -> RedisLockProvider:
    return RedisLockProvider(client=fake_redis)


@pytest.fixture
def local_locks() -> LocalLockProvider:
    return LocalLockProvider(blocking_timeout=5)


@pytest.fixture
def sql_ledger(db_session: Session, redis_locks) -> RegistrationLedger:
    return RegistrationLedger(SqlAlchemyEventRepository(db_session), redis_locks)


@pytest.fixture
def memory_ledger(local_locks) -> RegistrationLedger:
    return RegistrationLedger(InMemoryEventRepository(), local_locks)


@pytest.fixture(params=["sql", "memory"])
def ledger(request) -> RegistrationLedger:
    """The same ledger behaviour must hold over both storage backends."""
    return request.getfixturevalue(f"{request.param}_ledger")


@pytest.fixture
def seed_event(ledger: RegistrationLedger):
    """Store an event with arbitrary counters, bypassing the ledger's admission path."""

    def _seed(**overrides) -> Event:
        return ledger.repository.insert_event(make_event(**overrides))

    return _seed


@pytest.fixture
def file_sessionmaker(tmp_path):
    """
    File-backed SQLite with a real connection pool, so threads get separate
    connections and separate transactions.
    """
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    Base.metadata.create_all(bind=file_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    file_engine.dispose()


@pytest.fixture
def client(fake_redis):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_provider] = lambda: RedisLockProvider(client=fake_redis)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    client.auth = ADMIN_AUTH
    return client


def make_event(**overrides) -> Event:
    fields = dict(
        title="Community Meetup",
        description="An evening of talks",
        date=date.today() + timedelta(days=30),
        location="Town Hall",
        capacity=10,
        image_url="https://example.com/meetup.jpg",
    )
    fields.update(overrides)
    return Event(**fields)


@pytest.fixture
def event_factory(db_session: Session):
    """Insert events straight into the test database, bypassing the ledger."""

    def _create(**overrides) -> Event:
        return SqlAlchemyEventRepository(db_session).insert_event(make_event(**overrides))

    return _create
