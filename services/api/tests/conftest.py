import os

# Must be set before app.core.config is imported.
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["CATALOG_PROVIDER"] = "fixture"
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from datetime import datetime, timezone

import pytest
from app.api.deps import get_catalog_provider
from app.core.config import DEFAULT_FIXTURE_CATALOG_PATH
from app.db.session import get_db
from app.domain.books import BookRecord, CandidateRecord
from app.domain.errors import ProviderUnavailable
from app.main import app
from app.models import Base
from app.services.catalog.fixture_provider import FixtureProvider
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


class MemoryBookStore:
    """In-memory BookStore used to exercise the service without a database."""

    def __init__(self):
        self._rows: dict[int, BookRecord] = {}
        self._next_id = 1

    def list(self):
        return [r.model_copy() for _, r in sorted(self._rows.items())]

    def get(self, book_id):
        row = self._rows.get(book_id)
        return row.model_copy() if row is not None else None

    def insert(self, record):
        stored = record.model_copy(update={"id": self._next_id})
        self._rows[self._next_id] = stored
        self._next_id += 1
        return stored.model_copy()

    def replace(self, book_id, record):
        if book_id not in self._rows:
            return None
        stored = record.model_copy(update={"id": book_id})
        self._rows[book_id] = stored
        return stored.model_copy()

    def remove(self, book_id):
        return self._rows.pop(book_id, None) is not None


class RecordingProvider:
    """Fake catalog provider that remembers how it was called."""

    name = "recording"

    def __init__(self, results=None, fail=False):
        self.results = list(results or [])
        self.fail = fail
        self.calls: list[tuple] = []

    async def search(self, query, limit=10):
        self.calls.append(("search", query, limit))
        if self.fail:
            raise ProviderUnavailable("provider down")
        return self.results[:limit]

    async def lookup_isbn(self, isbn):
        self.calls.append(("lookup_isbn", isbn))
        if self.fail:
            raise ProviderUnavailable("provider down")
        for c in self.results:
            if c.isbn == isbn:
                return c
        return None


@pytest.fixture()
def memory_store():
    return MemoryBookStore()


@pytest.fixture()
def recording_provider():
    return RecordingProvider(
        results=[
            CandidateRecord(title="Dune", author="Frank Herbert", isbn="9780441013593"),
            CandidateRecord(title="Dune Messiah", author="Frank Herbert"),
        ]
    )


@pytest.fixture()
def fixed_now():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def engine():
    # Prefer a dedicated database for realism.
    # Override at runtime: TEST_DATABASE_URL=... pytest
    url = os.getenv("TEST_DATABASE_URL")
    if url:
        eng = create_engine(url, pool_pre_ping=True)
    else:
        # Default to in-memory SQLite so tests run without external services.
        eng = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)


@pytest.fixture()
def db_session(engine):
    connection = engine.connect()
    tx = connection.begin()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=connection
    )
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        tx.rollback()
        connection.close()


@pytest.fixture()
def fixture_provider():
    return FixtureProvider(str(DEFAULT_FIXTURE_CATALOG_PATH))


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    # Rate limiting fails open without Redis.
    monkeypatch.setattr("app.api.rate_limit.get_redis", lambda: None)


@pytest.fixture()
def client(db_session, fixture_provider):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_provider] = lambda: fixture_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def failing_provider():
    return RecordingProvider(fail=True)


@pytest.fixture()
def use_provider(client):
    """Swap the external catalog behind ``client`` for the given provider."""

    def _use(provider):
        app.dependency_overrides[get_catalog_provider] = lambda: provider
        return provider

    return _use
