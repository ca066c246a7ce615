"""Pytest configuration and fixtures for catalog CMS tests.

Engine tests run against FakeRecordStore, an in-memory RecordStore with
failure injection.  Store and API tests run against SQLite in memory.
"""

import itertools
from collections import defaultdict
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import catalog_cms.models  # noqa: F401
from catalog_cms.database import CatalogBase, build_engine, get_session_factory
from catalog_cms.imports import CompensationPolicy, Gte, ImportRunner, PersistenceError, ScopeLocks
from catalog_cms.main import app
from catalog_cms.services.record_store import SqlAlchemyRecordStore


# ── In-memory record store ───────────────────────────────────────

CATALOG_CASCADES = {
    "challenge_categories": [
        ("challenge_category_translations", "challenge_category_id"),
        ("challenges", "challenge_category_id"),
    ],
    "challenges": [("challenge_translations", "challenge_id")],
    "deep_talk_categories": [
        ("deep_talk_categories_translations", "deep_talk_category_id"),
        ("deep_talks", "deep_talk_category_id"),
    ],
    "deep_talks": [
        ("deep_talk_translations", "deep_talk_id"),
        ("deep_talk_questions", "deep_talk_id"),
    ],
}


def _matches(record: dict, filters: dict) -> bool:
    for column, value in filters.items():
        actual = record.get(column)
        if isinstance(value, Gte):
            if actual is None or actual < value.value:
                return False
        elif actual != value:
            return False
    return True


class FakeRecordStore:
    """RecordStore keeping records in dicts, with ON DELETE CASCADE emulation.

    ``fail(operation, collection, after=N, times=M)`` makes the (N+1)th and
    following calls raise PersistenceError, M times (-1 = forever).
    """

    def __init__(self, cascades: dict | None = None):
        self.collections: dict[str, dict[str, dict]] = defaultdict(dict)
        self.cascades = CATALOG_CASCADES if cascades is None else cascades
        self.calls: list[tuple[str, str]] = []
        self._rules: dict[tuple[str, str], dict] = {}
        self._ids = itertools.count(1)

    # ── test helpers ──

    def fail(self, operation: str, collection: str, *, after: int = 0, times: int = -1):
        self._rules[(operation, collection)] = {"after": after, "times": times}

    def seed(self, collection: str, **fields) -> str:
        record_id = fields.pop("id", None) or f"{collection}-{next(self._ids)}"
        self.collections[collection][record_id] = {"id": record_id, **fields}
        return record_id

    def records(self, collection: str) -> list[dict]:
        return list(self.collections[collection].values())

    def _check(self, operation: str, collection: str):
        self.calls.append((operation, collection))
        rule = self._rules.get((operation, collection))
        if rule is None:
            return
        if rule["after"] > 0:
            rule["after"] -= 1
            return
        if rule["times"] == 0:
            return
        if rule["times"] > 0:
            rule["times"] -= 1
        raise PersistenceError(operation, collection, "injected failure")

    # ── RecordStore ──

    async def get(self, collection, filters):
        self._check("get", collection)
        return [dict(r) for r in self.collections[collection].values() if _matches(r, filters)]

    async def insert(self, collection, fields):
        self._check("insert", collection)
        return self.seed(collection, **dict(fields))

    async def update(self, collection, record_id, fields):
        self._check("update", collection)
        self.collections[collection][record_id].update(fields)

    async def delete(self, collection, record_id):
        self._check("delete", collection)
        self._delete_cascade(collection, record_id)

    def _delete_cascade(self, collection, record_id):
        self.collections[collection].pop(record_id, None)
        for child, fk in self.cascades.get(collection, []):
            for child_id in [i for i, r in self.collections[child].items() if r.get(fk) == record_id]:
                self._delete_cascade(child, child_id)


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def runner(store) -> ImportRunner:
    return ImportRunner(
        store,
        compensation=CompensationPolicy(max_attempts=2, retry_delay_seconds=0),
        locks=ScopeLocks(),
    )


# ── SQLite database ──────────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite with the catalog schema; one shared connection."""
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(CatalogBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def record_store(session_factory) -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore(session_factory)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the session factory pointed at the SQLite engine."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
