"""Database engine, session factory, and declarative base.

One DeclarativeBase for the catalog tables:
  - CatalogBase → challenge categories, challenges, deep talks, …

Session factory dependency for FastAPI:
  - get_session_factory() → ``async_session`` (tests point it at SQLite)

The bulk import engine opens one short session per persistence call
(see services.record_store) rather than holding a request session.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from catalog_cms.config import settings


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign-key enforcement."""
    engine = create_async_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(engine.sync_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return engine


engine = build_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=20,
    max_overflow=10,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# ── Base class ──────────────────────────────────────────────

class CatalogBase(DeclarativeBase):
    """Models for the localized catalog tables."""
    pass


# ── Session dependency ────────────────────────────────────

def get_session_factory() -> async_sessionmaker:
    """FastAPI dependency returning the session factory (overridden in tests)."""
    return async_session
