"""SQLAlchemy-backed record store for the bulk import engine.

Collections are table names from CatalogBase.metadata.  Each call opens
its own short session and commits before returning, so a failed step of
an import leaves earlier steps committed and the inserter's compensation
is what removes them.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

import catalog_cms.models  # noqa: F401  (registers tables on CatalogBase.metadata)
from catalog_cms.database import CatalogBase
from catalog_cms.imports.errors import PersistenceError
from catalog_cms.imports.store import Gte

logger = logging.getLogger(__name__)


class SqlAlchemyRecordStore:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    def _table(self, collection: str) -> Table:
        table = CatalogBase.metadata.tables.get(collection)
        if table is None:
            raise PersistenceError("lookup", collection, "unknown collection")
        return table

    def _where(self, table: Table, filters: Mapping[str, Any]) -> list:
        clauses = []
        for column, value in filters.items():
            if column not in table.c:
                raise PersistenceError("get", table.name, f"unknown column {column!r}")
            col = table.c[column]
            clauses.append(col >= value.value if isinstance(value, Gte) else col == value)
        return clauses

    async def get(self, collection: str, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        table = self._table(collection)
        stmt = select(table).where(*self._where(table, filters))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise PersistenceError("get", collection, str(exc)) from exc

    async def insert(self, collection: str, fields: Mapping[str, Any]) -> str:
        table = self._table(collection)
        try:
            async with self._session_factory() as session:
                result = await session.execute(insert(table).values(**fields))
                await session.commit()
                return str(result.inserted_primary_key[0])
        except SQLAlchemyError as exc:
            raise PersistenceError("insert", collection, str(exc)) from exc

    async def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        table = self._table(collection)
        stmt = update(table).where(table.c.id == record_id).values(**fields)
        try:
            async with self._session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("update", collection, str(exc)) from exc

    async def delete(self, collection: str, record_id: str) -> None:
        table = self._table(collection)
        try:
            async with self._session_factory() as session:
                await session.execute(delete(table).where(table.c.id == record_id))
                await session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("delete", collection, str(exc)) from exc
        logger.debug("Deleted %s:%s", collection, record_id)
