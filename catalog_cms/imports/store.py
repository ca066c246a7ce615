"""Persistence collaborator used by the import engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class Gte:
    """Filter value meaning ``column >= value``."""
    value: Any


class RecordStore(Protocol):
    """Collection-oriented store.

    ``filters`` maps a column either to a value (equality) or to ``Gte``.
    Implementations raise PersistenceError on failure.
    """

    async def get(self, collection: str, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        ...

    async def insert(self, collection: str, fields: Mapping[str, Any]) -> str:
        ...

    async def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        ...

    async def delete(self, collection: str, record_id: str) -> None:
        ...
