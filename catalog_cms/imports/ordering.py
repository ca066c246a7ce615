"""Ordinal slot allocation within an ordering scope.

Rows in the same scope (e.g. all categories of one game mode) carry a
``sort_order``.  Inserting at position N pushes every sibling at N or above
up by one, highest first, so that no two siblings share an ordinal at any
point of the shift.  A failure mid-shift can leave a gap but never a
duplicate.
"""

from __future__ import annotations

import asyncio
import logging
import weakref

from catalog_cms.imports.graph import OrderToken
from catalog_cms.imports.store import Gte, RecordStore

logger = logging.getLogger("catalog_cms.imports.ordering")


class ScopeLocks:
    """One asyncio.Lock per (collection, scope key).

    Concurrent runs targeting the same scope serialize their
    shift-then-insert sequence through these. Entries are weak: a lock that
    no coroutine holds or waits on drops out of the registry.
    """

    def __init__(self):
        self._locks: weakref.WeakValueDictionary[tuple[str, str], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def for_scope(self, token: OrderToken) -> asyncio.Lock:
        key = (token.collection, str(token.scope_key))
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def __len__(self) -> int:
        return len(self._locks)


# Process-wide registry shared by every runner unless one is injected.
scope_locks = ScopeLocks()


class OrderSlotAllocator:
    def __init__(self, store: RecordStore):
        self._store = store

    async def make_room(self, token: OrderToken) -> int:
        """Shift siblings at or above ``token.position`` up by one.

        Returns the number of records shifted.
        """
        siblings = await self._store.get(token.collection, {
            token.scope_field: token.scope_key,
            token.ordinal_field: Gte(token.position),
        })
        siblings.sort(key=lambda rec: rec[token.ordinal_field], reverse=True)

        for rec in siblings:
            await self._store.update(
                token.collection,
                rec["id"],
                {token.ordinal_field: rec[token.ordinal_field] + 1},
            )

        if siblings:
            logger.debug(
                "Shifted %d %s records in scope %s from position %d",
                len(siblings), token.collection, token.scope_key, token.position,
            )
        return len(siblings)
