"""Commit an EntityGraph as one logical unit.

Insert order is parent → translations → children.  If a dependent insert
fails, the records already written are removed: the parent alone when
there is one (its dependents go with it through ON DELETE CASCADE),
otherwise each inserted child in reverse order.  Deletes are retried per
CompensationPolicy; whatever still cannot be removed is reported as an
orphan on the InsertError.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from catalog_cms.config import settings
from catalog_cms.imports.errors import InsertError
from catalog_cms.imports.graph import EntityGraph, RecordDraft
from catalog_cms.imports.result import OrphanRecord
from catalog_cms.imports.store import RecordStore

logger = logging.getLogger("catalog_cms.imports.inserter")


@dataclass(frozen=True)
class CompensationPolicy:
    max_attempts: int = 3
    retry_delay_seconds: float = 0.2

    @classmethod
    def from_settings(cls) -> "CompensationPolicy":
        return cls(
            max_attempts=max(1, settings.compensation_max_attempts),
            retry_delay_seconds=settings.compensation_retry_delay_seconds,
        )


@dataclass
class CommittedEntity:
    parent_id: str | None
    translation_ids: list[str] = field(default_factory=list)
    child_ids: list[str] = field(default_factory=list)


class EntityInserter:
    def __init__(self, store: RecordStore, policy: CompensationPolicy | None = None):
        self._store = store
        self._policy = policy or CompensationPolicy()

    async def commit(self, graph: EntityGraph) -> CommittedEntity:
        # (collection, id) pairs to delete if a later step fails
        undo: list[tuple[str, str]] = []
        parent_id: str | None = None

        if graph.parent is not None:
            try:
                parent_id = await self._store.insert(graph.parent.collection, graph.parent.fields)
            except Exception as exc:
                # nothing written yet, nothing to compensate
                raise InsertError(f"Could not insert {graph.parent.collection}: {exc}") from exc
            undo.append((graph.parent.collection, parent_id))

        committed = CommittedEntity(parent_id=parent_id)
        committed.translation_ids = await self._insert_dependents(
            graph, graph.translations, parent_id, undo, stage="translations",
        )
        committed.child_ids = await self._insert_dependents(
            graph, graph.children, parent_id, undo, stage="children",
        )
        return committed

    async def _insert_dependents(
        self,
        graph: EntityGraph,
        drafts: list[RecordDraft],
        parent_id: str | None,
        undo: list[tuple[str, str]],
        *,
        stage: str,
    ) -> list[str]:
        ids: list[str] = []
        for draft in drafts:
            record = dict(draft.fields)
            if draft.parent_fk is not None and parent_id is not None:
                record[draft.parent_fk] = parent_id
            try:
                new_id = await self._store.insert(draft.collection, record)
            except Exception as exc:
                message = f"Error inserting {stage} ({draft.collection}): {exc}"
                raise await self._compensate(graph, undo, message) from exc
            ids.append(new_id)
            if parent_id is None:
                undo.append((draft.collection, new_id))
        return ids

    async def _compensate(
        self, graph: EntityGraph, undo: list[tuple[str, str]], message: str,
    ) -> InsertError:
        """Delete everything in ``undo`` and build the error to raise."""
        orphans: list[OrphanRecord] = []
        for collection, record_id in reversed(undo):
            if not await self._delete_with_retry(collection, record_id):
                orphans.append(OrphanRecord(collection=collection, id=record_id, row=graph.row))

        if orphans:
            logger.error(
                "Row %d: compensation failed, %d orphaned record(s): %s",
                graph.row, len(orphans),
                ", ".join(f"{o.collection}:{o.id}" for o in orphans),
            )
            return InsertError(
                f"{message}; cleanup failed, orphaned records left behind",
                compensated=False,
                orphans=orphans,
            )
        return InsertError(message)

    async def _delete_with_retry(self, collection: str, record_id: str) -> bool:
        for attempt in range(1, self._policy.max_attempts + 1):
            try:
                await self._store.delete(collection, record_id)
                return True
            except Exception as exc:
                logger.warning(
                    "Compensating delete of %s:%s failed (attempt %d/%d): %s",
                    collection, record_id, attempt, self._policy.max_attempts, exc,
                )
                if attempt < self._policy.max_attempts:
                    await asyncio.sleep(self._policy.retry_delay_seconds)
        return False
