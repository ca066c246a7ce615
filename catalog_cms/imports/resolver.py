"""Natural-key → id resolution."""

from __future__ import annotations

from catalog_cms.imports.errors import NotFoundError
from catalog_cms.imports.import_spec import NaturalKey
from catalog_cms.imports.store import RecordStore


class KeyResolver:
    def __init__(self, store: RecordStore):
        self._store = store

    async def resolve(self, key: str, natural_key: NaturalKey) -> str:
        """Return the id of the single record whose match field equals ``key``.

        Matching is exact. No match and more than one match are both
        reported as NotFoundError.
        """
        filters = {**natural_key.filters, natural_key.match_field: key}
        records = await self._store.get(natural_key.collection, filters)
        if len(records) != 1:
            raise NotFoundError(
                key, natural_key.collection, natural_key.match_field,
                matches=len(records),
            )
        return str(records[0][natural_key.id_field])
