"""EntityGraph, the unit the EntityInserter commits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from catalog_cms.imports.import_spec import ImportSpec
    from catalog_cms.imports.validator import ValidatedRow


@dataclass
class RecordDraft:
    """A record not yet inserted.

    ``parent_fk`` names the field stamped with the parent's id once the
    parent has been inserted.
    """
    collection: str
    fields: dict[str, Any]
    parent_fk: str | None = None


@dataclass(frozen=True)
class OrderToken:
    """Desired ordinal ``position`` among the rows of ``collection`` whose
    ``scope_field`` equals ``scope_key``."""
    collection: str
    scope_field: str
    scope_key: str
    position: int
    ordinal_field: str = "sort_order"


@dataclass
class EntityGraph:
    row: int
    parent: RecordDraft | None
    translations: list[RecordDraft] = field(default_factory=list)
    children: list[RecordDraft] = field(default_factory=list)
    order: OrderToken | None = None

    def __post_init__(self):
        if self.parent is None and self.translations:
            raise ValueError("translation records need a parent record")
        if self.parent is None and not self.children:
            raise ValueError("entity graph has nothing to insert")


def parent_fields(row: "ValidatedRow", spec: "ImportSpec") -> dict[str, Any]:
    """Copy every column with a ``db_field`` onto a parent field map."""
    return {
        fd.db_field: row.values.get(fd.column)
        for fd in spec.fields
        if fd.db_field
    }


def translation_drafts(
    row: "ValidatedRow",
    columns: Mapping[str, Mapping[str, str]],
    *,
    collection: str,
    parent_fk: str | None,
    extra: Mapping[str, Any] | None = None,
) -> list[RecordDraft]:
    """One draft per language whose primary text column is filled in."""
    drafts: list[RecordDraft] = []
    for lang, fields_by_name in columns.items():
        names = list(fields_by_name)
        primary = row.values.get(fields_by_name[names[0]])
        if not primary:
            continue
        record = {"language_code": lang}
        for name in names:
            record[name] = row.values.get(fields_by_name[name]) or None
        if extra:
            record.update(extra)
        drafts.append(RecordDraft(
            collection=collection,
            fields=record,
            parent_fk=parent_fk,
        ))
    return drafts
