"""Per-entity import definitions: columns, coercion, references, ordering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping

if TYPE_CHECKING:
    from catalog_cms.imports.graph import EntityGraph
    from catalog_cms.imports.validator import ValidatedRow


LANGUAGES = ("es", "en", "fr", "it", "pt")

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class FieldDef:
    """Definition for a single CSV column.

    ``db_field`` is set for columns copied straight onto the parent record;
    translation and reference columns leave it unset and are read by the
    spec's graph builder.
    """
    column: str
    db_field: str | None = None
    required: bool = False
    coerce: Callable[[str], Any] | None = None
    choices: frozenset[str] | None = None
    default: Any = None


def coerce_int(val: str) -> int:
    val = val.strip()
    if not _INT_RE.fullmatch(val):
        raise ValueError(f"not an integer: {val!r}")
    return int(val)


def coerce_bool(val: str) -> bool:
    return val.strip() in ("true", "1")


def coerce_pipe_list(val: str) -> list[str]:
    """Parse pipe-separated string into list: '#8B5CF6|#EC4899' -> ['#8B5CF6', '#EC4899']"""
    return [item.strip() for item in val.split("|") if item.strip()]


def coerce_comma_list(val: str) -> list[str]:
    """Parse a comma list held in one quoted cell: 'party, fun' -> ['party', 'fun']"""
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass(frozen=True)
class NaturalKey:
    """Resolve ``column`` to an id by exact match on ``collection.match_field``."""
    column: str
    collection: str
    match_field: str
    id_field: str = "id"
    filters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportSpec:
    entity: str
    label: str
    fields: tuple[FieldDef, ...]
    build_graph: Callable[["ValidatedRow", str | None], "EntityGraph"]
    natural_key: NaturalKey | None = None
    order_column: str | None = None
    # language code → {db field: CSV column}; the first db field of each
    # language is the one that must be non-blank for a translation row.
    translation_columns: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    sample_rows: tuple[Mapping[str, str], ...] = ()

    @property
    def headers(self) -> list[str]:
        return [fd.column for fd in self.fields]

    @property
    def required_headers(self) -> frozenset[str]:
        return frozenset(fd.column for fd in self.fields if fd.required)

    @property
    def optional_headers(self) -> frozenset[str]:
        return frozenset(fd.column for fd in self.fields if not fd.required)


def language_columns(
    *db_fields: str,
    languages: tuple[str, ...] = LANGUAGES,
) -> dict[str, dict[str, str]]:
    """{'es': {'title': 'title_es', ...}, 'en': {...}} for the given fields."""
    return {
        lang: {name: f"{name}_{lang}" for name in db_fields}
        for lang in languages
    }


def translation_field_defs(
    translation_columns: Mapping[str, Mapping[str, str]],
    *,
    required_languages: tuple[str, ...] = ("es", "en"),
    coercers: Mapping[str, Callable[[str], Any]] | None = None,
) -> tuple[FieldDef, ...]:
    """FieldDefs for every translation column; primary text of required languages is required."""
    coercers = coercers or {}
    defs: list[FieldDef] = []
    for lang, columns in translation_columns.items():
        for position, (name, column) in enumerate(columns.items()):
            defs.append(FieldDef(
                column=column,
                required=position == 0 and lang in required_languages,
                coerce=coercers.get(name),
            ))
    return tuple(defs)
