"""Header and row validation against an ImportSpec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from catalog_cms.imports.csv_table import ParsedRow
from catalog_cms.imports.errors import MissingHeadersError
from catalog_cms.imports.import_spec import ImportSpec
from catalog_cms.imports.result import RowError, RowErrorKind


@dataclass(frozen=True)
class ValidatedRow:
    row: int
    values: Mapping[str, Any]

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)


def check_headers(headers: Iterable[str], spec: ImportSpec) -> None:
    """Raise MissingHeadersError if any required header is absent.

    Headers the spec doesn't know about are ignored.
    """
    present = {h.strip() for h in headers}
    missing = spec.required_headers - present
    if missing:
        raise MissingHeadersError(missing)


def check_row(row: ParsedRow, spec: ImportSpec) -> ValidatedRow | RowError:
    values: dict[str, Any] = {}
    problems: list[str] = []

    for fd in spec.fields:
        raw = row.get(fd.column).strip()

        if not raw:
            if fd.required:
                problems.append(f"'{fd.column}' is required")
            else:
                values[fd.column] = fd.default
            continue

        if fd.choices is not None and raw not in fd.choices:
            allowed = ", ".join(sorted(fd.choices))
            problems.append(f"'{fd.column}': '{raw}' is not one of {allowed}")
            continue

        if fd.coerce is None:
            values[fd.column] = raw
            continue

        try:
            values[fd.column] = fd.coerce(raw)
        except (ValueError, TypeError):
            problems.append(f"'{fd.column}': invalid value '{raw}'")

    if problems:
        return RowError(row=row.row, message="; ".join(problems), kind=RowErrorKind.VALIDATION)
    return ValidatedRow(row=row.row, values=values)
