"""CSV text → header list + row maps.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Quoted fields: commas, newlines and doubled quotes ("") inside quotes
  • Empty-line dropping (a line of bare delimiters is kept as a record)
  • Field-count mismatches reported per row instead of aborting the file
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from catalog_cms.imports.errors import EmptyFileError, ImportFileError
from catalog_cms.imports.result import RowError, RowErrorKind


@dataclass(frozen=True)
class ParsedRow:
    """One data record. ``row`` is the 1-based record number (header = 1)."""
    row: int
    values: Mapping[str, str]

    def get(self, column: str, default: str = "") -> str:
        return self.values.get(column, default)


@dataclass
class CsvTable:
    headers: list[str] = field(default_factory=list)
    rows: list[ParsedRow] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows) + len(self.errors)


def decode_csv(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportFileError(
                message=f"File is not valid UTF-8 (byte {exc.start})",
                error_code="INVALID_ENCODING",
            ) from exc
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw


def _is_empty_line(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


def parse_csv_text(raw: str | bytes) -> CsvTable:
    """Parse raw CSV into a CsvTable.

    Raises EmptyFileError if there is no header plus at least one
    non-empty line. A line of empty cells (",,,") is still a record and
    goes on to fail validation like any other.
    """
    text = decode_csv(raw)
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        records = [r for r in reader if not _is_empty_line(r)]
    except csv.Error as exc:
        raise ImportFileError(message=f"Malformed CSV: {exc}", error_code="MALFORMED_CSV") from exc

    if len(records) < 2:
        raise EmptyFileError()

    table = CsvTable(headers=[h.strip() for h in records[0]])
    width = len(table.headers)

    for row_num, record in enumerate(records[1:], start=2):   # row 1 = header
        if len(record) != width:
            table.errors.append(RowError(
                row=row_num,
                message=f"Expected {width} fields, found {len(record)}",
                kind=RowErrorKind.FIELD_COUNT,
            ))
            continue
        table.rows.append(ParsedRow(row=row_num, values=dict(zip(table.headers, record))))

    return table


def generate_template_csv(
    headers: Iterable[str],
    sample_rows: Iterable[Mapping[str, str]] = (),
) -> str:
    """Generate CSV template string with headers and optional sample rows."""
    output = io.StringIO()
    headers = list(headers)
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(headers)
    for sample in sample_rows:
        writer.writerow([sample.get(h, "") for h in headers])
    return output.getvalue()
