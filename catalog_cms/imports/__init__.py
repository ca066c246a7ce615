"""Bulk CSV import engine.

    table = parse_csv_text(raw)              # CsvTable
    check_headers(table.headers, spec)       # raises MissingHeadersError
    check_row(parsed_row, spec)              # ValidatedRow | RowError
    await KeyResolver(store).resolve(key, spec.natural_key)
    await OrderSlotAllocator(store).make_room(graph.order)
    await EntityInserter(store).commit(graph)

ImportRunner.run() drives all of the above for one file.
"""

from catalog_cms.imports.catalog_specs import IMPORT_SPECS, get_import_spec  # noqa: F401
from catalog_cms.imports.csv_table import (  # noqa: F401
    CsvTable,
    ParsedRow,
    generate_template_csv,
    parse_csv_text,
)
from catalog_cms.imports.errors import (  # noqa: F401
    EmptyFileError,
    ImportFileError,
    InsertError,
    MissingHeadersError,
    NotFoundError,
    PersistenceError,
    UploadTooLargeError,
)
from catalog_cms.imports.graph import EntityGraph, OrderToken, RecordDraft  # noqa: F401
from catalog_cms.imports.import_spec import FieldDef, ImportSpec, NaturalKey  # noqa: F401
from catalog_cms.imports.inserter import CompensationPolicy, EntityInserter  # noqa: F401
from catalog_cms.imports.ordering import OrderSlotAllocator, ScopeLocks  # noqa: F401
from catalog_cms.imports.resolver import KeyResolver  # noqa: F401
from catalog_cms.imports.result import (  # noqa: F401
    ImportResult,
    OrphanRecord,
    RowError,
    RowErrorKind,
    RunState,
)
from catalog_cms.imports.runner import ImportRunner  # noqa: F401
from catalog_cms.imports.store import Gte, RecordStore  # noqa: F401
from catalog_cms.imports.validator import ValidatedRow, check_headers, check_row  # noqa: F401
