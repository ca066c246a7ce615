"""Bulk import errors.

File-level errors abort a run before any row is processed and are raised
to the caller (the HTTP layer renders them through the registered
CatalogCMSException handler).

Row-level problems never escape the runner; the component exceptions below
are caught per row and turned into RowError entries on the ImportResult.
"""

from __future__ import annotations

from fastapi import status

from catalog_cms.middleware.exceptions import BusinessLogicError, CatalogCMSException


# ── File-level (fatal) ─────────────────────────────────────────


class ImportFileError(BusinessLogicError):
    """The uploaded file cannot be imported at all."""


class EmptyFileError(ImportFileError):
    def __init__(self, message: str = "CSV file is empty or has no data rows"):
        super().__init__(message=message, error_code="EMPTY_FILE")


class MissingHeadersError(ImportFileError):
    def __init__(self, missing: set[str] | frozenset[str]):
        self.missing = frozenset(missing)
        names = sorted(self.missing)
        super().__init__(
            message=f"Missing required CSV columns: {', '.join(names)}",
            error_code="MISSING_HEADERS",
            details={"missing": names},
        )


class UploadTooLargeError(CatalogCMSException):
    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"Upload of {size} bytes exceeds the {limit} byte limit",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            error_code="UPLOAD_TOO_LARGE",
        )


# ── Row-level (recoverable) ────────────────────────────────────


class NotFoundError(Exception):
    """A natural key did not match exactly one existing record."""

    def __init__(self, key: str, collection: str, field: str, matches: int = 0):
        self.key = key
        self.collection = collection
        self.field = field
        self.matches = matches
        if matches:
            message = f"{matches} {collection} records with {field} \"{key}\", expected one"
        else:
            message = f"No {collection} record with {field} \"{key}\""
        super().__init__(message)


class PersistenceError(Exception):
    """A call to the record store failed."""

    def __init__(self, operation: str, collection: str, message: str):
        self.operation = operation
        self.collection = collection
        super().__init__(f"{operation} on {collection} failed: {message}")


class InsertError(Exception):
    """An entity graph could not be committed.

    ``compensated`` is False when the compensating delete itself failed and
    records were left behind; ``orphans`` then lists them.
    """

    def __init__(self, message: str, *, compensated: bool = True, orphans=None):
        self.compensated = compensated
        self.orphans = list(orphans or [])
        super().__init__(message)
