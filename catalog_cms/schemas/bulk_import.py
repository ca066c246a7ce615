"""Bulk import request/response schemas."""

from pydantic import BaseModel


class RowErrorOut(BaseModel):
    row: int
    message: str
    kind: str


class OrphanOut(BaseModel):
    collection: str
    id: str
    row: int


class BulkImportResult(BaseModel):
    entity: str
    total_rows: int
    processed: int
    succeeded: int
    failed: int
    cancelled: bool = False
    errors: list[RowErrorOut]
    orphans: list[OrphanOut] = []


class ImportTypeOut(BaseModel):
    """An importable entity type and the CSV columns it understands."""
    entity: str
    label: str
    required_headers: list[str]
    optional_headers: list[str]
