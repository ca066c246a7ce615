"""Bulk CSV import for catalog content.

Endpoints:
    GET  /api/bulk-import/                          List importable entity types
    GET  /api/bulk-import/{entity}/template         Download example CSV
    POST /api/bulk-import/{entity}/upload           Upload CSV, return result
    POST /api/bulk-import/{entity}/upload/stream    Upload CSV, stream NDJSON progress

Entity types: challenge-categories, challenges, deep-talk-filters,
deep-talks, deep-talk-questions.
"""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog_cms.config import settings
from catalog_cms.database import get_session_factory
from catalog_cms.imports import (
    IMPORT_SPECS,
    ImportRunner,
    ImportSpec,
    UploadTooLargeError,
    check_headers,
    generate_template_csv,
    get_import_spec,
    parse_csv_text,
)
from catalog_cms.schemas.bulk_import import BulkImportResult, ImportTypeOut
from catalog_cms.services.record_store import SqlAlchemyRecordStore

logger = logging.getLogger("catalog_cms.bulk_import")

router = APIRouter()


# ── Dependencies / helpers ──────────────────────────────────


def get_runner(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ImportRunner:
    return ImportRunner(SqlAlchemyRecordStore(session_factory))


async def _read_upload(file: UploadFile) -> bytes:
    limit = settings.import_max_upload_bytes
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise UploadTooLargeError(file.size or len(content), limit)
    return content


def _csv_response(csv_text: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _import_type(spec: ImportSpec) -> ImportTypeOut:
    return ImportTypeOut(
        entity=spec.entity,
        label=spec.label,
        required_headers=[h for h in spec.headers if h in spec.required_headers],
        optional_headers=[h for h in spec.headers if h in spec.optional_headers],
    )


# ── Endpoints ───────────────────────────────────────────────


@router.get("/", response_model=list[ImportTypeOut])
async def list_import_types():
    return [_import_type(spec) for spec in IMPORT_SPECS.values()]


@router.get("/{entity}/template")
async def import_template(entity: str):
    spec = get_import_spec(entity)
    csv_text = generate_template_csv(spec.headers, spec.sample_rows)
    return _csv_response(csv_text, f"{entity}_template.csv")


@router.post("/{entity}/upload", response_model=BulkImportResult)
async def upload_csv(
    entity: str,
    file: UploadFile = File(...),
    runner: ImportRunner = Depends(get_runner),
):
    spec = get_import_spec(entity)
    content = await _read_upload(file)
    result = await runner.run(content, spec)
    return BulkImportResult(**result.to_dict())


@router.post("/{entity}/upload/stream")
async def upload_csv_stream(
    entity: str,
    file: UploadFile = File(...),
    runner: ImportRunner = Depends(get_runner),
):
    """Same as /upload, streamed as NDJSON.

    One ``{"type": "progress", "processed", "total"}`` line per row, then a
    single ``{"type": "result", ...}`` line.  File-level errors are reported
    as a normal 422 response before streaming starts.
    """
    spec = get_import_spec(entity)
    content = await _read_upload(file)
    check_headers(parse_csv_text(content).headers, spec)

    queue: asyncio.Queue = asyncio.Queue()
    cancel = asyncio.Event()

    async def on_progress(processed: int, total: int) -> None:
        await queue.put({"type": "progress", "processed": processed, "total": total})

    async def produce() -> None:
        try:
            result = await runner.run(content, spec, on_progress=on_progress, cancel=cancel)
            await queue.put({"type": "result", **result.to_dict()})
        finally:
            await queue.put(None)

    async def lines():
        task = asyncio.create_task(produce())
        try:
            while (item := await queue.get()) is not None:
                yield json.dumps(item, ensure_ascii=False) + "\n"
            await task
        finally:
            if not task.done():
                # client went away; stop between rows
                logger.info("Streaming import of %s cancelled by client", entity)
                cancel.set()
                await task

    return StreamingResponse(lines(), media_type="application/x-ndjson")
