"""ImportRunner: drive one CSV file through the import pipeline.

    parse → header check → for each row, in file order:
        validate → resolve natural key → build graph
        → [scope lock: make room → commit]

Fatal problems (empty file, missing headers) raise before any row is
touched.  Every other failure is recorded against its row and the run
moves on to the next one.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Union

from catalog_cms.imports.csv_table import ParsedRow, parse_csv_text
from catalog_cms.imports.errors import InsertError, NotFoundError, PersistenceError
from catalog_cms.imports.import_spec import ImportSpec
from catalog_cms.imports.inserter import CompensationPolicy, EntityInserter
from catalog_cms.imports.ordering import OrderSlotAllocator, ScopeLocks, scope_locks
from catalog_cms.imports.resolver import KeyResolver
from catalog_cms.imports.result import ImportResult, RowError, RowErrorKind, RunState
from catalog_cms.imports.store import RecordStore
from catalog_cms.imports.validator import check_headers, check_row

logger = logging.getLogger("catalog_cms.imports")

ProgressCallback = Callable[[int, int], Union[Awaitable[None], None]]


class ImportRunner:
    def __init__(
        self,
        store: RecordStore,
        *,
        compensation: CompensationPolicy | None = None,
        locks: ScopeLocks | None = None,
    ):
        self._resolver = KeyResolver(store)
        self._allocator = OrderSlotAllocator(store)
        self._inserter = EntityInserter(store, compensation or CompensationPolicy.from_settings())
        self._locks = locks if locks is not None else scope_locks

    async def run(
        self,
        content: str | bytes,
        spec: ImportSpec,
        *,
        on_progress: ProgressCallback | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ImportResult:
        result = ImportResult(entity=spec.entity)

        table = parse_csv_text(content)
        check_headers(table.headers, spec)
        result.state = RunState.HEADER_CHECKED
        result.total_rows = table.total_rows

        logger.info("Import of %s started: %d rows", spec.entity, result.total_rows)

        # parse failures keep their place in file order
        items: list[ParsedRow | RowError] = sorted(
            [*table.rows, *table.errors], key=lambda item: item.row,
        )

        result.state = RunState.RUNNING
        for item in items:
            if cancel is not None and cancel.is_set():
                result.state = RunState.CANCELLED
                break

            if isinstance(item, RowError):
                self._fail(result, item)
            else:
                await self._process_row(item, spec, result)

            await _notify(on_progress, result.processed_count, result.total_rows)
        else:
            result.state = RunState.COMPLETED

        logger.info(
            "Import of %s %s: %d/%d processed, %d succeeded, %d failed, %d orphaned",
            spec.entity, result.state.value, result.processed_count, result.total_rows,
            result.success_count, result.failed_count, len(result.orphans),
        )
        return result

    async def _process_row(self, parsed: ParsedRow, spec: ImportSpec, result: ImportResult) -> None:
        outcome = check_row(parsed, spec)
        if isinstance(outcome, RowError):
            self._fail(result, outcome)
            return

        row = outcome.row
        try:
            parent_id = None
            if spec.natural_key is not None:
                key = outcome.get(spec.natural_key.column)
                parent_id = await self._resolver.resolve(key, spec.natural_key)

            graph = spec.build_graph(outcome, parent_id)

            if graph.order is None:
                await self._inserter.commit(graph)
            else:
                async with self._locks.for_scope(graph.order):
                    await self._allocator.make_room(graph.order)
                    await self._inserter.commit(graph)
        except NotFoundError as exc:
            self._fail(result, RowError(row, str(exc), RowErrorKind.NOT_FOUND))
        except PersistenceError as exc:
            self._fail(result, RowError(row, str(exc), RowErrorKind.PERSISTENCE))
        except InsertError as exc:
            kind = RowErrorKind.PERSISTENCE if exc.compensated else RowErrorKind.COMPENSATION
            result.orphans.extend(exc.orphans)
            self._fail(result, RowError(row, str(exc), kind))
        except Exception as exc:
            logger.exception("Unexpected error importing %s row %d", spec.entity, row)
            self._fail(result, RowError(row, f"Unexpected error: {exc}", RowErrorKind.PERSISTENCE))
        else:
            result.record_success()

    @staticmethod
    def _fail(result: ImportResult, error: RowError) -> None:
        logger.warning("Row %d rejected (%s): %s", error.row, error.kind.value, error.message)
        result.record_failure(error)


async def _notify(callback: ProgressCallback | None, processed: int, total: int) -> None:
    if callback is None:
        return
    logger.debug("Progress %d/%d", processed, total)
    ret = callback(processed, total)
    if inspect.isawaitable(ret):
        await ret
