"""Structured result of a bulk import run."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class RowErrorKind(str, enum.Enum):
    FIELD_COUNT = "field_count"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    COMPENSATION = "compensation"


class RunState(str, enum.Enum):
    IDLE = "idle"
    HEADER_CHECKED = "header_checked"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RowError:
    row: int
    message: str
    kind: RowErrorKind = RowErrorKind.VALIDATION

    def to_dict(self) -> dict:
        return {"row": self.row, "message": self.message, "kind": self.kind.value}


@dataclass(frozen=True)
class OrphanRecord:
    """A record left behind because its compensating delete failed."""
    collection: str
    id: str
    row: int

    def to_dict(self) -> dict:
        return {"collection": self.collection, "id": self.id, "row": self.row}


@dataclass
class ImportResult:
    """Counters only move forward; one ``record_*`` call per row."""

    entity: str
    total_rows: int = 0
    processed_count: int = 0
    success_count: int = 0
    errors: list[RowError] = field(default_factory=list)
    orphans: list[OrphanRecord] = field(default_factory=list)
    state: RunState = RunState.IDLE

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    @property
    def cancelled(self) -> bool:
        return self.state is RunState.CANCELLED

    def record_success(self) -> None:
        self.processed_count += 1
        self.success_count += 1

    def record_failure(self, error: RowError) -> None:
        self.processed_count += 1
        self.errors.append(error)

    def to_dict(self) -> dict:
        return {
            "entity": self.entity,
            "total_rows": self.total_rows,
            "processed": self.processed_count,
            "succeeded": self.success_count,
            "failed": self.failed_count,
            "cancelled": self.cancelled,
            "errors": [e.to_dict() for e in self.errors],
            "orphans": [o.to_dict() for o in self.orphans],
        }
