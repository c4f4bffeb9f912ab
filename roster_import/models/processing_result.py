from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .error_record import ErrorRecord
from .uploaded_file import FileStatus

"""Processing result models for the bulk import pipeline.

BatchResult is the per-file accumulator owned by the batch processor while
the file's rows are drained. ImportReport is the aggregate across every file
of one upload, handed to the caller for display.
"""

__all__ = [
    "BatchResult",
    "ImportReport",
]


@dataclass
class BatchResult:
    """Per-file import result.

    Invariant: created_count + skipped_count == rows_processed.
    """
    file_name: str
    rows_processed: int = 0
    created_count: int = 0
    skipped_count: int = 0
    errors: list[ErrorRecord] = field(default_factory=list)
    created_entities: list[Any] = field(default_factory=list)
    status: FileStatus = FileStatus.PENDING

    def record_created(self, entity: Any) -> None:
        self.rows_processed += 1
        self.created_count += 1
        self.created_entities.append(entity)

    def record_skipped(self, errors: list[ErrorRecord] | tuple[ErrorRecord, ...]) -> None:
        self.rows_processed += 1
        self.skipped_count += 1
        self.errors.extend(e.with_file(self.file_name) for e in errors)

    def record_file_error(self, error: ErrorRecord) -> None:
        """Attach an error that belongs to the file rather than a row."""
        self.errors.append(error.with_file(self.file_name))
        self.status = FileStatus.FAILED

    def finalize(self) -> None:
        """Derive the final status once the file's rows are exhausted."""
        if self.status == FileStatus.FAILED:
            return
        if self.skipped_count == 0:
            self.status = FileStatus.SUCCESS
        elif self.created_count > 0:
            self.status = FileStatus.PARTIAL
        else:
            self.status = FileStatus.FAILED


@dataclass(frozen=True)
class ImportReport:
    """Aggregated result of one user-initiated upload.

    total_success / total_failed count rows (created / skipped). Files that
    could not be read contribute a file-level error and count in failed_files.
    all_errors is a display rendering of the structured errors, which are
    kept in per_file_results.
    """
    total_success: int
    total_failed: int
    per_file_results: list[BatchResult]
    all_errors: list[str]
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    cancelled: bool = False

    @property
    def errors(self) -> list[ErrorRecord]:
        return [e for r in self.per_file_results for e in r.errors]

    @property
    def created_entities(self) -> list[Any]:
        return [c for r in self.per_file_results for c in r.created_entities]

    @property
    def rows_processed(self) -> int:
        return sum(r.rows_processed for r in self.per_file_results)

    @property
    def failed_files(self) -> int:
        return sum(1 for r in self.per_file_results if r.status == FileStatus.FAILED)

    @property
    def has_failures(self) -> bool:
        return self.total_failed > 0 or any(r.errors for r in self.per_file_results)
