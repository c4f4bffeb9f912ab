from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..logging.error_log import ErrorLogBuffer
from ..mappings.entities import EntityImportSpec, get_entity_spec
from ..models.config_models import ImportConfig
from ..models.error_record import FILE_LEVEL_ROW, ErrorCategory, ErrorRecord
from ..models.processing_result import BatchResult, ImportReport
from ..models.row_data import RowData
from ..models.uploaded_file import FileStatus, UploadedFile
from .normalizer import NormalizationContext, normalize_row
from .progress import ImportProgress
from .suffix import UniqueSuffixSource
from .summary import build_report

"""Batch orchestration for the bulk import pipeline.

Files are drained one after another and rows within a file one after
another, so there is never more than one create call in flight. Every
failure below the batch (unreadable file, invalid row, rejected create)
is turned into ErrorRecord data and processing continues with the next
row or file.
"""

__all__ = [
    "BatchProcessor",
    "BatchState",
    "CreateRecord",
    "run_import",
]

logger = logging.getLogger(__name__)

# create_record(entity_type, payload) -> created entity; raises on rejection
CreateRecord = Callable[[str, dict[str, Any]], Any]


class BatchState(Enum):
    """Processor state: idle -> file(i) -> row(i, j) -> file complete(i) -> ... -> batch complete."""
    IDLE = "idle"
    PROCESSING_FILE = "processing_file"
    PROCESSING_ROW = "processing_row"
    FILE_COMPLETE = "file_complete"
    BATCH_COMPLETE = "batch_complete"


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class BatchProcessor:
    """Drive one upload through normalization and creation.

    The accumulators (results, created entities) belong to this instance for
    the duration of one process() call and are never shared.
    """

    def __init__(
        self,
        spec: EntityImportSpec,
        create_record: CreateRecord,
        context: NormalizationContext | None = None,
        *,
        should_cancel: Callable[[], bool] | None = None,
        error_log: ErrorLogBuffer | None = None,
        show_progress: bool = False,
    ) -> None:
        self.spec = spec
        self.create_record = create_record
        self.context = context or NormalizationContext.create()
        self.should_cancel = should_cancel
        self.error_log = error_log
        self.show_progress = show_progress
        self.state = BatchState.IDLE
        self.position: tuple[int, int] | None = None  # (file index, row number)
        self.cancelled = False

    def _cancel_requested(self) -> bool:
        if self.should_cancel is not None and self.should_cancel():
            if not self.cancelled:
                logger.warning("import cancelled, no further rows will be scheduled")
            self.cancelled = True
        return self.cancelled

    def process(self, files: Sequence[UploadedFile]) -> ImportReport:
        start_time = datetime.now(UTC)
        results: list[BatchResult] = []

        with ImportProgress(len(files), label=self.spec.entity_type, enabled=self.show_progress) as progress:
            for index, uploaded in enumerate(files):
                if self._cancel_requested():
                    break
                results.append(self._process_file(index, uploaded, progress))

        self.state = BatchState.BATCH_COMPLETE
        self.position = None
        report = build_report(results, start_time=start_time, end_time=datetime.now(UTC), cancelled=self.cancelled)
        if self.error_log is not None:
            self.error_log.extend(report.errors)
        return report

    def _process_file(self, index: int, uploaded: UploadedFile, progress: ImportProgress) -> BatchResult:
        self.state = BatchState.PROCESSING_FILE
        self.position = (index, 0)
        result = BatchResult(file_name=uploaded.name, status=FileStatus.PROCESSING)
        logger.info("importing %s as %s", uploaded.name, self.spec.entity_type)

        try:
            rows = list(uploaded.read_rows())
        except Exception as e:
            logger.error("file %s could not be read: %s", uploaded.name, _describe(e))
            result.record_file_error(
                ErrorRecord.create(
                    FILE_LEVEL_ROW,
                    f"could not read file: {_describe(e)}",
                    category=ErrorCategory.FILE_UNREADABLE,
                )
            )
            self.state = BatchState.FILE_COMPLETE
            return result

        progress.start_file(index, uploaded.name, len(rows))
        for row in rows:
            if self._cancel_requested():
                break
            self.state = BatchState.PROCESSING_ROW
            self.position = (index, row.row_number)
            created_before = result.created_count
            self._process_row(row, result)
            progress.row_done(created=result.created_count > created_before)
        progress.finish_file()

        result.finalize()
        self.state = BatchState.FILE_COMPLETE
        logger.info(
            "%s: created=%d skipped=%d status=%s",
            uploaded.name,
            result.created_count,
            result.skipped_count,
            result.status.value,
        )
        return result

    def _process_row(self, row: RowData, result: BatchResult) -> None:
        try:
            outcome = normalize_row(row, self.spec, self.context)
        except Exception as e:
            logger.exception("row %d of %s could not be normalized", row.row_number, result.file_name)
            result.record_skipped([ErrorRecord.create(row.row_number, f"could not normalize row: {_describe(e)}")])
            return

        if not outcome.ok or outcome.record is None:
            logger.warning(
                "row %d of %s skipped: %s",
                row.row_number,
                result.file_name,
                "; ".join(e.render() for e in outcome.errors),
            )
            result.record_skipped(outcome.errors)
            return

        try:
            entity = self.create_record(self.spec.entity_type, outcome.record.values)
        except Exception as e:
            logger.warning("row %d of %s rejected: %s", row.row_number, result.file_name, _describe(e))
            result.record_skipped(
                [ErrorRecord.create(row.row_number, _describe(e), category=ErrorCategory.REMOTE_REJECTION)]
            )
            return
        result.record_created(entity)


def run_import(
    files: Sequence[UploadedFile],
    entity_type: str,
    create_record: CreateRecord,
    *,
    config: ImportConfig | None = None,
    source: UniqueSuffixSource | None = None,
    should_cancel: Callable[[], bool] | None = None,
    error_log: ErrorLogBuffer | None = None,
    show_progress: bool = False,
) -> ImportReport:
    """Import ``files`` as ``entity_type`` records.

    Raises:
        UnknownEntityTypeError: If ``entity_type`` has no import spec. Nothing
            else escapes; row and file failures are reported in the result.
    """
    cfg = config or ImportConfig()
    spec = get_entity_spec(entity_type, cfg.aliases)
    processor = BatchProcessor(
        spec,
        create_record,
        NormalizationContext.create(cfg, source),
        should_cancel=should_cancel,
        error_log=error_log,
        show_progress=show_progress,
    )
    return processor.process(files)
