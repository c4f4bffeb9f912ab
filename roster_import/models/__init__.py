"""Domain models for the school-transport bulk import pipeline.

This package contains the data classes that flow through the pipeline:
parsed rows, normalized records, structured errors and the per-file /
per-upload results.
"""

from .config_models import ImportConfig
from .error_record import FILE_LEVEL_ROW, ErrorCategory, ErrorRecord
from .processing_result import BatchResult, ImportReport
from .records import NormalizedRecord, PartialRecord, RowOutcome
from .row_data import RawRow, RowData
from .uploaded_file import FileStatus, UploadedFile

__all__ = [
    # Configuration models
    "ImportConfig",
    # Row models
    "RawRow",
    "RowData",
    "PartialRecord",
    "NormalizedRecord",
    "RowOutcome",
    # Errors
    "ErrorCategory",
    "ErrorRecord",
    "FILE_LEVEL_ROW",
    # Results
    "FileStatus",
    "UploadedFile",
    "BatchResult",
    "ImportReport",
]
