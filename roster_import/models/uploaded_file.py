from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .row_data import RowData

"""UploadedFile model and FileStatus enum.

An UploadedFile is the pipeline's view of one file in a user-initiated
upload: a display name plus a callable that produces its parsed rows.
Reading is deferred to the batch processor so that a file that cannot be
read at all fails at the file boundary instead of before the batch starts.
"""

__all__ = [
    "FileStatus",
    "UploadedFile",
]


class FileStatus(Enum):
    """Status of one uploaded file through the import lifecycle.

    State transitions: pending -> processing -> (success | partial | failed)

    - PENDING: File accepted but not yet processed
    - PROCESSING: Rows of the file are being imported
    - SUCCESS: Every row of the file was created
    - PARTIAL: Some rows were created, some were skipped
    - FAILED: The file could not be read, or no row was created
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadedFile:
    """One file of an upload (name + deferred row source)."""
    name: str
    read_rows: Callable[[], Sequence[RowData]]

    @staticmethod
    def from_rows(name: str, rows: Sequence[Mapping[str, Any]]) -> UploadedFile:
        """Build an UploadedFile from already-parsed dict rows (numbered from 1)."""
        numbered = RowData.number(list(rows))
        return UploadedFile(name=name, read_rows=lambda: numbered)
