from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

"""ErrorRecord model for structured import errors.

Every problem found while importing a row or a file is represented by one
ErrorRecord. Errors are plain data: they are accumulated per file, rendered
for display by the summary service and written to the JSON Lines error log.
They are never raised across a row boundary.

Row numbers are 1-based and refer to the row's position in its original
source file. FILE_LEVEL_ROW (-1) marks errors that belong to a whole file
(for example an upload that could not be read at all).
"""

__all__ = [
    "ErrorCategory",
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1


class ErrorCategory(Enum):
    """Classification of import errors (UPPER_SNAKE, as written to the error log).

    - MISSING_FIELD: a mandatory field has no value under any known header alias
    - NORMALIZATION_IMPOSSIBLE: a field could not be canonicalized and may not be synthesized
    - VALIDATION: a resolved or synthesized value breaks a business rule
    - REMOTE_REJECTION: the create capability refused the record
    - FILE_UNREADABLE: the uploaded file could not be turned into rows
    """
    MISSING_FIELD = "MISSING_FIELD"
    NORMALIZATION_IMPOSSIBLE = "NORMALIZATION_IMPOSSIBLE"
    VALIDATION = "VALIDATION"
    REMOTE_REJECTION = "REMOTE_REJECTION"
    FILE_UNREADABLE = "FILE_UNREADABLE"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured import error.

    Attributes:
        row_index: Row number (1-based) in the source file, or -1 for file-level errors
        message: Human readable description
        field: Canonical field name when the error is attributable to one field
        file: Name of the uploaded file, filled in by the batch processor
        category: Error classification
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
    """
    row_index: int
    message: str
    field: str | None = None
    file: str | None = None
    category: ErrorCategory = ErrorCategory.VALIDATION
    timestamp: str = dataclasses.field(default="", compare=False)

    @staticmethod
    def create(
        row_index: int,
        message: str,
        *,
        field: str | None = None,
        file: str | None = None,
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            row_index=row_index,
            message=message,
            field=field,
            file=file,
            category=category,
            timestamp=ts,
        )

    @property
    def is_file_level(self) -> bool:
        return self.row_index == FILE_LEVEL_ROW

    def with_file(self, file: str) -> ErrorRecord:
        """Return a copy attributed to ``file`` (rows do not know their file)."""
        return ErrorRecord(
            row_index=self.row_index,
            message=self.message,
            field=self.field,
            file=file,
            category=self.category,
            timestamp=self.timestamp,
        )

    def render(self) -> str:
        """Render as a display string.

        ``Row 3, email: message`` when a field is known, ``Row 3: message``
        otherwise and ``File "a.csv": message`` for file-level errors.
        """
        if self.is_file_level:
            return f'File "{self.file or "<unknown>"}": {self.message}'
        if self.field:
            return f"Row {self.row_index}, {self.field}: {self.message}"
        return f"Row {self.row_index}: {self.message}"

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry with a fixed key set."""
        return json.dumps(
            {
                "timestamp": self.timestamp,
                "file": self.file,
                "row": self.row_index,
                "field": self.field,
                "error_type": self.category.value,
                "message": self.message,
            },
            ensure_ascii=False,
        )
