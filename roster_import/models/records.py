from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_record import ErrorRecord

"""Record models produced by the row normalizer.

PartialRecord holds what was resolved from the row (cleaned text per
canonical field) next to the assembled payload, so the validator can tell
"absent in the source" apart from "synthesized". NormalizedRecord is the
payload handed to the create capability. RowOutcome is the result of
normalizing one row: either a record or a list of errors.
"""

__all__ = [
    "NormalizedRecord",
    "PartialRecord",
    "RowOutcome",
]


@dataclass(frozen=True)
class PartialRecord:
    entity_type: str
    row_number: int
    resolved: dict[str, str | None]  # canonical field -> cleaned source text
    values: dict[str, Any]  # assembled payload (synthesized/defaulted)


@dataclass(frozen=True)
class NormalizedRecord:
    """Entity payload ready for submission."""
    entity_type: str
    row_number: int
    values: dict[str, Any]

    def __getitem__(self, key: str) -> Any:
        return self.values[key]


@dataclass(frozen=True)
class RowOutcome:
    """Ok(record) or Err(errors) for one row, tagged with its row number."""
    row_number: int
    record: NormalizedRecord | None = None
    errors: tuple[ErrorRecord, ...] = ()

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors

    @staticmethod
    def success(record: NormalizedRecord) -> RowOutcome:
        return RowOutcome(row_number=record.row_number, record=record)

    @staticmethod
    def failure(row_number: int, errors: list[ErrorRecord]) -> RowOutcome:
        return RowOutcome(row_number=row_number, errors=tuple(errors))
