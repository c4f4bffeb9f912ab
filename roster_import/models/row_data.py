from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""RowData model for the bulk import pipeline.

RowData represents one parsed row as handed over by the file-parsing
collaborator: an ordered bag of header -> scalar pairs plus the row's
position in its original file.
"""

__all__ = [
    "RawRow",
    "RowData",
]

RawRow = Mapping[str, Any]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single parsed source row.

    The row_number is the 1-based data-row position in the original file.
    It is preserved even when a reader skips blank rows so that errors can
    point the user back at the exact offending line.
    """
    row_number: int  # 1-based position in the source file
    values: RawRow  # header -> raw value (str, number or None), headers untrusted

    @staticmethod
    def number(rows: list[Mapping[str, Any]]) -> list[RowData]:
        """Wrap plain dict rows, numbering them from 1 in list order."""
        return [RowData(row_number=i, values=dict(r)) for i, r in enumerate(rows, start=1)]
