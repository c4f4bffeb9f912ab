from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData
from ..models.uploaded_file import UploadedFile

"""CSV / Excel row source used by the command line.

The first line of a CSV file (or of the first sheet of a workbook) is the
header; every following line is a data row numbered from 1. Rows that are
entirely blank are skipped without renumbering the rest, so row numbers in
error messages still match what the user sees in a spreadsheet (data row n
is spreadsheet line n + 1).

All cells are read as text; the pipeline decides what a value means.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "UnsupportedFileError",
    "frame_to_rows",
    "read_frame",
    "read_rows",
    "uploaded_file",
    "uploaded_files",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


class UnsupportedFileError(Exception):
    """Raised for files the reader cannot decode."""


def read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        # Blank lines stay in the frame so later rows keep their file position
        return pd.read_csv(path, dtype=str, skipinitialspace=True, skip_blank_lines=False, encoding="utf-8-sig")
    if suffix == ".xlsx":
        return pd.read_excel(path, sheet_name=0, dtype=str)
    raise UnsupportedFileError(f"unsupported file type {path.suffix!r} (expected one of {', '.join(SUPPORTED_SUFFIXES)})")


def frame_to_rows(df: pd.DataFrame) -> list[RowData]:
    columns = [str(c).strip() for c in df.columns]
    rows: list[RowData] = []
    for position, (_, raw) in enumerate(df.iterrows(), start=1):
        if raw.isna().all():
            continue
        values: dict[str, Any] = {}
        for col, val in zip(columns, raw.tolist(), strict=False):
            values[col] = None if pd.isna(val) else val
        rows.append(RowData(row_number=position, values=values))
    return rows


def read_rows(path: Path) -> list[RowData]:
    """Read ``path`` into numbered rows.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        UnsupportedFileError: For unknown suffixes
        Any pandas/openpyxl parsing error for corrupt files
    """
    if not path.exists():
        raise FileNotFoundError(f"file not found: {path}")
    return frame_to_rows(read_frame(path))


def uploaded_file(path: Path) -> UploadedFile:
    """Wrap ``path`` as an UploadedFile read lazily by the batch processor."""
    return UploadedFile(name=path.name, read_rows=lambda: read_rows(path))


def uploaded_files(paths: Iterable[Path]) -> list[UploadedFile]:
    return [uploaded_file(p) for p in paths]
