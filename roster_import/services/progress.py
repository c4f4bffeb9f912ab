from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

One bar per file, counting rows, with the running created/skipped totals of
the whole upload as postfix. Bars are only drawn when the caller asks for
them and stdout is a TTY, so CI logs and library callers never receive
control sequences.
"""

__all__ = [
    "ImportProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ImportProgress:
    """Per-file row bars plus upload-wide counters."""

    def __init__(self, total_files: int, *, label: str = "import", enabled: bool = True) -> None:
        self.total_files = total_files
        self.label = label
        self.enabled = enabled and is_tty_enabled()
        self.current_file = 0
        self.created = 0
        self.skipped = 0
        self._bar: TqdmType[Any] | None = None

    def start_file(self, file_index: int, file_name: str, total_rows: int) -> None:
        """Open the bar for the file at 0-based ``file_index`` of the upload."""
        self.current_file = file_index + 1
        self._close_bar()
        if self.enabled:
            self._bar = tqdm(
                total=total_rows,
                desc=f"{self.label} [{self.current_file}/{self.total_files}] {file_name}",
                unit="row",
                leave=False,
                ncols=80,
                ascii=True,
            )

    def row_done(self, created: bool) -> None:
        if created:
            self.created += 1
        else:
            self.skipped += 1
        if self._bar is not None:
            self._bar.update(1)
            self._bar.set_postfix(created=self.created, skipped=self.skipped)

    def finish_file(self) -> None:
        self._close_bar()

    def _close_bar(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> ImportProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._close_bar()
