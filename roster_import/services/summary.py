from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..models.error_record import ErrorRecord
from ..models.processing_result import BatchResult, ImportReport

"""Report aggregation and SUMMARY line rendering.

build_report() folds the per-file results of one upload into an
ImportReport. The structured errors stay on the per-file results; the
``all_errors`` strings are a rendering of them for display.
"""

__all__ = [
    "build_report",
    "render_errors",
    "render_summary_line",
]


def render_errors(errors: Sequence[ErrorRecord]) -> list[str]:
    """Render errors as ``Row 2, email: ...`` / ``Row 2: ...`` / ``File "x": ...``."""
    return [e.render() for e in errors]


def build_report(
    results: Sequence[BatchResult],
    *,
    start_time: datetime,
    end_time: datetime,
    cancelled: bool = False,
) -> ImportReport:
    all_errors = [e for r in results for e in r.errors]
    return ImportReport(
        total_success=sum(r.created_count for r in results),
        total_failed=sum(r.skipped_count for r in results),
        per_file_results=list(results),
        all_errors=render_errors(all_errors),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        cancelled=cancelled,
    )


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(report: ImportReport) -> str:
    """Render the SUMMARY line for an import.

    Format:
    SUMMARY files={files} created={created} skipped={skipped}
    failed_files={failed_files} errors={errors} elapsed_sec={elapsed}

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> render_summary_line(build_report([], start_time=t, end_time=t))
    'SUMMARY files=0 created=0 skipped=0 failed_files=0 errors=0 elapsed_sec=0'
    """
    line = (
        f"SUMMARY files={len(report.per_file_results)} "
        f"created={report.total_success} "
        f"skipped={report.total_failed} "
        f"failed_files={report.failed_files} "
        f"errors={len(report.all_errors)} "
        f"elapsed_sec={_format_seconds(report.elapsed_seconds)}"
    )
    if report.cancelled:
        line += " cancelled=1"
    return line
