from __future__ import annotations

import re
from pathlib import Path

from roster_import.cli.__main__ import main

"""SUMMARY line format contract.

SUMMARY files=<n> created=<n> skipped=<n> failed_files=<n> errors=<n> elapsed_sec=<float>[ cancelled=1]
"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=([0-9]+) created=([0-9]+) skipped=([0-9]+) failed_files=([0-9]+) "
    r"errors=([0-9]+) elapsed_sec=([0-9]+\.?[0-9]*)( cancelled=1)?$"
)


def test_summary_pattern_example_line() -> None:
    line = "SUMMARY files=2 created=14 skipped=3 failed_files=1 errors=4 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


def test_cli_prints_exactly_one_matching_summary_line(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Name,Phone\nJane Doe,0722858508\nJohn Doe,\n")
    main(["parents", str(path)])
    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m, lines[0]
    files, created, skipped, failed_files, errors = (int(m.group(i)) for i in range(1, 6))
    assert (files, created, skipped, failed_files, errors) == (1, 1, 1, 0, 1)
