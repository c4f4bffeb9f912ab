from __future__ import annotations

import json
from pathlib import Path

from roster_import.cli.__main__ import main

"""Error log contract: one JSON object per line with a fixed key set."""

EXPECTED_KEYS = {"timestamp", "file", "row", "field", "error_type", "message"}


def _read_log(workdir: Path) -> list[dict]:
    (log,) = list((workdir / "logs").glob("errors-*.log"))
    return [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]


def test_error_log_entries(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv(
        "drivers.csv",
        "Name,Phone,License Number,License Expiry\n"
        "Peter Gachau,0712345678,,2025-12-31\n"
        "Jane Mwangi,0723456789,DL2,someday\n",
    )
    main(["drivers", str(path), str(temp_workdir / "data" / "absent.csv")])
    capsys.readouterr()

    entries = _read_log(temp_workdir)
    assert len(entries) == 3
    for entry in entries:
        assert set(entry) == EXPECTED_KEYS
        assert entry["timestamp"].endswith("Z")

    missing, bad_date, unreadable = entries
    assert (missing["file"], missing["row"], missing["field"], missing["error_type"]) == (
        "drivers.csv",
        1,
        "license_number",
        "MISSING_FIELD",
    )
    assert (bad_date["row"], bad_date["field"], bad_date["error_type"]) == (2, "license_expiry", "VALIDATION")
    # file-level errors use row -1 and no field
    assert (unreadable["file"], unreadable["row"], unreadable["field"], unreadable["error_type"]) == (
        "absent.csv",
        -1,
        None,
        "FILE_UNREADABLE",
    )


def test_no_error_log_when_everything_imports(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Name,Phone\nJane Doe,0722858508\n")
    assert main(["parents", str(path)]) == 0
    assert list((temp_workdir / "logs").glob("errors-*.log")) == []


def test_error_log_dir_from_config(temp_workdir: Path, write_csv, capsys) -> None:
    (temp_workdir / "config" / "import.yml").write_text("error_log_dir: out/errors\n", encoding="utf-8")
    path = write_csv("p.csv", "Name,Phone\n,\nJohn,\n")
    main(["parents", str(path)])
    assert len(list((temp_workdir / "out" / "errors").glob("errors-*.log"))) == 1
