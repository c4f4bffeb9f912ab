from __future__ import annotations

import json
import os
from pathlib import Path

from roster_import.cli.__main__ import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL, main


def test_template_is_printed(temp_workdir: Path, capsys) -> None:
    code = main(["vehicles", "--template"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert out.startswith("registration_number,vehicle_type,capacity")


def test_entity_type_from_config(write_config: Path, capsys) -> None:
    code = main(["--template"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert out.startswith("first_name,last_name,phone_number")
    # school_id from config is appended to the template
    assert out.splitlines()[0].endswith(",school_id")


def test_no_entity_type_is_fatal(temp_workdir: Path, capsys) -> None:
    code = main([])
    assert code == EXIT_FATAL
    assert "ERROR no entity type given" in capsys.readouterr().out


def test_no_files_is_fatal(temp_workdir: Path, capsys) -> None:
    code = main(["parents"])
    assert code == EXIT_FATAL
    assert "ERROR no input files given" in capsys.readouterr().out


def test_unknown_entity_type_is_fatal(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("s.csv", "Name\nJane\n")
    code = main(["students", str(path)])
    assert code == EXIT_FATAL
    assert "unknown entity type 'students'" in capsys.readouterr().out


def test_bad_config_is_fatal(temp_workdir: Path, capsys) -> None:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text("unexpected_key: 1\n", encoding="utf-8")
    code = main(["parents", "x.csv"])
    assert code == EXIT_FATAL
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_inspect_data_prints_resolved_fields(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Full Name,Mobile\n'Mary Wanjiku',0722858508\n")
    code = main(["parents", str(path), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "FILE: p.csv" in out
    assert "headers=['Full Name', 'Mobile']" in out
    assert "row 1: {'name': 'Mary Wanjiku', 'phone_number': '0722858508'}" in out
    # nothing was imported
    assert "SUMMARY" not in out


def test_inspect_data_reports_unreadable_file(temp_workdir: Path, capsys) -> None:
    code = main(["parents", "missing.csv", "--inspect-data"])
    assert code == EXIT_SUCCESS_ALL
    assert "read_error: file not found" in capsys.readouterr().out


def test_debug_flag_enables_debug_lines(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Name,Phone\nJane Doe,unknown\n")
    code = main(["parents", str(path), "--debug"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG phone 'unknown' unusable, synthesized +2547" in out


def test_output_and_error_log(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Name,Phone,Email\nJane Doe,0722858508,\n,,x@example.com\nJohn Doe,0733000000,\n")
    out_file = temp_workdir / "created.jsonl"
    code = main(["parents", str(path), "--output", str(out_file)])
    out = capsys.readouterr().out

    assert code == EXIT_PARTIAL_FAILURE
    created = [json.loads(line) for line in out_file.read_text(encoding="utf-8").splitlines()]
    assert [c["first_name"] for c in created] == ["Jane", "John"]
    assert "WARN Row 2: Missing required fields: name, phone_number" in out
    assert "INFO error log written to logs" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    assert json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])["row"] == 2


def test_env_file_sets_school_id(temp_workdir: Path, write_csv, capsys) -> None:
    (temp_workdir / ".env").write_text("ROSTER_SCHOOL_ID=42\n", encoding="utf-8")
    path = write_csv("p.csv", "Name,Phone\nJane Doe,0722858508\n")
    out_file = temp_workdir / "created.jsonl"
    try:
        code = main(["parents", str(path), "--output", str(out_file)])
    finally:
        os.environ.pop("ROSTER_SCHOOL_ID", None)
    assert code == EXIT_SUCCESS_ALL
    assert json.loads(out_file.read_text(encoding="utf-8"))["school"] == 42
