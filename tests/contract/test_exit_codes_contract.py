from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from roster_import.cli.__main__ import main

"""Exit code contract: 0 all created, 2 partial failure, 1 fatal."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys) -> None:
    (temp_workdir / "config" / "import.yml").write_text("school_id: zero\n", encoding="utf-8")
    code = main(["parents", "p.csv"])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, write_csv, capsys) -> None:
    a = write_csv("a.csv", "Name,Phone\nJane Doe,0722858508\n")
    b = write_csv("b.csv", "Name,Phone\nJohn Doe,0733000000\n")
    code = main(["parents", str(a), str(b)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2 created=2 skipped=0 failed_files=0 errors=0" in out


def test_exit_code_partial_failure_on_skipped_row(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("v.csv", "Registration,Capacity\nKBA 123A,33\nKCD 456B,many\n")
    code = main(["vehicles", str(path)])
    assert code == 2
    assert "skipped=1" in capsys.readouterr().out


def test_exit_code_partial_failure_on_unreadable_file(temp_workdir: Path, write_csv, capsys) -> None:
    good = write_csv("good.csv", "Name,Phone\nJane Doe,0722858508\n")
    code = main(["parents", str(good), str(temp_workdir / "data" / "gone.xlsx")])
    out = capsys.readouterr().out
    assert code == 2
    assert "failed_files=1" in out
    assert 'WARN File "gone.xlsx": could not read file' in out


def test_exit_code_partial_failure_on_remote_rejection(temp_workdir: Path, write_csv, capsys) -> None:
    path = write_csv("p.csv", "Name,Phone\nJane Doe,0722858508\n")
    with patch("roster_import.cli.__main__.DryRunCreator") as creator_cls:
        creator_cls.return_value.side_effect = ConnectionError("backend unreachable")
        code = main(["parents", str(path)])
    out = capsys.readouterr().out
    assert code == 2
    assert "WARN Row 1: backend unreachable" in out
