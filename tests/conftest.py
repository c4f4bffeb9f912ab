# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import pytest

from roster_import.logging.init import reset_logging
from roster_import.services.suffix import SequenceSuffixSource


@pytest.fixture(autouse=True)
def _fresh_logging():
    # The CLI binds its handler to sys.stdout at setup; capsys swaps stdout per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _no_school_env(monkeypatch):
    monkeypatch.delenv("ROSTER_SCHOOL_ID", raising=False)
    monkeypatch.delenv("ROSTER_ERROR_LOG_DIR", raising=False)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """entity_type: parents
school_id: 7
default_password: Welcome2024
email_domain: school.com
error_log_dir: logs
aliases:
  parents:
    phone_number: [Simu]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fixed_source() -> SequenceSuffixSource:
    """Frozen clock at 1700000123456 ms, random draws 0, 1, 2, ..."""
    return SequenceSuffixSource([1700000123456], range(1000))


@pytest.fixture()
def parent_rows() -> list[dict[str, Any]]:
    return [
        {"Name": "Mary Wanjiku", "Phone Number": "0722858508", "Email": "mary@example.com"},
        {"Name": "", "Phone Number": "", "Email": ""},
        {"Name": "John Kamau", "Phone Number": "722111222", "Email": "not-an-email"},
    ]


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
