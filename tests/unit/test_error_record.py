from __future__ import annotations

import json

from roster_import.models.error_record import FILE_LEVEL_ROW, ErrorCategory, ErrorRecord


def test_create_stamps_utc_timestamp() -> None:
    rec = ErrorRecord.create(3, "Name is required", field="name", category=ErrorCategory.MISSING_FIELD)
    assert rec.timestamp.endswith("Z")
    assert rec.row_index == 3
    assert rec.file is None


def test_render_variants() -> None:
    assert ErrorRecord.create(3, "Email address is not valid", field="email").render() == (
        "Row 3, email: Email address is not valid"
    )
    assert ErrorRecord.create(3, "conflict").render() == "Row 3: conflict"
    file_error = ErrorRecord.create(FILE_LEVEL_ROW, "could not read file", file="a.csv")
    assert file_error.is_file_level
    assert file_error.render() == 'File "a.csv": could not read file'


def test_with_file_keeps_everything_else() -> None:
    rec = ErrorRecord.create(2, "boom", field="phone_number", category=ErrorCategory.REMOTE_REJECTION)
    attributed = rec.with_file("parents.xlsx")
    assert attributed.file == "parents.xlsx"
    assert attributed.timestamp == rec.timestamp
    assert attributed.category is ErrorCategory.REMOTE_REJECTION
    assert rec.file is None


def test_equality_ignores_timestamp() -> None:
    a = ErrorRecord(row_index=1, message="m", timestamp="2024-01-01T00:00:00Z")
    b = ErrorRecord(row_index=1, message="m", timestamp="2025-01-01T00:00:00Z")
    assert a == b


def test_to_json_line() -> None:
    rec = ErrorRecord.create(5, "Fuel type must be one of ...", field="fuel_type", file="fleet.csv")
    data = json.loads(rec.to_json_line())
    assert data == {
        "timestamp": rec.timestamp,
        "file": "fleet.csv",
        "row": 5,
        "field": "fuel_type",
        "error_type": "VALIDATION",
        "message": "Fuel type must be one of ...",
    }


def test_package_exports_error_record() -> None:
    import roster_import.models as models

    rec = models.ErrorRecord(4, "License number is required", field="license_number")
    assert rec.field == "license_number"
    assert rec.timestamp == ""
    # timestamps do not take part in equality
    assert rec == models.ErrorRecord(4, "License number is required", field="license_number", timestamp="x")
