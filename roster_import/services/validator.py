from __future__ import annotations

from ..mappings.entities import EntityImportSpec
from ..models.error_record import ErrorCategory, ErrorRecord
from ..models.records import PartialRecord
from .emails import is_valid_email
from .phone import is_canonical_phone

"""Record validation.

Rules, each producing its own ErrorRecord:

- a mandatory field with no value under any alias      -> MISSING_FIELD
- a typed field (integer/date/boolean) that was supplied
  but could not be parsed                              -> VALIDATION
- an enumerated field outside its allowed values       -> VALIDATION
- an email or phone in the payload that breaks its
  canonical form (synthesis bug, not user error)       -> VALIDATION
"""

__all__ = ["validate"]

_TYPE_NAMES = {
    "integer": "a whole number",
    "date": "a valid date",
    "boolean": "yes/no",
}


def _label(field: str) -> str:
    return field.replace("_", " ").capitalize()


def validate(record: PartialRecord, spec: EntityImportSpec) -> list[ErrorRecord]:
    """Return one ErrorRecord per violated rule; an empty list means valid."""
    row = record.row_number
    errors: list[ErrorRecord] = []

    # All missing mandatory fields of a row are reported as one error
    missing = [f for f in spec.mandatory_fields if not record.resolved.get(f)]
    if len(missing) == 1:
        errors.append(
            ErrorRecord.create(
                row,
                f"{_label(missing[0])} is required",
                field=missing[0],
                category=ErrorCategory.MISSING_FIELD,
            )
        )
    elif missing:
        errors.append(
            ErrorRecord.create(
                row,
                f"Missing required fields: {', '.join(missing)}",
                category=ErrorCategory.MISSING_FIELD,
            )
        )

    for field, kind in spec.typed_fields.items():
        if record.resolved.get(field) and record.values.get(field) is None:
            errors.append(
                ErrorRecord.create(
                    row,
                    f"{_label(field)} must be {_TYPE_NAMES[kind]}, got {record.resolved[field]!r}",
                    field=field,
                )
            )

    for field, allowed in spec.enum_fields.items():
        value = record.values.get(field)
        if value not in allowed:
            errors.append(
                ErrorRecord.create(
                    row,
                    f"{_label(field)} must be one of {', '.join(sorted(allowed))}, got {value!r}",
                    field=field,
                )
            )

    # Payload invariants; only reachable when synthesis misbehaves
    for field in spec.email_fields:
        if field in record.values and not is_valid_email(record.values[field]):
            errors.append(ErrorRecord.create(row, "Email address is not valid", field=field))
    for field in spec.phone_fields:
        value = record.values.get(field)
        if value is not None and not is_canonical_phone(value):
            errors.append(
                ErrorRecord.create(row, "Phone number must be in the format +254XXXXXXXXX", field=field)
            )

    return errors
