"""
Header alias tables per entity type.

Each table maps a canonical field to the header spellings accepted for it,
most specific first. Every natural-language name is expanded to its
snake_case, Title Case, Title_Snake and camelCase spellings, so the table
itself states exactly which headers are accepted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def _variants(*names: str) -> tuple[str, ...]:
    """Expand natural names ("phone number") into the accepted header spellings."""
    out: list[str] = []
    for name in names:
        words = name.split()
        spellings = [
            "_".join(words),
            " ".join(w.capitalize() for w in words),
            "_".join(w.capitalize() for w in words),
            words[0] + "".join(w.capitalize() for w in words[1:]),
        ]
        for s in spellings:
            if s not in out:
                out.append(s)
    return tuple(out)


# Person fields shared by parents, drivers and staff
_PERSON_FIELDS: dict[str, tuple[str, ...]] = {
    "first_name": _variants("first name", "firstname", "given name"),
    "last_name": _variants("last name", "lastname", "surname", "family name", "other names"),
    "email": _variants("email", "email address", "e-mail", "mail"),
    "phone_number": _variants(
        "phone number",
        "phone",
        "mobile",
        "mobile number",
        "phone no",
        "contact",
        "contact number",
        "tel",
        "telephone",
    ),
}

PARENT_ALIASES: dict[str, tuple[str, ...]] = {
    "name": _variants("name", "full name", "parent", "parent name", "guardian", "guardian name"),
    **_PERSON_FIELDS,
    "address": _variants("address", "home address", "residence", "location"),
    "emergency_contact": _variants("emergency contact", "emergency phone", "emergency number"),
    "secondary_phone": _variants("secondary phone", "alternative phone", "alt phone", "other phone"),
    "preferred_contact_method": _variants(
        "preferred contact method", "preferred contact", "contact method"
    ),
    "authorized_pickup_persons": _variants(
        "authorized pickup persons", "authorised pickup persons", "pickup persons", "authorized persons"
    ),
}

DRIVER_ALIASES: dict[str, tuple[str, ...]] = {
    "name": _variants("name", "full name", "driver name", "driver"),
    **_PERSON_FIELDS,
    "license_number": _variants(
        "license number", "licence number", "license no", "licence no", "dl number", "driving license"
    ),
    "license_expiry": _variants(
        "license expiry", "licence expiry", "license expiry date", "licence expiry date", "expiry date"
    ),
    "license_class": _variants("license class", "licence class", "class"),
    "is_assistant_driver": _variants("is assistant driver", "assistant driver", "assistant"),
    "last_health_check": _variants("last health check", "health check"),
    "last_background_check": _variants("last background check", "background check"),
}

VEHICLE_ALIASES: dict[str, tuple[str, ...]] = {
    "registration_number": _variants(
        "registration number",
        "registration",
        "reg number",
        "reg no",
        "plate number",
        "number plate",
        "plate",
    ),
    "vehicle_type": _variants("vehicle type", "type"),
    "capacity": _variants("capacity", "seating capacity", "seats"),
    "manufacturer": _variants("manufacturer", "make"),
    "model": _variants("model"),
    "year": _variants("year", "year of manufacture", "manufacture year"),
    "fuel_type": _variants("fuel type", "fuel"),
    "mileage": _variants("mileage", "odometer"),
    "is_active": _variants("is active", "active"),
    "has_gps": _variants("has gps", "gps"),
    "has_camera": _variants("has camera", "camera"),
    "has_emergency_button": _variants("has emergency button", "emergency button"),
    "driver": _variants("driver id", "driver"),
}

STAFF_ALIASES: dict[str, tuple[str, ...]] = {
    "name": _variants("name", "full name", "staff name", "employee name"),
    **_PERSON_FIELDS,
    "employee_id": _variants("employee id", "staff id", "employee number", "staff number"),
    "role": _variants("role id", "role"),
    "status": _variants("status", "employment status"),
}

ALIAS_TABLES: dict[str, dict[str, tuple[str, ...]]] = {
    "parents": PARENT_ALIASES,
    "drivers": DRIVER_ALIASES,
    "vehicles": VEHICLE_ALIASES,
    "staff": STAFF_ALIASES,
}


def extend_aliases(
    table: Mapping[str, Sequence[str]],
    extra: Mapping[str, Sequence[str]] | None,
) -> dict[str, tuple[str, ...]]:
    """Return a copy of ``table`` with ``extra`` aliases appended per field."""
    merged = {k: tuple(v) for k, v in table.items()}
    for canonical, aliases in (extra or {}).items():
        current = list(merged.get(canonical, ()))
        current.extend(a for a in aliases if a not in current)
        merged[canonical] = tuple(current)
    return merged
