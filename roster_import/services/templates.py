from __future__ import annotations

import pandas as pd

from ..mappings.entities import get_entity_spec

"""CSV upload templates.

Each template uses canonical snake_case headers (which every alias table
accepts) and two sample rows, so staff can fill in a file the importer is
guaranteed to understand.
"""

__all__ = ["TEMPLATE_COLUMNS", "generate_template"]

TEMPLATE_COLUMNS: dict[str, list[str]] = {
    "parents": [
        "first_name",
        "last_name",
        "phone_number",
        "email",
        "address",
        "emergency_contact",
        "secondary_phone",
        "preferred_contact_method",
        "authorized_pickup_persons",
    ],
    "drivers": [
        "first_name",
        "last_name",
        "phone_number",
        "email",
        "license_number",
        "license_expiry",
        "license_class",
        "is_assistant_driver",
        "last_health_check",
        "last_background_check",
    ],
    "vehicles": [
        "registration_number",
        "vehicle_type",
        "capacity",
        "manufacturer",
        "model",
        "year",
        "fuel_type",
        "mileage",
        "has_gps",
        "has_camera",
        "has_emergency_button",
    ],
    "staff": ["first_name", "last_name", "phone_number", "email", "employee_id", "role", "status"],
}

_SAMPLES: dict[str, list[list[object]]] = {
    "parents": [
        ["John", "Doe", "+254712345678", "john.doe@email.com", "123 Main St, Nairobi",
         "+254723456789", "+254734567890", "phone", "Jane Doe (Spouse); Mike Smith (Friend)"],
        ["Mary", "Smith", "+254723456789", "mary.smith@email.com", "456 Oak Ave",
         "+254734567890", "+254745678901", "email", "Tom Smith (Spouse)"],
    ],
    "drivers": [
        ["Peter", "Gachau", "+254712345678", "peter.gachau@email.com", "DL123456789",
         "2025-12-31", "B", "false", "2024-01-15", "2024-01-10"],
        ["Jane", "Mwangi", "+254723456789", "jane.mwangi@email.com", "DL987654321",
         "2025-06-30", "A", "true", "2024-01-20", "2024-01-15"],
    ],
    "vehicles": [
        ["KBA 123A", "bus", 33, "Isuzu", "NQR", 2019, "diesel", 120000, "yes", "yes", "no"],
        ["KCD 456B", "van", 14, "Toyota", "Hiace", 2021, "petrol", 45000, "yes", "no", "no"],
    ],
    "staff": [
        ["Grace", "Atieno", "+254712345678", "grace.atieno@email.com", "EMP001", 2, "active"],
        ["Paul", "Otieno", "+254723456789", "paul.otieno@email.com", "EMP002", 3, "on_leave"],
    ],
}


def generate_template(entity_type: str, school_id: int | None = None) -> str:
    """Return a CSV template (header + sample rows) for ``entity_type``."""
    spec = get_entity_spec(entity_type)
    columns = list(TEMPLATE_COLUMNS[spec.entity_type])
    rows = [list(r) for r in _SAMPLES[spec.entity_type]]
    if school_id is not None:
        columns.append("school_id")
        for r in rows:
            r.append(school_id)
    return pd.DataFrame(rows, columns=columns).to_csv(index=False, lineterminator="\n")
