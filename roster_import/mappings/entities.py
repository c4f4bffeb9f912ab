"""
Entity import specs: one generic pipeline, four entity types.

An EntityImportSpec bundles what differs between parents, drivers, vehicles
and staff: the alias table, the mandatory (never synthesized) fields, the
typed/enumerated fields the validator checks and the function assembling
the create payload from resolved text.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import pandas as pd

from .aliases import ALIAS_TABLES, extend_aliases

if TYPE_CHECKING:
    from ..services.normalizer import NormalizationContext

Resolved = Mapping[str, "str | None"]

CONTACT_METHODS = frozenset({"email", "phone", "sms"})
FUEL_TYPES = frozenset({"diesel", "petrol", "electric", "hybrid"})
STAFF_STATUSES = frozenset({"active", "inactive", "on_leave"})

_CONTACT_SYNONYMS = {
    "email": "email",
    "e-mail": "email",
    "mail": "email",
    "phone": "phone",
    "mobile": "phone",
    "call": "phone",
    "telephone": "phone",
    "sms": "sms",
    "text": "sms",
    "message": "sms",
}
_FUEL_SYNONYMS = {"gasoline": "petrol", "gas": "petrol", "ev": "electric"}
_TRUE = frozenset({"true", "yes", "y", "1", "t"})
_FALSE = frozenset({"false", "no", "n", "0", "f"})
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


class UnknownEntityTypeError(ValueError):
    pass


@dataclass(frozen=True)
class EntityImportSpec:
    entity_type: str
    aliases: Mapping[str, Sequence[str]]
    mandatory_fields: tuple[str, ...]
    build: Callable[[Resolved, NormalizationContext], dict[str, Any]]
    # Checks run by the validator on the assembled payload
    email_fields: tuple[str, ...] = ()
    phone_fields: tuple[str, ...] = ()
    typed_fields: Mapping[str, str] = field(default_factory=dict)  # field -> "integer" | "date" | "boolean"
    enum_fields: Mapping[str, frozenset[str]] = field(default_factory=dict)
    derive: Callable[[dict[str, str | None]], dict[str, str | None]] | None = None

    @property
    def canonical_fields(self) -> tuple[str, ...]:
        return tuple(self.aliases)


# --- value helpers -----------------------------------------------------------

def split_name(full_name: str) -> tuple[str, str]:
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def derive_person_name(resolved: dict[str, str | None]) -> dict[str, str | None]:
    """Fill ``name`` from first/last name columns when no full-name column exists."""
    if resolved.get("name"):
        return resolved
    joined = " ".join(p for p in (resolved.get("first_name"), resolved.get("last_name")) if p)
    return {**resolved, "name": joined or None}


def contact_method(text: str | None) -> str:
    """Fold free text into email|phone|sms; anything unrecognized is phone."""
    if not text:
        return "phone"
    return _CONTACT_SYNONYMS.get(text.strip().lower(), "phone")


def to_int(text: str | None) -> int | None:
    if not text:
        return None
    value = pd.to_numeric(text.replace(",", ""), errors="coerce")
    if pd.isna(value) or not math.isfinite(float(value)) or float(value) != int(value):
        return None
    return int(value)


def to_date(text: str | None) -> str | None:
    """Parse a date (ISO first, otherwise day-first) into YYYY-MM-DD."""
    if not text:
        return None
    ts = pd.to_datetime(text, errors="coerce", dayfirst=not _ISO_DATE.match(text))
    if pd.isna(ts):
        return None
    return ts.date().isoformat()


def to_bool(text: str | None, default: bool) -> bool | None:
    if not text:
        return default
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def pickup_persons(text: str | None) -> list[str]:
    if not text:
        return []
    return [p.strip() for p in text.split(";") if p.strip()]


def _person_payload(resolved: Resolved, ctx: NormalizationContext, user_type: str) -> dict[str, Any]:
    first_name, last_name = split_name(resolved.get("name") or "")
    email = ctx.emails.resolve(resolved.get("email"), first_name, last_name)
    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone_number": ctx.phones.normalize(resolved.get("phone_number")),
        "password": ctx.default_password,
        "confirm_password": ctx.default_password,
        "user_type": user_type,
        "profile_image": None,
    }


# --- builders ----------------------------------------------------------------

def build_parent(resolved: Resolved, ctx: NormalizationContext) -> dict[str, Any]:
    payload = _person_payload(resolved, ctx, "parent")
    emergency = resolved.get("emergency_contact")
    secondary = resolved.get("secondary_phone")
    payload.update(
        address=resolved.get("address") or "",
        # Falls back to the primary phone
        emergency_contact=(
            ctx.phones.normalize(emergency, check_duplicate=False) if emergency else payload["phone_number"]
        ),
        secondary_phone=ctx.phones.normalize(secondary, check_duplicate=False) if secondary else None,
        preferred_contact_method=contact_method(resolved.get("preferred_contact_method")),
        authorized_pickup_persons={"persons": pickup_persons(resolved.get("authorized_pickup_persons"))},
        school=ctx.school_id,
    )
    return payload


def build_driver(resolved: Resolved, ctx: NormalizationContext) -> dict[str, Any]:
    payload = _person_payload(resolved, ctx, "driver")
    license_class = resolved.get("license_class")
    payload.update(
        license_number=(resolved.get("license_number") or "").upper(),
        license_expiry=to_date(resolved.get("license_expiry")),
        license_class=license_class.upper() if license_class else None,
        is_assistant_driver=to_bool(resolved.get("is_assistant_driver"), False),
        is_available=True,
        safety_rating=4.8,
        on_time_rating=4.9,
        last_health_check=to_date(resolved.get("last_health_check")),
        last_background_check=to_date(resolved.get("last_background_check")),
        school=ctx.school_id,
    )
    return payload


def build_vehicle(resolved: Resolved, ctx: NormalizationContext) -> dict[str, Any]:
    registration = " ".join((resolved.get("registration_number") or "").upper().split())
    fuel = (resolved.get("fuel_type") or "diesel").strip().lower()
    return {
        "registration_number": registration,
        "vehicle_type": (resolved.get("vehicle_type") or "bus").lower(),
        "capacity": to_int(resolved.get("capacity")),
        "manufacturer": resolved.get("manufacturer") or "",
        "model": resolved.get("model") or "",
        "year": to_int(resolved.get("year")),
        "fuel_type": _FUEL_SYNONYMS.get(fuel, fuel),
        "mileage": to_int(resolved.get("mileage")) if resolved.get("mileage") else 0,
        "is_active": to_bool(resolved.get("is_active"), True),
        "has_gps": to_bool(resolved.get("has_gps"), False),
        "has_camera": to_bool(resolved.get("has_camera"), False),
        "has_emergency_button": to_bool(resolved.get("has_emergency_button"), False),
        "driver": to_int(resolved.get("driver")),
        "school": ctx.school_id,
    }


def build_staff(resolved: Resolved, ctx: NormalizationContext) -> dict[str, Any]:
    payload = _person_payload(resolved, ctx, "staff")
    status = (resolved.get("status") or "active").strip().lower().replace(" ", "_")
    payload.update(
        employee_id=resolved.get("employee_id"),
        role=to_int(resolved.get("role")),
        status=status,
        school=ctx.school_id,
    )
    return payload


# --- registry ----------------------------------------------------------------

ENTITY_SPECS: dict[str, EntityImportSpec] = {
    "parents": EntityImportSpec(
        entity_type="parents",
        aliases=ALIAS_TABLES["parents"],
        mandatory_fields=("name", "phone_number"),
        build=build_parent,
        email_fields=("email",),
        phone_fields=("phone_number", "emergency_contact", "secondary_phone"),
        enum_fields={"preferred_contact_method": CONTACT_METHODS},
        derive=derive_person_name,
    ),
    "drivers": EntityImportSpec(
        entity_type="drivers",
        aliases=ALIAS_TABLES["drivers"],
        mandatory_fields=("name", "phone_number", "license_number"),
        build=build_driver,
        email_fields=("email",),
        phone_fields=("phone_number",),
        typed_fields={
            "license_expiry": "date",
            "last_health_check": "date",
            "last_background_check": "date",
            "is_assistant_driver": "boolean",
        },
        derive=derive_person_name,
    ),
    "vehicles": EntityImportSpec(
        entity_type="vehicles",
        aliases=ALIAS_TABLES["vehicles"],
        mandatory_fields=("registration_number",),
        build=build_vehicle,
        typed_fields={
            "capacity": "integer",
            "year": "integer",
            "mileage": "integer",
            "driver": "integer",
            "is_active": "boolean",
            "has_gps": "boolean",
            "has_camera": "boolean",
            "has_emergency_button": "boolean",
        },
        enum_fields={"fuel_type": FUEL_TYPES},
    ),
    "staff": EntityImportSpec(
        entity_type="staff",
        aliases=ALIAS_TABLES["staff"],
        mandatory_fields=("name", "phone_number"),
        build=build_staff,
        email_fields=("email",),
        phone_fields=("phone_number",),
        typed_fields={"role": "integer"},
        enum_fields={"status": STAFF_STATUSES},
        derive=derive_person_name,
    ),
}


def get_entity_spec(
    entity_type: str,
    extra_aliases: Mapping[str, Mapping[str, Sequence[str]]] | None = None,
) -> EntityImportSpec:
    """Look up the spec for ``entity_type``, with config aliases appended."""
    try:
        spec = ENTITY_SPECS[entity_type]
    except KeyError:
        known = ", ".join(sorted(ENTITY_SPECS))
        raise UnknownEntityTypeError(f"unknown entity type {entity_type!r} (expected one of: {known})") from None
    extra = (extra_aliases or {}).get(entity_type)
    if not extra:
        return spec
    return replace(spec, aliases=extend_aliases(spec.aliases, extra))
