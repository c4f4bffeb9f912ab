from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

"""Dry-run create capability.

Stands in for the remote API when the importer runs from the command line:
created entities get sequential ids, optionally appended to a JSON Lines
file. Like the real backend it rejects a second record with the same
unique key (phone number, email, registration number) within the run.
"""

__all__ = [
    "DryRunCreator",
    "DuplicateRecordError",
]

logger = logging.getLogger(__name__)

UNIQUE_KEYS: dict[str, tuple[str, ...]] = {
    "parents": ("email", "phone_number"),
    "drivers": ("email", "phone_number", "license_number"),
    "vehicles": ("registration_number",),
    "staff": ("email", "phone_number"),
}


class DuplicateRecordError(Exception):
    pass


class DryRunCreator:
    def __init__(self, output: Path | None = None) -> None:
        self.output = output
        self._next_id = 1
        self._seen: dict[tuple[str, str], set[Any]] = {}

    def __call__(self, entity_type: str, payload: dict[str, Any]) -> dict[str, Any]:
        for key in UNIQUE_KEYS.get(entity_type, ()):
            value = payload.get(key)
            if value is None:
                continue
            seen = self._seen.setdefault((entity_type, key), set())
            if value in seen:
                raise DuplicateRecordError(f"{key} {value!r} already exists")
        for key in UNIQUE_KEYS.get(entity_type, ()):
            if payload.get(key) is not None:
                self._seen[(entity_type, key)].add(payload[key])

        entity = {"id": self._next_id, **payload}
        self._next_id += 1
        if self.output is not None:
            self.output.parent.mkdir(parents=True, exist_ok=True)
            with self.output.open("a", encoding="utf-8") as f:
                f.write(json.dumps({"entity_type": entity_type, **entity}, ensure_ascii=False) + "\n")
        logger.debug("dry-run created %s id=%d", entity_type, entity["id"])
        return entity
