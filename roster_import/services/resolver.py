from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

"""Field resolution against header alias tables.

Headers in uploaded files are untrusted: the same logical field shows up as
``phone_number``, ``Phone Number``, ``mobile`` or ``Contact``. The alias
table lists every accepted spelling per canonical field, most specific
first; resolve() probes them in that order. There is no fuzzy matching:
an alias matches a header exactly, or ignoring case and surrounding spaces.
"""

__all__ = [
    "AliasTable",
    "cell_text",
    "resolve",
]

AliasTable = Mapping[str, Sequence[str]]


def cell_text(value: Any) -> str | None:
    """Stringify a raw cell value; None/NaN become None.

    Integral floats (``722858508.0`` as read from a spreadsheet) lose the
    trailing ``.0`` so that numbers stored as floats resolve like text.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        f = float(value)
        if math.isnan(f):
            return None
        if f.is_integer():
            return str(int(f))
        return repr(f)
    return str(value)


def _folded_headers(row: Mapping[str, Any]) -> dict[str, Any]:
    folded: dict[str, Any] = {}
    for key, value in row.items():
        # First header wins when two fold to the same spelling
        folded.setdefault(str(key).strip().lower(), value)
    return folded


def resolve(row: Mapping[str, Any], canonical_field: str, alias_table: AliasTable) -> str | None:
    """Return the first non-empty value found under ``canonical_field``'s aliases.

    Args:
        row: Parsed row (header -> raw value)
        canonical_field: Canonical field name, a key of ``alias_table``
        alias_table: Canonical field -> ordered header aliases

    Returns:
        The value as text (not yet cleaned), or None when no alias holds a
        non-blank value.
    """
    aliases = alias_table.get(canonical_field, ())
    folded: dict[str, Any] | None = None
    for alias in aliases:
        if alias in row:
            value = row[alias]
        else:
            if folded is None:
                folded = _folded_headers(row)
            value = folded.get(alias.strip().lower())
        text = cell_text(value)
        if text is not None and text.strip():
            return text
    return None
