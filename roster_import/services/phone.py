from __future__ import annotations

import logging
import re

from ..models.config_models import COUNTRY_CODE
from .suffix import SystemSuffixSource, UniqueSuffixSource

"""Phone number normalization to the canonical +254XXXXXXXXX form.

Upstream data entry is uncontrolled, so normalization never fails: numbers
that can be read are canonicalized, numbers that cannot be read are
replaced by a synthesized placeholder that is structurally valid and unique
within the batch.

Rules, applied to the digits of the input (everything else stripped):

1. no digits                          -> synthesize
2. 12 digits starting with 254        -> "+" + digits
3. 10 digits starting with 0          -> "+254" + digits[1:]
4. 9 digits                           -> "+254" + digits
5. 11 digits starting with 7          -> "+254" + last 9 digits
6. any other length >= 9              -> "+254" + last 9 digits
7. fewer than 9 digits                -> synthesize
"""

__all__ = [
    "COUNTRY_CODE",
    "CANONICAL_PHONE_RE",
    "PhoneNormalizer",
    "is_canonical_phone",
    "normalize_phone",
]

logger = logging.getLogger(__name__)

LOCAL_LENGTH = 9
CANONICAL_PHONE_RE = re.compile(r"^\+254\d{9}$")

_NON_DIGITS = re.compile(r"\D")


def is_canonical_phone(value: str | None) -> bool:
    return bool(value) and CANONICAL_PHONE_RE.match(value) is not None  # type: ignore[arg-type]


def _canonicalize(digits: str) -> str | None:
    """Apply rules 2-6; None when the digits cannot be salvaged."""
    n = len(digits)
    if n == 12 and digits.startswith(COUNTRY_CODE):
        return f"+{digits}"
    if n == 10 and digits.startswith("0"):
        return f"+{COUNTRY_CODE}{digits[1:]}"
    if n == LOCAL_LENGTH:
        return f"+{COUNTRY_CODE}{digits}"
    if n >= LOCAL_LENGTH:
        # 11 digits starting with 7 and every other long form keep the last 9
        return f"+{COUNTRY_CODE}{digits[-LOCAL_LENGTH:]}"
    return None


def synthesize_phone(source: UniqueSuffixSource) -> str:
    """Build +2547XXXXXXXX from the timestamp's last 6 digits and 3 random digits."""
    stamp = str(source.timestamp_ms())[-6:].zfill(6)
    local = f"7{(stamp + source.random_digits(3))[:8]}"
    return f"+{COUNTRY_CODE}{local}"


class PhoneNormalizer:
    """Phone normalizer bound to one batch.

    Tracks the numbers it has produced so synthesized placeholders never
    repeat within the batch. A salvaged number that repeats an earlier one
    is kept but logged, since it may be a real shared family number.
    """

    def __init__(self, source: UniqueSuffixSource | None = None) -> None:
        self._source = source or SystemSuffixSource()
        self._issued: set[str] = set()

    def normalize(self, raw_phone: str | None, *, check_duplicate: bool = True) -> str:
        """Return the canonical form of ``raw_phone``, synthesizing when unusable.

        ``check_duplicate=False`` is for secondary numbers (emergency
        contacts) that are expected to repeat across records.
        """
        digits = _NON_DIGITS.sub("", raw_phone or "")
        phone = _canonicalize(digits) if digits else None
        if phone is None:
            phone = self._synthesize()
            logger.debug("phone %r unusable, synthesized %s", raw_phone, phone)
        elif check_duplicate and phone in self._issued:
            logger.warning("phone %s appears more than once in this batch", phone)
        self._issued.add(phone)
        return phone

    def _synthesize(self) -> str:
        phone = synthesize_phone(self._source)
        while phone in self._issued:
            local = int(phone[-8:]) + 1
            phone = f"+{COUNTRY_CODE}7{local % 10**8:08d}"
        return phone

    def reset(self) -> None:
        self._issued.clear()


def normalize_phone(raw_phone: str | None, source: UniqueSuffixSource | None = None) -> str:
    """Normalize one phone number outside of a batch.

    >>> normalize_phone("0722858508")
    '+254722858508'
    >>> normalize_phone("+254 722 858 508")
    '+254722858508'
    """
    return PhoneNormalizer(source).normalize(raw_phone)
