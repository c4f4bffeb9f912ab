from __future__ import annotations

import logging
import re

from ..models.config_models import DEFAULT_EMAIL_DOMAIN
from .cleaning import clean
from .suffix import SystemSuffixSource, UniqueSuffixSource

"""Email validation and synthesis.

A supplied address is kept verbatim when it passes the validator. Missing
or malformed addresses are replaced by ``first.last<timestamp>@school.com``
built from the record's name. A synthesized address must pass the same
validator; if it does not, EmailSynthesisError is raised because the
synthesis itself is broken, not the user's data.
"""

__all__ = [
    "EMAIL_RE",
    "MAX_EMAIL_LENGTH",
    "EmailSynthesisError",
    "EmailSynthesizer",
    "is_valid_email",
    "resolve_email",
]

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
MAX_EMAIL_LENGTH = 254

_NON_ALPHA = re.compile(r"[^a-z]")


class EmailSynthesisError(Exception):
    """Raised when a synthesized address fails validation."""


def is_valid_email(email: str | None) -> bool:
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    if email != email.strip():
        return False
    return EMAIL_RE.match(email) is not None


def _name_part(name: str | None, fallback: str) -> str:
    return _NON_ALPHA.sub("", (name or "").lower()) or fallback


class EmailSynthesizer:
    """Email resolver bound to one batch.

    Synthesized addresses that collide with one already issued in the batch
    (same name within the same millisecond) get the timestamp bumped until
    unique.
    """

    def __init__(
        self,
        source: UniqueSuffixSource | None = None,
        domain: str = DEFAULT_EMAIL_DOMAIN,
    ) -> None:
        self._source = source or SystemSuffixSource()
        self._domain = domain
        self._issued: set[str] = set()

    def resolve(self, raw_email: str | None, first_name: str | None, last_name: str | None) -> str:
        if raw_email is not None:
            candidate = clean(raw_email)
            if is_valid_email(candidate):
                return candidate
            if candidate:
                logger.debug("email %r is not valid, synthesizing", candidate)
        email = self.synthesize(first_name, last_name)
        if not is_valid_email(email):
            raise EmailSynthesisError(f"synthesized email {email!r} is not a valid address")
        return email

    def synthesize(self, first_name: str | None, last_name: str | None) -> str:
        first = _name_part(first_name, "parent")
        last = _name_part(last_name, "user")
        stamp = self._source.timestamp_ms()
        email = f"{first}.{last}{stamp}@{self._domain}"
        while email in self._issued:
            stamp += 1
            email = f"{first}.{last}{stamp}@{self._domain}"
        self._issued.add(email)
        return email

    def reset(self) -> None:
        self._issued.clear()


def resolve_email(
    raw_email: str | None,
    first_name: str | None,
    last_name: str | None,
    source: UniqueSuffixSource | None = None,
    domain: str = DEFAULT_EMAIL_DOMAIN,
) -> str:
    """Return ``raw_email`` when valid, otherwise a synthesized address.

    >>> resolve_email("a@b.com", "Jane", "Doe")
    'a@b.com'
    """
    return EmailSynthesizer(source, domain).resolve(raw_email, first_name, last_name)
