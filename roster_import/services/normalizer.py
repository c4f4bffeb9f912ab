from __future__ import annotations

import logging
from dataclasses import dataclass

from ..mappings.entities import EntityImportSpec
from ..models.config_models import DEFAULT_EMAIL_DOMAIN, DEFAULT_PASSWORD, ImportConfig
from ..models.error_record import ErrorRecord
from ..models.records import NormalizedRecord, PartialRecord, RowOutcome
from ..models.row_data import RowData
from .cleaning import clean
from .emails import EmailSynthesisError, EmailSynthesizer
from .phone import PhoneNormalizer
from .resolver import resolve
from .suffix import SystemSuffixSource, UniqueSuffixSource
from .validator import validate

"""Row normalization: raw row -> normalized record or validation errors.

normalize_row() resolves every canonical field through the alias table,
cleans it, lets the entity spec assemble the payload (phone/email
synthesis, defaults) and runs the validator. It performs no I/O; the only
outside inputs are the clock and randomness held by the context's
synthesizers.
"""

__all__ = [
    "NormalizationContext",
    "normalize_row",
    "resolve_fields",
]

logger = logging.getLogger(__name__)


@dataclass
class NormalizationContext:
    """Per-batch state shared by the rows of one upload."""
    phones: PhoneNormalizer
    emails: EmailSynthesizer
    default_password: str = DEFAULT_PASSWORD
    school_id: int | None = None

    @staticmethod
    def create(
        config: ImportConfig | None = None,
        source: UniqueSuffixSource | None = None,
    ) -> NormalizationContext:
        cfg = config or ImportConfig()
        src = source or SystemSuffixSource()
        return NormalizationContext(
            phones=PhoneNormalizer(src),
            emails=EmailSynthesizer(src, domain=cfg.email_domain or DEFAULT_EMAIL_DOMAIN),
            default_password=cfg.default_password,
            school_id=cfg.school_id,
        )


def resolve_fields(row: RowData, spec: EntityImportSpec) -> dict[str, str | None]:
    """Resolve and clean every canonical field of ``spec`` from ``row``."""
    resolved: dict[str, str | None] = {}
    for canonical in spec.canonical_fields:
        text = resolve(row.values, canonical, spec.aliases)
        cleaned = clean(text) if text is not None else ""
        resolved[canonical] = cleaned or None
    if spec.derive is not None:
        resolved = spec.derive(resolved)
    return resolved


def normalize_row(row: RowData, spec: EntityImportSpec, context: NormalizationContext) -> RowOutcome:
    resolved = resolve_fields(row, spec)
    try:
        values = spec.build(resolved, context)
    except EmailSynthesisError as e:
        return RowOutcome.failure(row.row_number, [ErrorRecord.create(row.row_number, str(e), field="email")])

    partial = PartialRecord(
        entity_type=spec.entity_type,
        row_number=row.row_number,
        resolved=resolved,
        values=values,
    )
    errors = validate(partial, spec)
    if errors:
        logger.debug("row %d rejected: %s", row.row_number, "; ".join(e.message for e in errors))
        return RowOutcome.failure(row.row_number, errors)
    return RowOutcome.success(
        NormalizedRecord(entity_type=spec.entity_type, row_number=row.row_number, values=values)
    )
