from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the bulk import pipeline.

These are the typed form of config/import.yml. The loader in
roster_import/config/loader.py validates the YAML and builds them.
"""

DEFAULT_PASSWORD = "Pass1234"
DEFAULT_EMAIL_DOMAIN = "school.com"
COUNTRY_CODE = "254"


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run.

    Every key has a default so that an absent config file still yields a
    usable configuration.
    """
    entity_type: str | None = None  # default entity type for the CLI
    school_id: int | None = None  # attached to payloads as "school"
    default_password: str = DEFAULT_PASSWORD
    email_domain: str = DEFAULT_EMAIL_DOMAIN
    # entity type -> canonical field -> extra header aliases (probed after built-ins)
    aliases: dict[str, dict[str, list[str]]] = field(default_factory=dict)
    error_log_dir: str = "logs"
