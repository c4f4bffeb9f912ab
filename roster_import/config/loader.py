from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_EMAIL_DOMAIN, DEFAULT_PASSWORD, ImportConfig

"""Config loader.

Responsibilities:
- Load YAML config (config/import.yml by default)
- Validate against the JSON schema shipped next to this module
- Apply defaults for every missing key
- Let ROSTER_SCHOOL_ID from the environment override school_id
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHOOL_ID_ENV = "ROSTER_SCHOOL_ID"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation.
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _school_id_from_env(current: int | None) -> int | None:
    raw = os.getenv(SCHOOL_ID_ENV)
    if raw is None or not raw.strip():
        return current
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{SCHOOL_ID_ENV} must be an integer, got {raw!r}") from e


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return ImportConfig(
        entity_type=data.get("entity_type"),
        school_id=_school_id_from_env(data.get("school_id")),
        default_password=data.get("default_password", DEFAULT_PASSWORD),
        email_domain=data.get("email_domain", DEFAULT_EMAIL_DOMAIN),
        aliases=data.get("aliases", {}),
        error_log_dir=data.get("error_log_dir", "logs"),
    )


def load_config_or_default(path: Path | None = None) -> ImportConfig:
    """Load ``path`` when given; otherwise the default path if present, else defaults."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportConfig(school_id=_school_id_from_env(None))
