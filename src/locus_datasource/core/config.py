# src/locus_datasource/core/config.py
"""
Host configuration schema and loading.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Example settings file:

    logging:
      level: INFO
      json_output: false
    sources:
      - label: docs
        plugin: memory
        options:
          topics:
            - {topic: "Goroutines explained", source_url: "https://...", topic_id: 1}
      - label: kb
        plugin: internal_kb
        options:
          base_url: ${KB_URL:-http://localhost:8080}
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class SourceSettings(BaseModel):
    """One configured data source instance."""

    model_config = {"frozen": True, "extra": "forbid"}

    label: str = Field(description="Host-unique label used to address this instance")
    plugin: str = Field(description="Registered source name (memory, or a third-party plugin)")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Source-specific configuration, validated by the source's config model",
    )

    @field_validator("label", "plugin")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class HostSettings(BaseModel):
    """Top-level host configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    sources: list[SourceSettings] = Field(
        min_length=1,
        description="Data sources the host owns, in priority order",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("sources")
    @classmethod
    def _unique_labels(cls, v: list[SourceSettings]) -> list[SourceSettings]:
        labels = [s.label for s in v]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"Duplicate source labels: {', '.join(duplicates)}")
        return v


def _env_substitution(match: re.Match[str]) -> str:
    name, default = match.group(1), match.group(2)
    value = os.environ.get(name, default)
    # An unset variable without a default stays visible so the source's
    # config model rejects it with the placeholder in the message
    return match.group(0) if value is None else value


def _expand_env_vars(value: Any) -> Any:
    """Expand ${VAR} and ${VAR:-default} in every string of a loaded settings tree.

    Used for secrets and endpoints in source options, e.g.
    ``base_url: ${KB_URL:-http://localhost:8080}``. A set-but-empty
    variable wins over the default.
    """
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(_env_substitution, value)
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def load_settings(config_path: Path) -> HostSettings:
    """Load host settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (LOCUS_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Environment variable format: LOCUS_LOGGING__LEVEL=DEBUG for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated HostSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="LOCUS",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase top-level keys and mixes in its own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    raw_config = _expand_env_vars(raw_config)

    return HostSettings(**raw_config)
