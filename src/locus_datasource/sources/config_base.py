# src/locus_datasource/sources/config_base.py
"""Base classes for typed data source configurations.

Sources declare a config model; BaseDataSource.initialize() validates the raw
options against it. Subclasses get:
- Strict validation (reject unknown fields)
- Factory method with clear error messages
- A shared outbound timeout setting

Example usage:
    class KnowledgeBaseConfig(HTTPSourceConfig):
        space: str
        include_archived: bool = False

    cfg = KnowledgeBaseConfig.from_dict(options)
"""

from typing import Any, Self

from pydantic import BaseModel, Field, ValidationError, field_validator


class DataSourceConfigError(Exception):
    """Raised when data source configuration is invalid."""

    pass


class DataSourceConfig(BaseModel):
    """Base class for data source configurations.

    All source configs should inherit from this class.
    """

    model_config = {"extra": "forbid", "frozen": True}

    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for any single outbound call, in seconds",
    )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Args:
            config: Dictionary of configuration values.

        Returns:
            Validated configuration instance.

        Raises:
            DataSourceConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise DataSourceConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")

        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise DataSourceConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e


class HTTPSourceConfig(DataSourceConfig):
    """Base config for sources backed by an HTTP API.

    require_reachable makes initialize() fail when the health probe fails,
    for hosts that would rather drop a source at startup than serve errors.
    """

    base_url: str
    health_path: str = "/"
    headers: dict[str, str] = Field(default_factory=dict)
    require_reachable: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_url cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'")
        return v

    @field_validator("health_path")
    @classmethod
    def validate_health_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"health_path must start with '/', got '{v}'")
        return v
