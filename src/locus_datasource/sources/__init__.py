"""Data source plumbing: protocol, base classes, validation, registry.

- Protocols: DataSourceProtocol, the contract every integration implements
- Base classes: BaseDataSource (template methods), BaseHTTPDataSource (httpx)
- Validation: precondition helpers raising SourceValidationError
- Config: pydantic config base classes
- Manager / Hookspecs: pluggy registration and entry-point discovery
"""

from locus_datasource.sources.base import BaseDataSource
from locus_datasource.sources.config_base import DataSourceConfig, DataSourceConfigError, HTTPSourceConfig
from locus_datasource.sources.hookspecs import hookimpl, hookspec
from locus_datasource.sources.http_base import BaseHTTPDataSource
from locus_datasource.sources.manager import SourceManager, SourceSpec
from locus_datasource.sources.protocols import DataSourceProtocol
from locus_datasource.sources.validation import (
    validate_count,
    validate_embedding_dimensions,
    validate_search_context,
    validate_topic_id,
)

__all__ = [  # Grouped by category for readability
    # Protocols
    "DataSourceProtocol",
    # Base classes
    "BaseDataSource",
    "BaseHTTPDataSource",
    # Config base classes
    "DataSourceConfig",
    "DataSourceConfigError",
    "HTTPSourceConfig",
    # Validation
    "validate_count",
    "validate_embedding_dimensions",
    "validate_search_context",
    "validate_topic_id",
    # Manager
    "SourceManager",
    "SourceSpec",
    # Hookspecs
    "hookimpl",
    "hookspec",
]
