"""Core infrastructure: logging and host configuration."""

from locus_datasource.core.config import HostSettings, LoggingSettings, SourceSettings, load_settings
from locus_datasource.core.logging import configure_logging, get_logger, source_context

__all__ = [
    "HostSettings",
    "LoggingSettings",
    "SourceSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
    "source_context",
]
