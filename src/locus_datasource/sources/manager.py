# src/locus_datasource/sources/manager.py
"""Source manager for discovery, registration, and instantiation.

Uses pluggy for hook-based registration, so third-party packages can publish
sources through the `locus_datasource` entry-point group.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from locus_datasource.core.logging import get_logger
from locus_datasource.sources.hookspecs import PROJECT_NAME, LocusSourceSpec
from locus_datasource.sources.protocols import DataSourceProtocol

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceSpec:
    """Registration record for a data source class.

    Frozen: specs describe classes, which do not change after registration.
    """

    name: str
    version: str
    class_path: str
    config_model: str | None = None

    @classmethod
    def from_source(cls, source_cls: type[DataSourceProtocol]) -> "SourceSpec":
        """Create spec from a source class.

        Sources without a config_model (plain protocol implementations that
        do not derive from BaseDataSource) report None.
        """
        config_model = getattr(source_cls, "config_model", None)
        return cls(
            name=source_cls.name,
            version=source_cls.source_version,
            class_path=f"{source_cls.__module__}.{source_cls.__qualname__}",
            config_model=config_model.__name__ if config_model is not None else None,
        )


class SourceManager:
    """Manages data source discovery, registration, and lookup.

    Usage:
        manager = SourceManager()
        manager.register_builtin_sources()
        manager.register_entrypoint_sources()

        source = manager.create_source("memory", {"topics": [...]})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LocusSourceSpec)

        # Cache - map name to source class for duplicate detection
        self._sources: dict[str, type[DataSourceProtocol]] = {}

    def register_builtin_sources(self) -> None:
        """Register the sources shipped with this package."""
        from locus_datasource.sources import builtin

        self.register(builtin)

    def register_entrypoint_sources(self) -> int:
        """Load third-party sources published under the entry-point group.

        Returns:
            Number of plugin modules loaded.
        """
        loaded = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        self._refresh_cache()
        logger.debug("entrypoint_sources_loaded", count=loaded)
        return loaded

    def register(self, plugin: Any) -> None:
        """Register a plugin object or module implementing locus_get_sources().

        Raises:
            ValueError: If it publishes a source name that is already registered.
        """
        self._pm.register(plugin)
        try:
            self._refresh_cache()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_cache(self) -> None:
        """Refresh the source cache from hooks.

        Raises:
            ValueError: If two registered classes share a name
        """
        new_sources: dict[str, type[DataSourceProtocol]] = {}

        for sources in self._pm.hook.locus_get_sources():
            for cls in sources:
                name = cls.name
                if name in new_sources:
                    raise ValueError(f"Duplicate data source name: '{name}'. Already registered by {new_sources[name].__name__}")
                new_sources[name] = cls

        self._sources = new_sources

    # === Lookup ===

    def get_sources(self) -> list[type[DataSourceProtocol]]:
        """Get all registered source classes."""
        return list(self._sources.values())

    def get_source_by_name(self, name: str) -> type[DataSourceProtocol] | None:
        """Get source class by name."""
        return self._sources.get(name)

    def get_specs(self) -> list[SourceSpec]:
        """Get registration records for all sources, sorted by name."""
        return [SourceSpec.from_source(cls) for _, cls in sorted(self._sources.items())]

    def create_source(self, name: str, options: dict[str, Any] | None = None) -> DataSourceProtocol:
        """Instantiate a registered source. Does not call initialize().

        Raises:
            ValueError: If no source with that name is registered.
        """
        source_cls = self.get_source_by_name(name)
        if source_cls is None:
            available = ", ".join(sorted(self._sources)) or "none"
            raise ValueError(f"Unknown data source '{name}'. Available: {available}")
        return source_cls(dict(options or {}))
