# src/locus_datasource/sources/hookspecs.py
"""pluggy hook specifications for data source packages.

Packages implement these hooks to publish their source classes. The source
manager calls them during discovery.

Usage (publishing sources from a third-party package):
    from locus_datasource.sources.hookspecs import hookimpl

    @hookimpl  # NOT @hookspec - that's for defining specs
    def locus_get_sources():
        return [WikiSource, StackExchangeSource]

and in the package's pyproject.toml:

    [project.entry-points.locus_datasource]
    wiki = "locus_wiki.plugin"

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from locus_datasource.sources.protocols import DataSourceProtocol

# Project name for pluggy, also the entry-point group scanned for plugins
PROJECT_NAME = "locus_datasource"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class LocusSourceSpec:
    """Hook specifications for data source plugins."""

    @hookspec
    def locus_get_sources(self) -> list[type["DataSourceProtocol"]]:  # type: ignore[empty-body]
        """Return data source classes.

        Returns:
            List of DataSource classes (not instances)
        """
