# src/locus_datasource/sources/builtin.py
"""Hook implementation publishing the sources shipped with locus-datasource."""

from locus_datasource.sources.hookspecs import hookimpl
from locus_datasource.sources.protocols import DataSourceProtocol


@hookimpl
def locus_get_sources() -> list[type[DataSourceProtocol]]:
    from locus_datasource.testing.memory_source import MemoryDataSource

    return [MemoryDataSource]
