"""Testing support: in-memory data source for hosts and integration tests.

    from locus_datasource.testing import MemoryDataSource

    source = MemoryDataSource({"topics": [...], "content": {...}})
    source.initialize()
"""

from locus_datasource.testing.memory_source import MemoryDataSource, MemorySourceConfig, SeededItem, SeededTopic

__all__ = [
    "MemoryDataSource",
    "MemorySourceConfig",
    "SeededItem",
    "SeededTopic",
]
