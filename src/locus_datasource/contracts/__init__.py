"""Shared contracts for everything that crosses the data source boundary.

This package is a LEAF MODULE: it depends on pydantic and nothing else in
locus_datasource, so concrete sources and hosts can import it cheaply.

Import patterns:
    from locus_datasource.contracts import SearchContext, Topic, DataItem
    from locus_datasource.contracts import SourceValidationError
"""

from locus_datasource.contracts.errors import (
    DataSourceError,
    InitializationError,
    InterchangeDecodeError,
    NotFoundError,
    RemoteRequestError,
    SourceUnavailableError,
    SourceValidationError,
    TopicNotFoundError,
    TransientSourceError,
)
from locus_datasource.contracts.records import DataItem, InterchangeRecord, Topic
from locus_datasource.contracts.search import SearchContext
from locus_datasource.contracts.types import INT64_MAX, INT64_MIN, ItemID, SourceLabel, TopicID

__all__ = [
    # Records
    "DataItem",
    "InterchangeRecord",
    "SearchContext",
    "Topic",
    # Errors
    "DataSourceError",
    "InitializationError",
    "InterchangeDecodeError",
    "NotFoundError",
    "RemoteRequestError",
    "SourceUnavailableError",
    "SourceValidationError",
    "TopicNotFoundError",
    "TransientSourceError",
    # Types
    "INT64_MAX",
    "INT64_MIN",
    "ItemID",
    "SourceLabel",
    "TopicID",
]
