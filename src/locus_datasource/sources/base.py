# src/locus_datasource/sources/base.py
"""Base class for data source implementations.

BaseDataSource implements the four DataSource operations as template methods.
The public methods own the contract (validation before any remote call,
count == 0 short-circuit, truncation to count, availability never raising);
subclasses implement only the remote half:

    probe()                        -> bool
    _search_topics(count, context) -> list[Topic]
    _fetch_content(count, topic_id) -> list[DataItem]

Lifecycle (driven by the host):
    __init__(config) -> initialize() -> [operations] -> close()

- __init__: stores raw options, no I/O.
- initialize: validates options against config_model, then on_initialize().
  Any DataSourceConfigError becomes InitializationError. If on_initialize()
  raises, close() is called before the error propagates.
- close: releases what on_initialize() acquired. Default is a no-op. Must
  tolerate being called after a partial on_initialize().

Example:
    class ArchiveSource(BaseDataSource[ArchiveConfig]):
        name = "archive"
        source_version = "1.2.0"
        config_model = ArchiveConfig

        def on_initialize(self) -> None:
            self._index = load_index(self.settings.index_path)

        def probe(self) -> bool:
            return self._index.is_open

        def _search_topics(self, count: int, context: SearchContext) -> list[Topic]:
            return [hit.to_topic() for hit in self._index.query(context.question_text, limit=count)]

        def _fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
            return [doc.to_item() for doc in self._index.documents(topic_id, limit=count)]
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from locus_datasource.contracts import DataItem, DataSourceError, InitializationError, SearchContext, Topic
from locus_datasource.core.logging import get_logger
from locus_datasource.sources.config_base import DataSourceConfig, DataSourceConfigError
from locus_datasource.sources.validation import (
    validate_count,
    validate_embedding_dimensions,
    validate_search_context,
    validate_topic_id,
)


ConfigT = TypeVar("ConfigT", bound=DataSourceConfig)


class BaseDataSource(ABC, Generic[ConfigT]):
    """Base class for data sources.

    Subclass and implement probe(), _search_topics() and _fetch_content().
    Override on_initialize() and close() when the source holds resources.
    """

    name: str
    source_version: str = "0.0.0"
    config_model: type[ConfigT]

    # Dimensionality of query embeddings this source accepts; None accepts any
    embedding_dimensions: int | None = None

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration.

        Args:
            config: Source-specific options, validated later by initialize()
        """
        self.config = config
        self._settings: ConfigT | None = None
        self._log = get_logger(__name__).bind(source=self.name)

    @property
    def settings(self) -> ConfigT:
        """Validated configuration. Only available after initialize()."""
        if self._settings is None:
            raise RuntimeError(f"{self.__class__.__name__}.settings accessed before initialize()")
        return self._settings

    @property
    def is_initialized(self) -> bool:
        return self._settings is not None

    # === Lifecycle ===

    def initialize(self) -> None:
        """Validate configuration and perform one-time setup.

        Raises:
            InitializationError: If configuration is invalid or on_initialize() fails.
        """
        try:
            settings = self.config_model.from_dict(self.config)
        except DataSourceConfigError as e:
            raise InitializationError(self.name, str(e)) from e
        self._settings = settings
        try:
            self.on_initialize()
        except Exception:
            self._release_after_failed_initialize()
            raise
        self._log.info("data_source_initialized", version=self.source_version)

    def _release_after_failed_initialize(self) -> None:
        # The host never closes a FAILED source, so partial acquisitions are
        # released here. A close() failure is logged and the init error wins.
        try:
            self.close()
        except Exception as e:
            self._log.warning("close_after_failed_initialize_failed", error=str(e), error_type=type(e).__name__)
        finally:
            self._settings = None

    def on_initialize(self) -> None:
        """Acquire resources (clients, caches). Called once from initialize().

        Raise InitializationError to mark the source unusable.
        """

    def close(self) -> None:
        """Release resources acquired by on_initialize()."""

    # === Operations ===

    def check_availability(self) -> bool:
        """Report whether the external dependency is reachable.

        Failures raised by probe() are logged and reported as False.
        """
        try:
            available = self.probe()
        except (DataSourceError, OSError) as e:
            self._log.warning("availability_probe_failed", error=str(e), error_type=type(e).__name__)
            return False
        self._log.debug("availability_probed", available=available)
        return available

    def search_topics(self, count: int, context: SearchContext) -> list[Topic]:
        """Search for topics. See DataSourceProtocol.search_topics()."""
        validate_count(count)
        validate_search_context(context)
        validate_embedding_dimensions(context, self.embedding_dimensions)
        if count == 0:
            return []

        topics = list(self._search_topics(count, context))
        self._log.debug("topics_searched", requested=count, found=len(topics), semantic=context.has_embedding)
        return topics[:count]

    def fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
        """Fetch content items for a topic. See DataSourceProtocol.fetch_content()."""
        validate_count(count)
        validate_topic_id(topic_id)
        if count == 0:
            return []

        items = list(self._fetch_content(count, topic_id))
        self._log.debug("content_fetched", topic_id=topic_id, requested=count, found=len(items))
        return items[:count]

    # === Remote half (implemented by subclasses) ===

    @abstractmethod
    def probe(self) -> bool:
        """Check the external dependency. May raise; the caller reports False."""
        ...

    @abstractmethod
    def _search_topics(self, count: int, context: SearchContext) -> list[Topic]:
        """Run the search. Inputs are already validated and count > 0.

        Return topics in descending relevance; returning more than count is
        allowed (the excess is dropped).
        """
        ...

    @abstractmethod
    def _fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
        """Fetch items for a validated topic id with count > 0.

        Return items in descending relevance/votes. Raise TopicNotFoundError
        for unknown topics.
        """
        ...
