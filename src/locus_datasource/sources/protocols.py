# src/locus_datasource/sources/protocols.py
"""The DataSource protocol every integration implements.

This protocol is used for type checking and for runtime conformance checks
(isinstance), not for discovery - the registry works on classes exposed via
pluggy hooks.

Lifecycle:
1. __init__(config) - Instantiation with source-specific options
2. initialize() - One-time setup, called exactly once by the host
3. check_availability() / search_topics() / fetch_content() - Any order,
   possibly concurrently
4. close() - Release resources acquired by initialize()

Example:
    class WikiSource:
        name = "wiki"
        source_version = "1.0.0"

        def __init__(self, config: dict[str, Any]) -> None:
            self.config = config

        def initialize(self) -> None:
            self._client = httpx.Client(base_url=self.config["base_url"], timeout=5.0)

        def check_availability(self) -> bool:
            try:
                return self._client.get("/").is_success
            except httpx.HTTPError:
                return False

        def search_topics(self, count: int, context: SearchContext) -> list[Topic]:
            ...

        def fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
            ...

        def close(self) -> None:
            self._client.close()
"""

from typing import Any, Protocol, runtime_checkable

from locus_datasource.contracts import DataItem, SearchContext, Topic


@runtime_checkable
class DataSourceProtocol(Protocol):
    """Protocol for data source integrations.

    Operations other than initialize() must be safe to call concurrently once
    initialize() has returned.
    """

    name: str
    source_version: str

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration. Must not perform I/O."""
        ...

    def initialize(self) -> None:
        """Perform one-time setup: load configuration, warm caches, open connections.

        Raises:
            InitializationError: If the source cannot be made usable.
        """
        ...

    def check_availability(self) -> bool:
        """Report whether the external dependency is reachable right now.

        Fast (target under 5 seconds), read-only and idempotent. An unreachable
        dependency is reported as False, never raised.
        """
        ...

    def search_topics(self, count: int, context: SearchContext) -> list[Topic]:
        """Search for topics relevant to the context.

        Args:
            count: Maximum number of topics to return (0 means none wanted)
            context: Query text plus optional tags, asker and embedding

        Returns:
            At most count topics sorted by descending relevance. An empty list
            means nothing matched.

        Raises:
            SourceValidationError: Empty query text with no embedding, or bad count.
            TransientSourceError: The search could not be performed right now.
        """
        ...

    def fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
        """Fetch content items for a topic previously returned by search_topics().

        Args:
            count: Maximum number of items to return
            topic_id: Identifier of the topic

        Returns:
            At most count items sorted by descending relevance/votes. An empty
            list means the topic has no content.

        Raises:
            SourceValidationError: Non-positive topic_id, or bad count.
            NotFoundError: The topic does not exist.
            TransientSourceError: The fetch could not be performed right now.
        """
        ...

    def close(self) -> None:
        """Release resources acquired by initialize(). Safe to call twice.

        The host does not call close() on a source whose initialize() raised,
        so initialize() releases anything it acquired before raising.
        BaseDataSource does this by calling close() itself.
        """
        ...
