# src/locus_datasource/host.py
"""DataSourceHost - owns source instances and enforces their lifecycle.

The contract leaves two ordering rules to the host:
- initialize() is called exactly once per source, before anything else;
- a source whose initialize() failed is never used again.

DataSourceHost applies both and routes operations by label. It does not
merge or rank results across sources. Log lines a source emits while the
host is driving it carry the source's label (see core.logging.source_context).

Usage:
    with DataSourceHost.from_settings(settings, manager) as host:
        host.initialize_all()
        topics = host.search_topics("docs", 5, SearchContext(question_text="..."))
"""

from dataclasses import dataclass
from enum import StrEnum
from types import TracebackType
from typing import Self

from locus_datasource.contracts import (
    DataItem,
    DataSourceError,
    SearchContext,
    SourceLabel,
    SourceUnavailableError,
    Topic,
)
from locus_datasource.core.config import HostSettings
from locus_datasource.core.logging import get_logger, source_context
from locus_datasource.sources.manager import SourceManager
from locus_datasource.sources.protocols import DataSourceProtocol

logger = get_logger(__name__)


class SourceState(StrEnum):
    """Lifecycle state of a hosted source."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


@dataclass
class HostedSource:
    """A source instance plus the host's view of its lifecycle."""

    label: SourceLabel
    source: DataSourceProtocol
    state: SourceState = SourceState.PENDING
    error: str | None = None


class DataSourceHost:
    """Holds labelled data sources and drives their lifecycle."""

    def __init__(self) -> None:
        self._sources: dict[SourceLabel, HostedSource] = {}

    @classmethod
    def from_settings(cls, settings: HostSettings, manager: SourceManager) -> Self:
        """Build a host with one source per configured entry. Does not initialize.

        Raises:
            ValueError: If a configured plugin is not registered with the manager.
        """
        host = cls()
        for entry in settings.sources:
            host.add(SourceLabel(entry.label), manager.create_source(entry.plugin, entry.options))
        return host

    def add(self, label: SourceLabel, source: DataSourceProtocol) -> None:
        """Add an uninitialized source under a unique label.

        Raises:
            ValueError: If the label is already taken.
        """
        if label in self._sources:
            raise ValueError(f"Duplicate source label: '{label}'")
        self._sources[label] = HostedSource(label=label, source=source)

    @property
    def labels(self) -> list[SourceLabel]:
        return list(self._sources)

    def get(self, label: SourceLabel) -> HostedSource:
        """Look up a hosted source by label.

        Raises:
            KeyError: If no source has that label.
        """
        try:
            return self._sources[label]
        except KeyError:
            raise KeyError(f"No data source labelled '{label}'") from None

    def state(self, label: SourceLabel) -> SourceState:
        return self.get(label).state

    def ready_labels(self) -> list[SourceLabel]:
        """Labels of sources that initialized successfully, in insertion order."""
        return [h.label for h in self._sources.values() if h.state is SourceState.READY]

    # === Lifecycle ===

    def initialize_all(self) -> dict[SourceLabel, SourceState]:
        """Initialize every pending source exactly once.

        A DataSourceError from initialize() marks that source FAILED; the
        others still initialize. Any other exception is a bug in the source
        and propagates.

        Returns:
            Final state per label.
        """
        for hosted in self._sources.values():
            if hosted.state is not SourceState.PENDING:
                continue
            with source_context(hosted.label):
                try:
                    hosted.source.initialize()
                except DataSourceError as e:
                    hosted.state = SourceState.FAILED
                    hosted.error = str(e)
                    logger.error("data_source_unusable", source=hosted.source.name, error=str(e))
                    continue
                hosted.state = SourceState.READY
        return {label: hosted.state for label, hosted in self._sources.items()}

    def close(self) -> None:
        """Close every source that finished initialize() successfully.

        Every source gets its close() call even if an earlier one raised; the
        first exception is re-raised afterwards.
        """
        first_error: Exception | None = None
        for hosted in self._sources.values():
            if hosted.state is not SourceState.READY:
                continue
            with source_context(hosted.label):
                try:
                    hosted.source.close()
                except Exception as e:
                    logger.error("data_source_close_failed", error=str(e), error_type=type(e).__name__)
                    if first_error is None:
                        first_error = e
            hosted.state = SourceState.CLOSED
        if first_error is not None:
            raise first_error

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # === Routed operations ===
    # Source log lines emitted inside these calls carry label=<label>

    def check_availability(self, label: SourceLabel) -> bool:
        source = self._ready(label)
        with source_context(label):
            return source.check_availability()

    def search_topics(self, label: SourceLabel, count: int, context: SearchContext) -> list[Topic]:
        source = self._ready(label)
        with source_context(label):
            return source.search_topics(count, context)

    def fetch_content(self, label: SourceLabel, count: int, topic_id: int) -> list[DataItem]:
        source = self._ready(label)
        with source_context(label):
            return source.fetch_content(count, topic_id)

    def _ready(self, label: SourceLabel) -> DataSourceProtocol:
        hosted = self.get(label)
        if hosted.state is not SourceState.READY:
            raise SourceUnavailableError(label, hosted.state, hosted.error)
        return hosted.source
