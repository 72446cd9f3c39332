# src/locus_datasource/sources/http_base.py
"""Base class for data sources backed by an HTTP API.

Owns one httpx.Client per source instance, created in initialize() and
closed in close(). httpx.Client is thread-safe, so concurrent searches share
its connection pool.

Failure mapping for get_json():
- timeout, connection/transport error  -> TransientSourceError
- 429 (Retry-After honoured), 5xx      -> TransientSourceError
- 404                                  -> NotFoundError
- other 4xx                            -> RemoteRequestError
- body that is not valid JSON          -> RemoteRequestError
- any other httpx.RequestError         -> RemoteRequestError
  (undecodable Content-Encoding, too many redirects)
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx

from locus_datasource.contracts import (
    InitializationError,
    NotFoundError,
    RemoteRequestError,
    TransientSourceError,
)
from locus_datasource.sources.base import BaseDataSource
from locus_datasource.sources.config_base import HTTPSourceConfig


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Parse a numeric Retry-After header. HTTP-date values are ignored."""
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        return None
    return max(seconds, 0.0)


ConfigT = TypeVar("ConfigT", bound=HTTPSourceConfig)


class BaseHTTPDataSource(BaseDataSource[ConfigT]):
    """Data source talking to a JSON-over-HTTP API.

    Subclasses implement _search_topics() and _fetch_content() on top of
    get_json(). The availability probe is a GET on health_path.

    Example:
        class KnowledgeBaseSource(BaseHTTPDataSource[HTTPSourceConfig]):
            name = "knowledge_base"
            config_model = HTTPSourceConfig

            def _search_topics(self, count: int, context: SearchContext) -> list[Topic]:
                payload = self.get_json("/search", params={"q": context.question_text, "limit": count})
                return [Topic.from_interchange(hit) for hit in payload["hits"]]

            def _fetch_content(self, count: int, topic_id: int) -> list[DataItem]:
                try:
                    payload = self.get_json(f"/topics/{topic_id}/items", params={"limit": count})
                except NotFoundError as e:
                    raise TopicNotFoundError(topic_id) from e
                return [DataItem.from_interchange(item) for item in payload["items"]]
    """

    def __init__(
        self,
        config: dict[str, Any],
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize with configuration.

        Args:
            config: Source options (validated against config_model on initialize())
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        super().__init__(config)
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__}.client used before initialize()")
        return self._client

    def on_initialize(self) -> None:
        settings = self.settings
        self._client = httpx.Client(
            base_url=settings.base_url,
            headers=settings.headers,
            timeout=settings.timeout_seconds,
            transport=self._transport,
        )
        if settings.require_reachable and not self.check_availability():
            raise InitializationError(self.name, f"{settings.base_url} is not reachable")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def probe(self) -> bool:
        try:
            response = self.client.get(self.settings.health_path)
        except httpx.HTTPError as e:
            self._log.info("health_check_failed", error=str(e), error_type=type(e).__name__)
            return False
        return response.is_success

    def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """GET a path relative to base_url and decode the JSON body.

        Raises:
            TransientSourceError: Timeout, transport failure, 429 or 5xx.
            NotFoundError: 404.
            RemoteRequestError: Any other 4xx, an undecodable body, or any other
                httpx request failure.
        """
        try:
            response = self.client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise TransientSourceError(f"{self.name}: request to {path} timed out") from e
        except httpx.TransportError as e:
            raise TransientSourceError(f"{self.name}: request to {path} failed: {e}") from e
        except httpx.RequestError as e:
            # Decoding failures, redirect loops: the request itself is unusable
            raise RemoteRequestError(f"{self.name}: request to {path} failed: {e}") from e

        status = response.status_code
        if status == 429:
            raise TransientSourceError(
                f"{self.name}: rate limited on {path}",
                retry_after=_parse_retry_after(response),
            )
        if status >= 500:
            raise TransientSourceError(f"{self.name}: {path} returned HTTP {status}")
        if status == 404:
            raise NotFoundError(f"{self.name}: {path} not found")
        if status >= 400:
            raise RemoteRequestError(f"{self.name}: {path} returned HTTP {status}", status_code=status)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteRequestError(f"{self.name}: {path} returned a non-JSON body", status_code=status) from e
