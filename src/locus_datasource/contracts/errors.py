"""Exception taxonomy for data source operations.

Every failure a data source reports is a DataSourceError subclass, raised
synchronously from the operation that failed. An empty result list is never
an error: "zero matches" and "could not search" are different signals.

Kinds:
- InitializationError: source is unusable for the rest of its lifetime
- SourceValidationError: caller input violates a precondition (no remote call made)
- TransientSourceError: network/timeout/rate-limit failure, may succeed later
- RemoteRequestError: the remote rejected the request (auth, malformed query)
- NotFoundError / TopicNotFoundError: referenced identifier does not exist
- SourceUnavailableError: host refuses to route to a source that is not ready
- InterchangeDecodeError: a serialized record could not be decoded
"""


class DataSourceError(Exception):
    """Base class for all data source failures."""


class InitializationError(DataSourceError):
    """Raised when initialize() cannot bring the source into a usable state.

    The host must not invoke any other operation on a source that raised this.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Data source '{source}' failed to initialize: {reason}")


class SourceValidationError(DataSourceError, ValueError):
    """Raised when caller-supplied input violates an operation precondition.

    Always raised before any remote call is attempted.

    Attributes:
        argument: Name of the offending argument (e.g., "topic_id")
        value: The rejected value
    """

    def __init__(self, argument: str, message: str, value: object = None) -> None:
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid {argument}: {message}")


class TransientSourceError(DataSourceError):
    """Raised when a remote call fails for a reason that may clear on its own.

    Timeouts, connection failures, rate limiting and 5xx responses land here.
    Retry policy belongs to the caller.

    Attributes:
        retry_after: Seconds the remote asked us to wait, if it said so
    """

    def __init__(self, message: str, *, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class RemoteRequestError(DataSourceError):
    """Raised when the remote rejects a request or answers with garbage."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(DataSourceError):
    """Raised when a referenced remote resource does not exist."""


class TopicNotFoundError(NotFoundError):
    """Raised by fetch_content() when the topic id is unknown to the source."""

    def __init__(self, topic_id: int) -> None:
        self.topic_id = topic_id
        super().__init__(f"Topic {topic_id} does not exist")


class SourceUnavailableError(DataSourceError):
    """Raised by the host when asked to use a source that is not ready."""

    def __init__(self, label: str, state: str, detail: str | None = None) -> None:
        self.label = label
        self.state = state
        message = f"Data source '{label}' is not usable (state: {state})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InterchangeDecodeError(DataSourceError, ValueError):
    """Raised when an interchange payload cannot be decoded into a record."""
