# src/locus_datasource/sources/validation.py
"""Precondition checks shared by data source implementations.

Each helper raises SourceValidationError before any remote call is made, so
callers get a validation failure rather than a confusing remote error.
bool is rejected wherever an integer is expected (it is an int subclass).
"""

from locus_datasource.contracts import INT64_MAX, SearchContext, SourceValidationError


def validate_count(count: int) -> int:
    """Validate a result cap.

    Raises:
        SourceValidationError: If count is not a non-negative integer.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise SourceValidationError("count", f"must be an integer, got {type(count).__name__}", count)
    if count < 0:
        raise SourceValidationError("count", f"must be non-negative, got {count}", count)
    return count


def validate_search_context(context: SearchContext) -> SearchContext:
    """Validate that a context carries at least one usable search key.

    Raises:
        SourceValidationError: If context is not a SearchContext, or has
            blank question text and no embedding.
    """
    if not isinstance(context, SearchContext):
        raise SourceValidationError("context", f"must be a SearchContext, got {type(context).__name__}", context)
    if not context.has_query_text and not context.has_embedding:
        raise SourceValidationError(
            "context",
            "question_text is required when no embedding is supplied",
            context.question_text,
        )
    return context


def validate_topic_id(topic_id: int) -> int:
    """Validate a topic identifier before fetching its content.

    Raises:
        SourceValidationError: If topic_id is not a positive 64-bit integer.
    """
    if isinstance(topic_id, bool) or not isinstance(topic_id, int):
        raise SourceValidationError("topic_id", f"must be an integer, got {type(topic_id).__name__}", topic_id)
    if topic_id <= 0:
        raise SourceValidationError("topic_id", f"must be positive, got {topic_id}", topic_id)
    if topic_id > INT64_MAX:
        raise SourceValidationError("topic_id", "exceeds the 64-bit identifier range", topic_id)
    return topic_id


def validate_embedding_dimensions(context: SearchContext, expected: int | None) -> None:
    """Check the context's embedding against the dimensionality a source expects.

    No-op when the context has no embedding or the source declares no
    expectation.

    Raises:
        SourceValidationError: If the dimensionality differs.
    """
    if expected is None or context.embedding is None:
        return
    actual = len(context.embedding)
    if actual != expected:
        raise SourceValidationError(
            "embedding",
            f"expected {expected} dimensions, got {actual}",
            actual,
        )
