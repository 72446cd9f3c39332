"""Query descriptor passed to DataSource.search_topics()."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, FiniteFloat

from locus_datasource.contracts.types import Int64


def _empty_is_absent(value: Any) -> Any:
    # An empty vector carries no semantic signal; treat it like no vector.
    if isinstance(value, (list, tuple)) and not value:
        return None
    return value


Embedding = Annotated[tuple[FiniteFloat, ...] | None, BeforeValidator(_empty_is_absent)]


class SearchContext(BaseModel):
    """The query plus optional semantic hints used to find topics.

    Attributes:
        question_text: Free-text query. Required unless an embedding is given.
        tags: Ordered search hints (e.g., ["python", "asyncio"]).
        asked_by: User id of the asker; None for anonymous queries.
        embedding: Precomputed query vector. None means the source must fall
            back to text search. The contract does not fix its dimensionality;
            sources that care declare what they expect.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    question_text: str = ""
    tags: tuple[str, ...] = ()
    asked_by: Int64 | None = None
    embedding: Embedding = None

    @property
    def has_query_text(self) -> bool:
        """True when question_text contains something other than whitespace."""
        return bool(self.question_text.strip())

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    @property
    def is_anonymous(self) -> bool:
        return self.asked_by is None
