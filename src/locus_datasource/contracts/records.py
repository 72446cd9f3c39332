"""Interchange records returned by data sources.

Topic and DataItem are the two shapes that flow out of a data source. Both are
frozen pydantic models so a response list can be shared without defensive
copies, and both serialize to the interchange keys that hosts send to UIs and
other services:

    Topic:    {"topic", "source_url", "site"?, "topic_id"}
    DataItem: {"data_text", "source_url", "site"?, "answer_id"}

"site" is omitted when absent. An empty string is normalised to None on the
way in, so encode/decode round-trips exactly.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Self

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from locus_datasource.contracts.errors import InterchangeDecodeError
from locus_datasource.contracts.types import Int64


def _empty_is_absent(value: Any) -> Any:
    if value == "":
        return None
    return value


SiteLabel = Annotated[str | None, BeforeValidator(_empty_is_absent)]
"""Optional site or subsection label (e.g., "stackoverflow", "serverfault")."""


class InterchangeRecord(BaseModel):
    """Base for records that cross a process boundary."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    def to_interchange(self) -> dict[str, Any]:
        """Encode to a JSON-compatible dict, omitting absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Encode to a compact JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_interchange(cls, payload: Mapping[str, Any]) -> Self:
        """Decode from an interchange dict.

        Raises:
            InterchangeDecodeError: If the payload does not describe a valid record.
        """
        if not isinstance(payload, Mapping):
            raise InterchangeDecodeError(f"Invalid {cls.__name__} payload: expected a mapping, got {type(payload).__name__}")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            raise InterchangeDecodeError(f"Invalid {cls.__name__} payload: {e}") from e

    @classmethod
    def from_json(cls, raw: str | bytes) -> Self:
        """Decode from a JSON document.

        Raises:
            InterchangeDecodeError: If the document is not valid JSON or not a valid record.
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise InterchangeDecodeError(f"Invalid {cls.__name__} JSON: {e}") from e


class Topic(InterchangeRecord):
    """A discoverable item (question, article, video) returned by a search.

    topic_id is unique within the originating source and stable across calls;
    it is the only key used to fetch the topic's content.
    """

    topic: str
    source_url: str
    site: SiteLabel = None
    topic_id: Int64


class DataItem(InterchangeRecord):
    """A unit of content (answer, excerpt, transcript segment) tied to one topic.

    item_id is unique within the parent topic's source. It travels under the
    key "answer_id", a name kept from the first Stack Exchange integration;
    it identifies any kind of content item.
    """

    data_text: str
    source_url: str
    site: SiteLabel = None
    item_id: Int64 = Field(alias="answer_id")
