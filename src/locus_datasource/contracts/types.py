"""Semantic type aliases and numeric bounds for interchange values.

Identifiers cross process boundaries as signed 64-bit integers, so Python
ints are constrained to that range wherever they enter a record.
"""

from typing import Annotated, NewType

from pydantic import Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
"""Signed 64-bit integer as validated by pydantic."""

TopicID = NewType("TopicID", int)
"""Source-native identifier of a topic (stable across calls)."""

ItemID = NewType("ItemID", int)
"""Source-native identifier of a content item (legacy interchange key: answer_id)."""

SourceLabel = NewType("SourceLabel", str)
"""Host-assigned label for a configured source instance (e.g., 'docs')."""
