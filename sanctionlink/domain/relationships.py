"""Relationship domain models."""

from typing import Literal

from pydantic import BaseModel

from sanctionlink.domain.entity import EntityRecord

RelationshipCategory = Literal[
    "director_of",
    "owner_of",
    "owned_by",
    "employee_of",
    "member_of",
    "family",
    "co_conspirator",
    "related_to",
]


class ClassifiedEdge(BaseModel):
    """A relationship record classified relative to an anchor entity."""

    relationship_id: str
    schema_name: str
    category: RelationshipCategory
    counterpart_id: str


class ResolvedEdge(ClassifiedEdge):
    display_name: str  # counterpart caption, or its raw id when unresolved


class RelationshipBuckets(BaseModel):
    """Counterpart display names grouped by relationship category.

    Each bucket keeps first-seen order and never holds the same name twice.
    """

    director_of: list[str] = []
    owner_of: list[str] = []
    owned_by: list[str] = []
    employee_of: list[str] = []
    member_of: list[str] = []
    family: list[str] = []
    co_conspirator: list[str] = []
    related_to: list[str] = []

    def add(self, category: RelationshipCategory, display_name: str) -> bool:
        """Append a display name to a bucket unless already present.

        Returns:
            True if the name was added
        """
        bucket: list[str] = getattr(self, category)
        if display_name in bucket:
            return False
        bucket.append(display_name)
        return True

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)


class EnrichedEntity(EntityRecord):
    """A primary entity together with its resolved one-hop relationships."""

    relationships: RelationshipBuckets = RelationshipBuckets()
    edges: list[ResolvedEdge] = []
