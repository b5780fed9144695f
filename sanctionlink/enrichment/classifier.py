"""Directional classification of relationship records relative to an anchor."""

import logging
from typing import NamedTuple

from sanctionlink.domain.entity import EntityRecord
from sanctionlink.domain.relationships import ClassifiedEdge, RelationshipCategory

from .cache import CaptionCache
from .references import contains_entity, extract_first_target

logger = logging.getLogger(__name__)


class RoleRule(NamedTuple):
    """Role properties of a relationship schema and the category each side yields.

    ``category_b`` is None for one-directional relationships, where an anchor in
    role B produces no classification.
    """

    role_a: str
    role_b: str
    category_a: RelationshipCategory
    category_b: RelationshipCategory | None


RELATIONSHIP_RULES: dict[str, RoleRule] = {
    "Directorship": RoleRule("director", "organization", "director_of", None),
    "Ownership": RoleRule("owner", "asset", "owner_of", "owned_by"),
    "Employment": RoleRule("employee", "employer", "employee_of", None),
    "Membership": RoleRule("member", "organization", "member_of", None),
    "Family": RoleRule("person", "relative", "family", "family"),
    "Associate": RoleRule("person", "associate", "co_conspirator", "co_conspirator"),
    "Succession": RoleRule("subject", "object", "related_to", "related_to"),
    "UnknownLink": RoleRule("subject", "object", "related_to", "related_to"),
    "Representation": RoleRule("subject", "object", "related_to", "related_to"),
}


def is_relationship_schema(schema_name: str) -> bool:
    return schema_name in RELATIONSHIP_RULES


class RelationshipClassifier:
    """Classifies relationship records using the fixed per-schema rule table."""

    def __init__(self, rules: dict[str, RoleRule] | None = None):
        self.rules = rules if rules is not None else RELATIONSHIP_RULES

    def classify(
        self,
        record: EntityRecord,
        anchor_id: str,
        cache: CaptionCache | None = None,
    ) -> ClassifiedEdge | None:
        """Classify a relationship record relative to an anchor entity.

        Role A is checked first; role B only when the anchor is absent from role A.
        The counterpart is the first identifier on the opposite side that is not
        the anchor itself, so self-loops never classify.

        Args:
            record: Relationship record to classify
            anchor_id: Identifier of the entity relationships are resolved for
            cache: Optional caption cache receiving embedded counterpart captions

        Returns:
            ClassifiedEdge, or None when the record does not involve the anchor,
            has no usable counterpart, or has an unrecognized schema
        """
        rule = self.rules.get(record.schema_name)
        if rule is None:
            logger.debug(f"Unrecognized relationship schema {record.schema_name!r} on {record.id}")
            return None

        properties = record.properties
        if contains_entity(properties.get(rule.role_a), anchor_id):
            category = rule.category_a
            counterpart_values = properties.get(rule.role_b)
        elif contains_entity(properties.get(rule.role_b), anchor_id):
            category = rule.category_b
            counterpart_values = properties.get(rule.role_a)
        else:
            logger.debug(f"Relationship {record.id} does not involve anchor {anchor_id}")
            return None

        if category is None:
            return None

        counterpart_id = extract_first_target(counterpart_values, cache, exclude=anchor_id)
        if counterpart_id is None:
            return None

        return ClassifiedEdge(
            relationship_id=record.id,
            schema_name=record.schema_name,
            category=category,
            counterpart_id=counterpart_id,
        )
