"""Relationship enrichment: extraction, classification, caption resolution and aggregation."""

from sanctionlink.enrichment.aggregator import RelationshipAggregator
from sanctionlink.enrichment.cache import CaptionCache
from sanctionlink.enrichment.classifier import RELATIONSHIP_RULES, RelationshipClassifier
from sanctionlink.enrichment.resolver import CaptionResolver

__all__ = [
    "CaptionCache",
    "CaptionResolver",
    "RELATIONSHIP_RULES",
    "RelationshipAggregator",
    "RelationshipClassifier",
]
