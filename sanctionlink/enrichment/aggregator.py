"""Aggregation of an entity's relationships into category buckets."""

import asyncio
import logging
from typing import Iterable

from sanctionlink.client.base import EntityClient
from sanctionlink.config import settings
from sanctionlink.domain.entity import EntityRecord
from sanctionlink.domain.relationships import (
    ClassifiedEdge,
    EnrichedEntity,
    RelationshipBuckets,
    ResolvedEdge,
)

from .cache import CaptionCache
from .classifier import RelationshipClassifier
from .references import collect_embedded_captions, extract_nested_entities
from .resolver import CaptionResolver

logger = logging.getLogger(__name__)


def merge_relationship_records(*sources: Iterable[EntityRecord]) -> list[EntityRecord]:
    """Merge record sources into one list, deduplicated by identifier.

    Earlier sources win: a record whose identifier was already seen is dropped.

    Args:
        sources: Record sequences in order of preference

    Returns:
        Merged records in first-seen order
    """
    merged: list[EntityRecord] = []
    seen: set[str] = set()
    for source in sources:
        for record in source:
            if record.id in seen:
                continue
            seen.add(record.id)
            merged.append(record)
    return merged


def seed_captions(
    anchor: EntityRecord, records: Iterable[EntityRecord], cache: CaptionCache
) -> None:
    """Record the anchor's caption and every caption visible in the records."""
    cache.add(anchor.id, anchor.caption)
    collect_embedded_captions(anchor.properties, cache)
    for record in records:
        cache.add(record.id, record.caption)
        collect_embedded_captions(record.properties, cache)


def build_buckets(
    edges: Iterable[ClassifiedEdge], cache: CaptionCache
) -> tuple[RelationshipBuckets, list[ResolvedEdge]]:
    """Fold classified edges into category buckets using cached display names.

    Args:
        edges: Classified edges in processing order
        cache: Caption cache; unresolved counterparts fall back to their raw id

    Returns:
        Tuple of (category buckets, edges with display names)
    """
    buckets = RelationshipBuckets()
    resolved = []
    for edge in edges:
        display_name = cache.display_name(edge.counterpart_id)
        buckets.add(edge.category, display_name)
        resolved.append(ResolvedEdge(**edge.model_dump(), display_name=display_name))
    return buckets, resolved


class RelationshipAggregator:
    """Enriches an entity with its classified, caption-resolved relationships."""

    def __init__(
        self,
        client: EntityClient,
        *,
        classifier: RelationshipClassifier | None = None,
        resolver: CaptionResolver | None = None,
    ):
        self.client = client
        self.classifier = classifier or RelationshipClassifier()
        self.resolver = resolver or CaptionResolver(
            client, max_concurrent=settings.max_concurrent_lookups
        )

    async def fetch_with_relationships(self, entity_id: str) -> EnrichedEntity:
        """Fetch an entity and resolve its one-hop relationships.

        A failure fetching the entity itself propagates; the adjacency fetch and
        caption lookups degrade to fewer or plainer relationship entries.

        Args:
            entity_id: Identifier of the entity to enrich

        Returns:
            EnrichedEntity carrying category buckets and resolved edges
        """
        entity, adjacent = await asyncio.gather(
            self.client.get_entity(entity_id),
            self.client.get_adjacent(entity_id),
        )
        return await self.enrich(entity, adjacent, CaptionCache())

    async def enrich(
        self,
        entity: EntityRecord,
        adjacent: Iterable[EntityRecord],
        cache: CaptionCache,
    ) -> EnrichedEntity:
        """Classify and resolve the relationships of an already-fetched entity.

        Args:
            entity: The anchor entity record
            adjacent: Records returned by the adjacency endpoint
            cache: Caption cache for this enrichment; mutated in place

        Returns:
            EnrichedEntity carrying category buckets and resolved edges
        """
        nested = extract_nested_entities(entity.properties)
        records = merge_relationship_records(adjacent, nested)
        seed_captions(entity, records, cache)

        edges = []
        for record in records:
            edge = self.classifier.classify(record, entity.id, cache)
            if edge is not None:
                edges.append(edge)

        await self.resolver.resolve_many((edge.counterpart_id for edge in edges), cache)
        buckets, resolved_edges = build_buckets(edges, cache)

        logger.info(
            f"Enriched {entity.id}: {len(records)} records "
            f"({len(nested)} embedded), {len(edges)} relationships"
        )

        return EnrichedEntity(
            **entity.model_dump(by_alias=True),
            relationships=buckets,
            edges=resolved_edges,
        )
