"""Extraction of entity references from property values.

A property value is either a bare identifier string or an embedded reference
object. This module is the single place that collapses the two forms into a
plain identifier. None of these functions raise: malformed values are treated
as absent.
"""

from typing import Any, Iterable

from pydantic import ValidationError

from sanctionlink.domain.entity import EmbeddedReference, EntityRecord

from .cache import CaptionCache


def as_reference(value: Any) -> str | EmbeddedReference | None:
    """Interpret a raw property value.

    Args:
        value: A single value from a property list

    Returns:
        The identifier string, an EmbeddedReference, or None if unusable
    """
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, EmbeddedReference):
        return value
    if isinstance(value, EntityRecord):
        return EmbeddedReference(
            id=value.id,
            caption=value.caption or None,
            schema=value.schema_name or None,
            properties=value.properties,
        )
    if isinstance(value, dict):
        try:
            reference = EmbeddedReference.model_validate(value)
        except ValidationError:
            return None
        return reference if reference.id.strip() else None
    return None


def extract_entity_id(value: Any) -> str | None:
    """Return the identifier carried by a property value, if any."""
    reference = as_reference(value)
    if isinstance(reference, EmbeddedReference):
        return reference.id
    return reference


def extract_first_target(
    values: Iterable[Any] | None,
    cache: CaptionCache | None = None,
    exclude: str | None = None,
) -> str | None:
    """Return the first resolvable identifier in a property value list.

    Embedded captions seen on the way are recorded into the cache.

    Args:
        values: Property value list
        cache: Caption cache receiving embedded captions
        exclude: Identifier to skip over, such as the anchor itself

    Returns:
        The first identifier other than ``exclude``, or None
    """
    if not isinstance(values, (list, tuple)):
        return None

    for value in values:
        reference = as_reference(value)
        if reference is None:
            continue
        if isinstance(reference, EmbeddedReference):
            if cache is not None:
                cache.add(reference.id, reference.caption)
            entity_id = reference.id
        else:
            entity_id = reference
        if entity_id != exclude:
            return entity_id
    return None


def contains_entity(values: Iterable[Any] | None, entity_id: str) -> bool:
    """Check whether a property value list references the given identifier."""
    if not isinstance(values, (list, tuple)):
        return False
    return any(extract_entity_id(value) == entity_id for value in values)


def collect_embedded_captions(properties: dict[str, list[Any]], cache: CaptionCache) -> None:
    """Record every embedded caption in a property bag, descending into nested records."""
    for values in properties.values():
        if not isinstance(values, (list, tuple)):
            continue
        for value in values:
            reference = as_reference(value)
            if isinstance(reference, EmbeddedReference):
                cache.add(reference.id, reference.caption)
                collect_embedded_captions(reference.properties, cache)


def extract_nested_entities(properties: dict[str, list[Any]] | None) -> list[EntityRecord]:
    """Collect embedded references that are full records (identifier and schema).

    Recovers relationship records the API embedded inline in an entity instead of
    exposing them through the adjacency endpoint. Duplicate identifiers are kept
    once, in first-seen order.
    """
    if not isinstance(properties, dict):
        return []

    nested: list[EntityRecord] = []
    seen: set[str] = set()
    for values in properties.values():
        if not isinstance(values, (list, tuple)):
            continue
        for value in values:
            reference = as_reference(value)
            if not isinstance(reference, EmbeddedReference) or not reference.schema_name:
                continue
            if reference.id in seen:
                continue
            try:
                record = EntityRecord.model_validate(
                    value if isinstance(value, dict) else reference.model_dump(by_alias=True)
                )
            except ValidationError:
                continue
            seen.add(reference.id)
            nested.append(record)
    return nested
