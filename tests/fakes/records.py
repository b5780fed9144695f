from typing import Any

from sanctionlink.domain.entity import EntityRecord


def make_record(
    entity_id: str, schema: str, caption: str = "", **properties: list[Any]
) -> EntityRecord:
    """Build an entity record the way the API returns it."""
    return EntityRecord.model_validate(
        {"id": entity_id, "schema": schema, "caption": caption, "properties": properties}
    )
