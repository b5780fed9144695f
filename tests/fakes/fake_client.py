from typing import Any, Dict, List

from sanctionlink.client.base import EntityClient
from sanctionlink.client.errors import NotFoundError, SanctionsAPIError
from sanctionlink.domain.entity import (
    ConnectionStatus,
    EntityRecord,
    SearchParams,
    SearchResponse,
    SearchTotal,
)


class FakeEntityClient(EntityClient):
    """Fake API client serving predefined entities and adjacency listings."""

    def __init__(
        self,
        entities: Dict[str, EntityRecord] | None = None,
        adjacent: Dict[str, List[EntityRecord]] | None = None,
        errors: Dict[str, SanctionsAPIError] | None = None,
    ) -> None:
        self._entities = entities or {}
        self._adjacent = adjacent or {}
        self._errors = errors or {}
        self.entity_calls: List[str] = []
        self.adjacent_calls: List[str] = []
        self.closed = False

    async def search(self, params: SearchParams) -> SearchResponse:
        results = [
            entity
            for entity in self._entities.values()
            if params.query.lower() in entity.caption.lower()
        ]
        return SearchResponse(
            total=SearchTotal(value=len(results)),
            limit=params.limit,
            offset=params.offset,
            results=results[params.offset : params.offset + params.limit],
        )

    async def get_entity(self, entity_id: str) -> EntityRecord:
        self.entity_calls.append(entity_id)
        if entity_id in self._errors:
            raise self._errors[entity_id]
        if entity_id not in self._entities:
            raise NotFoundError("Entity not found in OpenSanctions database.", status_code=404)
        return self._entities[entity_id]

    async def get_adjacent(self, entity_id: str) -> List[EntityRecord]:
        self.adjacent_calls.append(entity_id)
        return self._adjacent.get(entity_id, [])

    async def get_catalog(self) -> Any:
        return {"datasets": [{"name": "default"}]}

    async def test_connection(self) -> ConnectionStatus:
        return ConnectionStatus(success=True, total_entities=len(self._entities))

    async def aclose(self) -> None:
        self.closed = True
