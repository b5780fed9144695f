from typing import Any, Protocol

from sanctionlink.domain.entity import ConnectionStatus, EntityRecord, SearchParams, SearchResponse


class EntityClient(Protocol):
    async def search(self, params: SearchParams) -> SearchResponse:
        """Search entities matching the given parameters."""
        ...

    async def get_entity(self, entity_id: str) -> EntityRecord:
        """Fetch a single entity record, raising a taxonomy error on failure."""
        ...

    async def get_adjacent(self, entity_id: str) -> list[EntityRecord]:
        """Fetch relationship records adjacent to an entity.

        Best-effort: returns an empty list instead of raising.
        """
        ...

    async def get_catalog(self) -> Any:
        """Fetch the raw dataset catalog."""
        ...

    async def test_connection(self) -> ConnectionStatus:
        """Check that the API is reachable with the current credentials."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
