from typing import Any

from fastapi import APIRouter, HTTPException, Query
from loguru import logger

from sanctionlink.client.base import EntityClient
from sanctionlink.client.errors import SanctionsAPIError
from sanctionlink.config import settings
from sanctionlink.domain.entity import ConnectionStatus, EntityRecord, SearchParams, SearchResponse
from sanctionlink.domain.relationships import EnrichedEntity
from sanctionlink.enrichment import RelationshipAggregator

_PASSTHROUGH_STATUSES = {400, 401, 403, 404, 429}


def to_http_exception(error: SanctionsAPIError) -> HTTPException:
    """Translate a client error into an HTTPException for the API caller."""
    status_code = error.status_code if error.status_code in _PASSTHROUGH_STATUSES else 502
    return HTTPException(
        status_code=status_code,
        detail={"kind": error.kind, "message": error.message},
    )


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _create_search_endpoint(client: EntityClient):
    """Create the search endpoint handler."""

    async def search(
        q: str = "",
        schema: str | None = None,
        dataset: str | None = None,
        topics: str | None = None,
        countries: str | None = None,
        limit: int = Query(default=settings.search_limit, ge=1, le=500),
        offset: int = Query(default=0, ge=0),
    ) -> SearchResponse:
        params = SearchParams(
            query=q,
            schema=schema,
            dataset=dataset,
            topics=_split(topics),
            countries=_split(countries),
            limit=limit,
            offset=offset,
        )
        try:
            return await client.search(params)
        except SanctionsAPIError as e:
            logger.error(f"Search for '{q}' failed: {e}")
            raise to_http_exception(e) from e

    return search


def _create_entity_endpoint(aggregator: RelationshipAggregator):
    """Create the enriched entity endpoint handler."""

    async def get_entity(entity_id: str) -> EnrichedEntity:
        try:
            return await aggregator.fetch_with_relationships(entity_id)
        except SanctionsAPIError as e:
            logger.error(f"Enrichment of {entity_id} failed: {e}")
            raise to_http_exception(e) from e

    return get_entity


def _create_adjacent_endpoint(client: EntityClient):
    async def get_adjacent(entity_id: str) -> list[EntityRecord]:
        return await client.get_adjacent(entity_id)

    return get_adjacent


def _create_catalog_endpoint(client: EntityClient):
    async def get_catalog() -> Any:
        try:
            return await client.get_catalog()
        except SanctionsAPIError as e:
            logger.error(f"Catalog fetch failed: {e}")
            raise to_http_exception(e) from e

    return get_catalog


def _create_health_endpoint(client: EntityClient):
    async def health() -> ConnectionStatus:
        return await client.test_connection()

    return health


def get_endpoints_router(
    *,
    client: EntityClient,
    aggregator: RelationshipAggregator,
) -> APIRouter:
    router = APIRouter()

    router.get("/search", response_model=SearchResponse)(_create_search_endpoint(client))
    router.get("/entities/{entity_id}", response_model=EnrichedEntity)(
        _create_entity_endpoint(aggregator)
    )
    router.get("/entities/{entity_id}/adjacent", response_model=list[EntityRecord])(
        _create_adjacent_endpoint(client)
    )
    router.get("/catalog")(_create_catalog_endpoint(client))
    router.get("/health", response_model=ConnectionStatus)(_create_health_endpoint(client))

    return router
