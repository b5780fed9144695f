from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from sanctionlink.api.endpoints import get_endpoints_router
from sanctionlink.client.base import EntityClient
from sanctionlink.enrichment import RelationshipAggregator


def create_app(
    *,
    client: EntityClient,
    aggregator: RelationshipAggregator | None = None,
) -> FastAPI:
    """Create FastAPI app."""
    aggregator = aggregator or RelationshipAggregator(client)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await client.aclose()

    app = FastAPI(lifespan=lifespan)
    app.include_router(router=get_endpoints_router(client=client, aggregator=aggregator))

    return app
