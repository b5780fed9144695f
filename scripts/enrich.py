"""CLI for searching OpenSanctions and enriching an entity with its relationships"""

import argparse
import asyncio
import sys

from loguru import logger

from sanctionlink.client.errors import SanctionsAPIError
from sanctionlink.client.http_client import OpenSanctionsClient
from sanctionlink.config import settings
from sanctionlink.domain.entity import SearchParams
from sanctionlink.enrichment import RelationshipAggregator


async def main(
    entity_id: str | None,
    query: str | None,
    schema: str | None,
    limit: int,
    api_key: str,
) -> str:
    async with OpenSanctionsClient(
        api_key=api_key,
        base_url=settings.opensanctions_base_url,
        min_request_interval=settings.min_request_interval,
        timeout=settings.request_timeout,
        adjacent_limit=settings.adjacent_limit,
    ) as client:
        if entity_id:
            aggregator = RelationshipAggregator(client)
            enriched = await aggregator.fetch_with_relationships(entity_id)
            return enriched.model_dump_json(by_alias=True, indent=2)

        results = await client.search(SearchParams(query=query or "", schema=schema, limit=limit))
        return results.model_dump_json(by_alias=True, indent=2)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--entity-id", type=str, help="Entity to enrich with relationships")
    target.add_argument("--query", type=str, help="Free-text search query")
    parser.add_argument("--schema", type=str, required=False, help="Schema filter for search")
    parser.add_argument(
        "--limit",
        type=int,
        required=False,
        help="Maximum number of search results",
        default=settings.search_limit,
    )
    parser.add_argument(
        "--api-key",
        type=str,
        required=False,
        help="OpenSanctions API key",
        default=settings.opensanctions_api_key,
    )

    args = parser.parse_args()
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    try:
        output = asyncio.run(
            main(
                entity_id=args.entity_id,
                query=args.query,
                schema=args.schema,
                limit=args.limit,
                api_key=args.api_key,
            )
        )
    except SanctionsAPIError as e:
        logger.error(f"{e.kind}: {e.message}")
        sys.exit(1)

    print(output)
