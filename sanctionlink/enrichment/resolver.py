"""Resolution of entity identifiers to display captions."""

import asyncio
import logging
from typing import Iterable

from sanctionlink.client.base import EntityClient
from sanctionlink.client.errors import SanctionsAPIError

from .cache import CaptionCache

logger = logging.getLogger(__name__)


class CaptionResolver:
    """Fills a caption cache by fetching entities whose captions are unknown."""

    def __init__(self, client: EntityClient, max_concurrent: int = 8):
        """Initialize resolver with an API client.

        Args:
            client: Client used for follow-up entity fetches
            max_concurrent: Maximum lookups in flight at once
        """
        self.client = client
        self.max_concurrent = max(1, max_concurrent)

    async def resolve_many(self, entity_ids: Iterable[str], cache: CaptionCache) -> CaptionCache:
        """Resolve every identifier missing from the cache, in place.

        Each missing identifier is fetched exactly once. A failed lookup leaves
        the identifier unresolved and never affects the other lookups.

        Args:
            entity_ids: Identifiers to resolve
            cache: Cache mutated with the resolved captions

        Returns:
            The same cache, for chaining
        """
        pending = list(dict.fromkeys(i for i in entity_ids if i and i not in cache))
        if not pending:
            return cache

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def lookup(entity_id: str) -> tuple[str, str | None]:
            async with semaphore:
                try:
                    entity = await self.client.get_entity(entity_id)
                except SanctionsAPIError as e:
                    logger.debug(f"Caption lookup failed for {entity_id}: {e}")
                    return entity_id, None
            return entity_id, entity.caption or None

        results = await asyncio.gather(*(lookup(entity_id) for entity_id in pending))
        for entity_id, caption in results:
            cache.add(entity_id, caption)

        resolved = sum(1 for _, caption in results if caption)
        logger.debug(f"Resolved {resolved}/{len(pending)} captions")
        return cache
