"""Async HTTP client for the OpenSanctions API."""

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger
from pydantic import ValidationError

from sanctionlink.client.errors import (
    NetworkUnreachableError,
    SanctionsAPIError,
    UnknownFailureError,
    error_for_status,
)
from sanctionlink.client.rate_limiter import RateLimiter
from sanctionlink.domain.entity import ConnectionStatus, EntityRecord, SearchParams, SearchResponse


def _error_detail(response: httpx.Response) -> str:
    """Pull a human-readable detail out of an error response body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase or "Unknown error"

    if isinstance(data, dict):
        detail = data.get("message") or data.get("detail")
        if detail:
            return str(detail)
    return response.reason_phrase or "Unknown error"


def flatten_adjacent(payload: Any) -> list[Any]:
    """Flatten the adjacency payload into one sequence of raw records.

    Handles the grouped backend shape ``{"adjacent": {prop: {"results": [...]}}}``
    as well as a flat list or a ``{"results": [...]}`` object. Any other shape
    yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []

    grouped = payload.get("adjacent")
    if isinstance(grouped, dict):
        records = []
        for group in grouped.values():
            if isinstance(group, dict) and isinstance(group.get("results"), list):
                records.extend(group["results"])
            elif isinstance(group, list):
                records.extend(group)
        return records

    results = payload.get("results")
    if isinstance(results, list):
        return results
    return []


class OpenSanctionsClient:
    """Rate-limited, optionally authenticated client for the OpenSanctions API."""

    def __init__(
        self,
        api_key: str = "",
        *,
        base_url: str = "https://api.opensanctions.org",
        min_request_interval: float = 0.1,
        timeout: float = 10.0,
        adjacent_limit: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: OpenSanctions API key; empty for unauthenticated requests
            base_url: API base URL
            min_request_interval: Minimum seconds between request issue times
            timeout: Transport timeout in seconds
            adjacent_limit: Optional ``limit`` sent to the adjacency endpoint
            transport: Optional httpx transport, mainly for tests
        """
        self.api_key = api_key
        self.adjacent_limit = adjacent_limit
        self.rate_limiter = RateLimiter(min_interval=min_request_interval)
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "OpenSanctionsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def update_api_key(self, api_key: str) -> None:
        """Replace the API key used by subsequent requests."""
        self.api_key = api_key

    def _auth_headers(self) -> dict[str, str]:
        if self.api_key:
            return {"Authorization": f"ApiKey {self.api_key}"}
        return {}

    async def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        await self.rate_limiter.wait()

        query = {k: v for k, v in (params or {}).items() if v is not None and v != ""}
        logger.debug(f"GET {path} {query}")

        try:
            response = await self._client.get(path, params=query, headers=self._auth_headers())
        except httpx.TransportError as e:
            raise NetworkUnreachableError(
                "Network error: Could not connect to OpenSanctions. "
                "Check your internet connection."
            ) from e
        except httpx.RequestError as e:
            raise UnknownFailureError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            raise error_for_status(response.status_code, _error_detail(response))

        try:
            return response.json()
        except ValueError as e:
            raise UnknownFailureError(
                f"Invalid JSON response from {path}", status_code=response.status_code
            ) from e

    async def search(self, params: SearchParams) -> SearchResponse:
        query: dict[str, Any] = {
            "q": params.query,
            "limit": str(params.limit),
            "offset": str(params.offset),
            "schema": params.schema_name,
            "dataset": params.dataset,
        }
        if params.topics:
            query["topics"] = ",".join(params.topics)
        if params.countries:
            query["countries"] = ",".join(params.countries)

        data = await self._request("/search/default", query)
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise UnknownFailureError(f"Unexpected search response: {e}") from e

    async def get_entity(self, entity_id: str) -> EntityRecord:
        data = await self._request(f"/entities/{quote(entity_id, safe='')}")
        try:
            return EntityRecord.model_validate(data)
        except ValidationError as e:
            raise UnknownFailureError(f"Unexpected entity response for {entity_id}: {e}") from e

    async def get_adjacent(self, entity_id: str) -> list[EntityRecord]:
        """Fetch and flatten relationship records adjacent to an entity.

        Adjacency is best-effort: any failure is logged and yields an empty list.
        """
        try:
            data = await self._request(
                f"/entities/{quote(entity_id, safe='')}/adjacent",
                {"limit": self.adjacent_limit},
            )
        except SanctionsAPIError as e:
            logger.warning(f"Could not fetch adjacent entities for {entity_id}: {e}")
            return []

        records = []
        for raw in flatten_adjacent(data):
            try:
                records.append(EntityRecord.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"Skipping malformed adjacent record for {entity_id}: {e}")
        return records

    async def get_catalog(self) -> Any:
        return await self._request("/catalog")

    async def test_connection(self) -> ConnectionStatus:
        try:
            result = await self.search(SearchParams(query="test", limit=1))
        except SanctionsAPIError as e:
            logger.error(f"API connection test failed: {e}")
            return ConnectionStatus(success=False, error=str(e))
        return ConnectionStatus(success=True, total_entities=result.total.value)
