import sys

from loguru import logger

from sanctionlink.api import create_app
from sanctionlink.client.http_client import OpenSanctionsClient
from sanctionlink.config import settings

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

if not settings.opensanctions_api_key:
    logger.warning("No OpenSanctions API key configured, requests will be unauthenticated")

logger.info(f"Initializing OpenSanctions client for {settings.opensanctions_base_url}")
client = OpenSanctionsClient(
    api_key=settings.opensanctions_api_key,
    base_url=settings.opensanctions_base_url,
    min_request_interval=settings.min_request_interval,
    timeout=settings.request_timeout,
    adjacent_limit=settings.adjacent_limit,
)
app = create_app(client=client)
