"""Client for the upstream NASA APOD API."""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from astrovista.config import settings
from astrovista.errors import UpstreamError
from astrovista.models.apod import Apod

logger = logging.getLogger(__name__)


async def fetch_apod(api_key: str) -> Apod:
    """Fetch today's APOD from the NASA API using the given key.

    Raises UpstreamError on transport failures, non-200 responses, or a
    payload that doesn't look like an APOD record.
    """
    try:
        async with httpx.AsyncClient(timeout=settings.upstream_timeout) as client:
            resp = await client.get(settings.nasa_api_url, params={"api_key": api_key})
    except httpx.HTTPError as e:
        logger.warning("NASA APOD API request failed: %s", e)
        raise UpstreamError()

    if resp.status_code != 200:
        logger.warning("NASA APOD API returned %d", resp.status_code)
        raise UpstreamError()

    try:
        return Apod.model_validate(resp.json())
    except (ValueError, PydanticValidationError) as e:
        logger.warning("Unexpected NASA APOD API payload: %s", e)
        raise UpstreamError()
