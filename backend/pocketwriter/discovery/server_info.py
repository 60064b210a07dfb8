"""
Discovery Client — Server Self-Description Lookups
===================================================

Fetches /api/server-info/detailed and /api/server-info from a backend and
parses them with the same schemas the server uses to produce them.

Every failure (transport error, non-2xx status, non-JSON body, schema
mismatch) is logged at DEBUG and reported as None, so callers can simply
fall through to their next strategy.
"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as SchemaError

from pocketwriter.schemas.system import DetailedServerInfoResponse, ServerInfoResponse

logger = logging.getLogger(__name__)

DETAILED_PATH = "/api/server-info/detailed"
BASIC_PATH = "/api/server-info"
PING_PATH = "/api/ping"

UNSPECIFIED_ADDRESS = "0.0.0.0"

M = TypeVar("M", bound=BaseModel)


async def _fetch(client: httpx.AsyncClient, path: str, model: Type[M]) -> Optional[M]:
    try:
        response = await client.get(path)
    except httpx.HTTPError as e:
        logger.debug("GET %s failed: %s", path, e)
        return None

    if not response.is_success:
        logger.debug("GET %s returned %d", path, response.status_code)
        return None

    try:
        return model.model_validate(response.json())
    except (ValueError, SchemaError) as e:
        logger.debug("GET %s returned an unusable body: %s", path, e)
        return None


async def fetch_detailed_info(client: httpx.AsyncClient) -> Optional[DetailedServerInfoResponse]:
    return await _fetch(client, DETAILED_PATH, DetailedServerInfoResponse)


async def fetch_basic_info(client: httpx.AsyncClient) -> Optional[ServerInfoResponse]:
    return await _fetch(client, BASIC_PATH, ServerInfoResponse)


def usable_address(address: Optional[str]) -> Optional[str]:
    """
    The address itself, or None when it cannot be dialed: empty, the
    unspecified 0.0.0.0, or not shaped like a host name.
    """
    if not address:
        return None
    address = address.strip()
    if address in ("", UNSPECIFIED_ADDRESS):
        return None
    if any(ch.isspace() for ch in address) or "/" in address:
        return None
    return address
