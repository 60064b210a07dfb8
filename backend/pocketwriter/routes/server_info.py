"""
Pocket Writer Backend — Server Self-Description Routes
=======================================================

What:  GET /api/server-info and GET /api/server-info/detailed.
Who:   The discovery client. After it finds an open (host, port) it asks
       the server which address clients should actually use.

The bind address is usually 0.0.0.0, which is not dialable. Both
endpoints therefore also report preferredAddress: the first local address
that is neither loopback nor link-local (127.0.0.1 if there is none).
"""

import logging
import time

from fastapi import APIRouter

from pocketwriter.config import settings
from pocketwriter.schemas.system import DetailedServerInfoResponse, ServerInfoResponse
from pocketwriter.services import network_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/server-info", tags=["Server Info"])


def _epoch_millis() -> int:
    return int(time.time() * 1000)


@router.get(
    "",
    response_model=ServerInfoResponse,
    summary="Bind address, port and preferred client address",
)
async def server_info() -> ServerInfoResponse:
    addresses = network_service.get_all_local_ip_addresses()
    return ServerInfoResponse(
        ip=settings.backend_host,
        port=settings.effective_port,
        timestamp=_epoch_millis(),
        hostname=network_service.get_hostname(),
        available_addresses=addresses,
        preferred_address=network_service.get_preferred_address(addresses),
    )


@router.get(
    "/detailed",
    response_model=DetailedServerInfoResponse,
    summary="Server info plus access URLs",
)
async def detailed_server_info() -> DetailedServerInfoResponse:
    port = settings.effective_port
    addresses = network_service.get_all_local_ip_addresses()
    return DetailedServerInfoResponse(
        timestamp=_epoch_millis(),
        port=port,
        bind_address=settings.backend_host,
        hostname=network_service.get_hostname(),
        canonical_host_name=network_service.get_canonical_hostname(),
        available_addresses=addresses,
        preferred_address=network_service.get_preferred_address(addresses),
        access_urls=[f"http://{address}:{port}/" for address in addresses],
    )
