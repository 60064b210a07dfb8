"""
Server launcher: ``python -m pocketwriter`` or ``pocketwriter-server``.

Uses BACKEND_PORT when set. Otherwise it takes the first free port in
PORT_SEARCH_START..PORT_SEARCH_END, falling back to DEFAULT_PORT when the
whole range is busy.
"""

import logging

import uvicorn

from pocketwriter.config import settings
from pocketwriter.services.network_service import find_available_port

logger = logging.getLogger(__name__)


def select_port() -> int:
    if settings.backend_port is not None:
        return settings.backend_port

    port = find_available_port(settings.port_search_start, settings.port_search_end)
    if port is None:
        logger.warning(
            "No free port in %d-%d, falling back to %d",
            settings.port_search_start,
            settings.port_search_end,
            settings.default_port,
        )
        return settings.default_port
    return port


def main() -> None:
    port = select_port()
    # server-info reports settings.effective_port, so pin the chosen port
    settings.backend_port = port

    uvicorn.run(
        "pocketwriter.main:app",
        host=settings.backend_host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
