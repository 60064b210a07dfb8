"""
Pocket Writer Backend — Network Utilities
==========================================

What:  Host-side helpers for the server's own network identity.
How:   Plain `socket` calls; nothing here needs a third-party library.
Who:   Used by the server-info routes (address advertisement), by the
       lifespan hook (startup logging) and by __main__ (port selection).

Address Selection:
    Clients that reach the server through "0.0.0.0" or a loopback alias
    need a concrete address they can dial. The preferred address is the
    first local IPv4 address that is neither loopback (127.x) nor
    link-local (169.254.x), falling back to 127.0.0.1.
"""

import logging
import socket
from typing import List, Optional

logger = logging.getLogger(__name__)

LOOPBACK_FALLBACK = "127.0.0.1"

# Never contacted: connect() on a UDP socket only selects the outbound route.
_ROUTE_PROBE_TARGET = ("8.8.8.8", 80)


def get_outbound_ipv4() -> Optional[str]:
    """Return the IPv4 address the OS would use for outbound traffic."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(_ROUTE_PROBE_TARGET)
            return s.getsockname()[0]
    except OSError as e:
        logger.debug("Could not determine outbound address: %s", e)
        return None


def get_all_local_ip_addresses() -> List[str]:
    """
    List the host's non-loopback IPv4 addresses.

    Combines the addresses registered for the hostname with the outbound
    route address. Always returns at least one entry (127.0.0.1).
    """
    addresses: List[str] = []

    try:
        _, _, host_addresses = socket.gethostbyname_ex(socket.gethostname())
        for address in host_addresses:
            if not address.startswith("127.") and address not in addresses:
                addresses.append(address)
    except OSError as e:
        logger.error("Error determining local IP addresses: %s", e)

    outbound = get_outbound_ipv4()
    # The outbound route address always leads, even when the hostname lookup listed it later
    if outbound and not outbound.startswith("127."):
        if outbound in addresses:
            addresses.remove(outbound)
        addresses.insert(0, outbound)

    if not addresses:
        addresses.append(LOOPBACK_FALLBACK)

    return addresses


def get_preferred_address(addresses: Optional[List[str]] = None) -> str:
    """First address that is neither loopback nor link-local, else 127.0.0.1."""
    if addresses is None:
        addresses = get_all_local_ip_addresses()
    for address in addresses:
        if not address.startswith("127.") and not address.startswith("169.254"):
            return address
    return LOOPBACK_FALLBACK


def get_hostname() -> str:
    return socket.gethostname()


def get_canonical_hostname() -> str:
    try:
        return socket.getfqdn()
    except OSError:
        return get_hostname()


def find_available_port(start_port: int, end_port: int, host: str = "0.0.0.0") -> Optional[int]:
    """
    Return the first port in [start_port, end_port] that can be bound on `host`.

    Returns None when the whole range is taken. There is an unavoidable race
    between this check and uvicorn binding the port.
    """
    for port in range(start_port, end_port + 1):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
            logger.info("Found available port: %d", port)
            return port
        except OSError:
            logger.debug("Port %d is in use, trying next", port)

    logger.error("No available ports found in range %d-%d", start_port, end_port)
    return None


def log_network_interfaces(port: int) -> None:
    """Log every address and access URL the server can be reached on."""
    try:
        addresses = get_all_local_ip_addresses()
        logger.info("Host: %s", get_hostname())
        for address in addresses:
            logger.info("  - Address: %s → http://%s:%d/", address, address, port)
        logger.info("Preferred address for clients: %s", get_preferred_address(addresses))
    except Exception as e:
        logger.error("Error logging network interfaces: %s", e)
