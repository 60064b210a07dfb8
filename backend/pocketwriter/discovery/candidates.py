"""
Discovery Client — Candidate Generators
========================================

What:  Ordered, lazy, de-duplicated streams of hosts and ports to try.
How:   Plain generators. The resolver stops pulling as soon as it finds a
       backend, so the full host × port product is never built.

Host order:
    1. saved host
    2. emulator alias 10.0.2.2
    3. known hosts (DISCOVERY_KNOWN_HOSTS)
    4. device subnet: .1, .254, .2 .. .10 (skipped for emulator/unknown IPs)
    5. private-prefix table, each prefix expanded to .1 .. .N

Port order:
    1. saved port
    2. common ports
    3. range_start .. range_end (when range scanning is on)
"""

import ipaddress
import logging
from typing import Iterable, Iterator, Optional, TypeVar

from pocketwriter.discovery.settings import EMULATOR_HOST, EMULATOR_PREFIX, DiscoverySettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUBNET_SUFFIXES = (1, 254) + tuple(range(2, 11))


def _unique(items: Iterable[T]) -> Iterator[T]:
    seen = set()
    for item in items:
        if item not in seen:
            seen.add(item)
            yield item


def _parse_ipv4(value: Optional[str]) -> Optional[ipaddress.IPv4Address]:
    if not value:
        return None
    try:
        return ipaddress.IPv4Address(value.strip())
    except ValueError:
        return None


def subnet_prefix(device_ip: Optional[str]) -> Optional[str]:
    """'192.168.1.37' → '192.168.1'; None for malformed or emulator addresses."""
    address = _parse_ipv4(device_ip)
    if address is None:
        return None
    text = str(address)
    if text.startswith(EMULATOR_PREFIX):
        return None
    return text.rsplit(".", 1)[0]


def _raw_hosts(
    saved_host: Optional[str], device_ip: Optional[str], settings: DiscoverySettings
) -> Iterator[str]:
    if saved_host:
        yield saved_host
    yield EMULATOR_HOST
    yield from settings.known_hosts_list

    prefix = subnet_prefix(device_ip)
    if prefix is not None:
        for suffix in SUBNET_SUFFIXES:
            yield f"{prefix}.{suffix}"

    for entry in settings.private_prefixes_list:
        if _parse_ipv4(entry) is not None:
            yield entry
            continue
        for suffix in range(1, settings.suffixes_per_prefix + 1):
            yield f"{entry}.{suffix}"


def generate_host_candidates(
    saved_host: Optional[str],
    device_ip: Optional[str],
    settings: DiscoverySettings,
) -> Iterator[str]:
    """Yield host candidates in priority order, each at most once."""
    return _unique(_raw_hosts(saved_host, device_ip, settings))


def _raw_ports(saved_port: Optional[int], settings: DiscoverySettings) -> Iterator[int]:
    if saved_port is not None:
        yield saved_port
    yield from settings.common_ports_list
    if settings.port_range_scan:
        yield from range(settings.port_range_start, settings.port_range_end + 1)


def generate_port_candidates(
    saved_port: Optional[int], settings: DiscoverySettings
) -> Iterator[int]:
    """Yield valid TCP ports in priority order, each at most once."""
    return _unique(p for p in _raw_ports(saved_port, settings) if 1 <= p <= 65535)
