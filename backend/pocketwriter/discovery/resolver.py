"""
Discovery Client — Backend Resolver
====================================

What:  Finds a reachable backend and persists where it is.
How:   Fast path on the saved pair, then a lazy scan over host × port
       candidates, then asks the first responsive server which address
       clients should really use.
Who:   BackendConnectionManager.discover() and the `discover` CLI command.

Resolution Flow:
    ┌────────────┐ reachable ┌──────────────────────────────┐
    │ saved pair │──────────▶│ persist (fresh resolved_at)  │
    └────────────┘           └──────────────────────────────┘
          │ not reachable
          ▼
    ┌────────────────┐ up  ┌────────────────┐ open ┌─────────────────┐
    │ host candidate │────▶│ port candidate │─────▶│ server-info:    │
    │ (echo check)   │     │ (TCP probe)    │      │ detailed→basic  │
    └────────────────┘     └────────────────┘      │ →dialed host    │
                                                   └────────┬────────┘
                                                            ▼
                                                        persist

Failure model:
    Nothing crosses this boundary as an exception. Probe errors are absorbed
    by the prober, bad server-info falls through, and ConfigStoreError turns
    into DiscoveryResult(success=False, store_failed=True).

Single-flight:
    The in-progress flag is tested and set with no await in between, so on
    one event loop a second caller is turned away immediately. It does not
    queue and issues no probes.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from pocketwriter.discovery.candidates import generate_host_candidates, generate_port_candidates
from pocketwriter.discovery.config_store import ConfigStore
from pocketwriter.discovery.models import BackendEndpoint, DiscoveryResult
from pocketwriter.discovery.prober import ReachabilityProber
from pocketwriter.discovery.server_info import fetch_basic_info, fetch_detailed_info, usable_address
from pocketwriter.discovery.settings import DiscoverySettings
from pocketwriter.exceptions import ConfigStoreError
from pocketwriter.services.network_service import get_outbound_ipv4

logger = logging.getLogger(__name__)

ALREADY_RUNNING_MESSAGE = "Discovery already in progress"


class BackendResolver:
    def __init__(
        self,
        prober: ReachabilityProber,
        store: ConfigStore,
        settings: DiscoverySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        device_ip_provider: Callable[[], Optional[str]] = get_outbound_ipv4,
    ):
        self.prober = prober
        self.store = store
        self.settings = settings
        self._transport = transport
        self._device_ip_provider = device_ip_provider
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def resolve_backend(self) -> DiscoveryResult:
        """
        Run one discovery pass.

        Returns:
            DiscoveryResult; success=True with the persisted endpoint, or
            success=False with a human-readable reason.
        """
        if self._in_progress:
            logger.info(ALREADY_RUNNING_MESSAGE)
            return DiscoveryResult(success=False, message=ALREADY_RUNNING_MESSAGE)

        self._in_progress = True
        try:
            return await self._resolve()
        finally:
            self._in_progress = False

    async def _resolve(self) -> DiscoveryResult:
        saved = await self.store.load()
        probes = 1

        # ── Fast path ─────────────────────────────────────────────────────
        if await self.prober.is_reachable(saved.host, saved.port, self.settings.probe_timeout):
            logger.info("Saved backend %s is reachable", saved)
            return await self._persist(
                saved.host, saved.port, probes, f"Connected to saved backend {saved}"
            )

        logger.info("Saved backend %s unreachable, scanning candidates", saved)
        device_ip = self._device_ip_provider()
        logger.debug("Device IP: %s", device_ip or "unknown")

        # ── Scan ──────────────────────────────────────────────────────────
        for host in generate_host_candidates(saved.host, device_ip, self.settings):
            probes += 1
            if not await self.prober.is_host_reachable(host, self.settings.host_check_timeout):
                continue

            for port in generate_port_candidates(saved.port, self.settings):
                if host == saved.host and port == saved.port:
                    continue
                probes += 1
                if not await self.prober.is_reachable(host, port, self.settings.probe_timeout):
                    continue

                logger.info("Backend port open at %s:%d", host, port)
                resolved_host = await self._preferred_host(host, port)
                return await self._persist(
                    resolved_host,
                    port,
                    probes,
                    f"Discovered backend at {resolved_host}:{port}",
                )

        logger.warning("No reachable backend found after %d probes", probes)
        return DiscoveryResult(
            success=False,
            message="Could not find a reachable backend on any candidate host",
            probes=probes,
        )

    async def _preferred_host(self, host: str, port: int) -> str:
        """
        Ask the server which address clients should use.

        Detailed endpoint first (preferredAddress), then the basic one (ip).
        An unusable answer from either, or no answer at all, means the
        dialed host is kept.
        """
        async with httpx.AsyncClient(
            base_url=f"http://{host}:{port}",
            timeout=self.settings.info_timeout,
            transport=self._transport,
        ) as client:
            detailed = await fetch_detailed_info(client)
            if detailed is not None and detailed.preferred_address:
                return usable_address(detailed.preferred_address) or host

            basic = await fetch_basic_info(client)
            if basic is not None:
                return usable_address(basic.ip) or host

        logger.debug("No server-info from %s:%d, keeping dialed host", host, port)
        return host

    async def _persist(self, host: str, port: int, probes: int, message: str) -> DiscoveryResult:
        endpoint = BackendEndpoint(host=host, port=port, resolved_at=datetime.now(timezone.utc))
        try:
            await self.store.save(endpoint)
        except ConfigStoreError as e:
            return DiscoveryResult(
                success=False, message=e.message, probes=probes, store_failed=True
            )
        return DiscoveryResult(success=True, endpoint=endpoint, message=message, probes=probes)
