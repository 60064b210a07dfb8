"""
Discovery Client — Network Diagnostics
=======================================

What:  Builds a DiagnosticsReport for one backend endpoint.
How:   A handful of independent checks, run one after another:

    internet_available   TCP connect to the internet check target (1.1.1.1:53)
    host_checks          echo-port host checks plus "host:port" port check
    server_accessible    GET /api/ping == 200
    api_status & co.     server-info detailed, falling back to basic
    device_ip            outbound IPv4 address, "Unknown" if none

No check raises; each failure is recorded in the report instead.
"""

import logging
from typing import Callable, Optional

import httpx

from pocketwriter.discovery.candidates import subnet_prefix
from pocketwriter.discovery.models import BackendEndpoint, DiagnosticsReport
from pocketwriter.discovery.prober import ReachabilityProber
from pocketwriter.discovery.server_info import PING_PATH, fetch_basic_info, fetch_detailed_info
from pocketwriter.discovery.settings import EMULATOR_HOST, DiscoverySettings
from pocketwriter.services.network_service import get_outbound_ipv4

logger = logging.getLogger(__name__)


class NetworkDiagnostics:
    def __init__(
        self,
        prober: ReachabilityProber,
        settings: DiscoverySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        device_ip_provider: Callable[[], Optional[str]] = get_outbound_ipv4,
    ):
        self.prober = prober
        self.settings = settings
        self._transport = transport
        self._device_ip_provider = device_ip_provider

    async def run(self, endpoint: BackendEndpoint) -> DiagnosticsReport:
        host, port = endpoint.host, endpoint.port
        report = DiagnosticsReport(device_ip=self._device_ip_provider() or "Unknown")

        report.internet_available = await self.prober.is_reachable(
            self.settings.internet_check_host,
            self.settings.internet_check_port,
            self.settings.probe_timeout,
        )

        # ── Host checks ───────────────────────────────────────────────────
        hosts = [host]
        if host == EMULATOR_HOST:
            hosts.append("localhost")
            prefix = subnet_prefix(report.device_ip)
            if prefix is not None:
                hosts.append(f"{prefix}.1")
        for candidate in hosts:
            report.host_checks[candidate] = await self.prober.is_host_reachable(
                candidate, self.settings.host_check_timeout
            )
        report.host_checks[f"{host}:{port}"] = await self.prober.is_reachable(
            host, port, self.settings.probe_timeout
        )

        # ── Server ────────────────────────────────────────────────────────
        async with httpx.AsyncClient(
            base_url=endpoint.base_url,
            timeout=self.settings.info_timeout,
            transport=self._transport,
        ) as client:
            await self._check_ping(client, report)
            await self._check_server_info(client, report)

        logger.info(
            "Diagnostics for %s: server_accessible=%s api_status=%s",
            endpoint, report.server_accessible, report.api_status,
        )
        return report

    async def _check_ping(self, client: httpx.AsyncClient, report: DiagnosticsReport) -> None:
        try:
            response = await client.get(PING_PATH)
        except httpx.HTTPError as e:
            report.server_message = f"Error: {str(e) or type(e).__name__}"
            return

        report.server_accessible = response.status_code == 200
        if report.server_accessible:
            report.server_message = f"Server responded with code {response.status_code}"
        else:
            report.server_message = f"Server returned error code: {response.status_code}"

    async def _check_server_info(self, client: httpx.AsyncClient, report: DiagnosticsReport) -> None:
        detailed = await fetch_detailed_info(client)
        if detailed is not None:
            report.api_status = "OK"
            report.preferred_address = detailed.preferred_address
            report.server_addresses = detailed.available_addresses
            report.access_urls = detailed.access_urls
            return

        basic = await fetch_basic_info(client)
        if basic is not None:
            report.api_status = "OK (basic endpoint)"
            report.preferred_address = basic.preferred_address
            report.server_addresses = basic.available_addresses
            return

        report.api_status = "Error: server-info unavailable"
