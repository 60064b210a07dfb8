"""
Discovery Client — Backend Connection Manager
==============================================

What:  Client-side composition root. Owns one store, prober, resolver,
       diagnostics runner and connection status, and exposes the
       operations the CLI (or any embedding app) needs.
How:   Built explicitly by build_connection_manager(); nothing here is a
       module-level singleton, so several managers can coexist in tests.

State transitions driven here:
    discover()         → DISCOVERING → CONNECTED | DISCONNECTED | ERROR
    test_connection()  → TESTING     → CONNECTED | DISCONNECTED
    A discovery turned away by the single-flight guard leaves the state alone.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaError

from pocketwriter.discovery.config_store import ConfigStore, JsonFileConfigStore
from pocketwriter.discovery.diagnostics import NetworkDiagnostics
from pocketwriter.discovery.models import (
    BackendEndpoint,
    ConnectionState,
    DiagnosticsReport,
    DiscoveryResult,
    Environment,
)
from pocketwriter.discovery.prober import ReachabilityProber
from pocketwriter.discovery.resolver import BackendResolver
from pocketwriter.discovery.settings import DiscoverySettings
from pocketwriter.discovery.status import ConnectionStatus
from pocketwriter.exceptions import ConfigStoreError

logger = logging.getLogger(__name__)


class BackendConnectionManager:
    def __init__(
        self,
        settings: DiscoverySettings,
        store: ConfigStore,
        prober: ReachabilityProber,
        resolver: BackendResolver,
        diagnostics: NetworkDiagnostics,
        status: Optional[ConnectionStatus] = None,
    ):
        self.settings = settings
        self.store = store
        self.prober = prober
        self.resolver = resolver
        self.diagnostics = diagnostics
        self.status = status or ConnectionStatus()

    @property
    def state(self) -> ConnectionState:
        return self.status.state

    async def current_endpoint(self) -> BackendEndpoint:
        return await self.store.load()

    async def discover(self) -> DiscoveryResult:
        """Run the resolver and move the state machine to its outcome."""
        if self.resolver.in_progress:
            return await self.resolver.resolve_backend()

        self.status.set(ConnectionState.DISCOVERING)
        result = await self.resolver.resolve_backend()

        if result.success:
            self.status.set(ConnectionState.CONNECTED)
        elif result.store_failed:
            self.status.set(ConnectionState.ERROR)
        else:
            self.status.set(ConnectionState.DISCONNECTED)
        return result

    async def test_connection(self) -> bool:
        """Probe the saved endpoint once."""
        self.status.set(ConnectionState.TESTING)
        endpoint = await self.store.load()
        reachable = await self.prober.is_reachable(
            endpoint.host, endpoint.port, self.settings.probe_timeout
        )
        self.status.set(ConnectionState.CONNECTED if reachable else ConnectionState.DISCONNECTED)
        logger.info("Connection test %s: %s", endpoint, "reachable" if reachable else "unreachable")
        return reachable

    async def update_config(self, host: str, port: int) -> bool:
        """
        Manually set the backend address.

        Returns False (and persists nothing) when host or port is invalid or
        the store cannot be written.
        """
        try:
            endpoint = BackendEndpoint(
                host=host, port=port, resolved_at=datetime.now(timezone.utc)
            )
        except SchemaError as e:
            logger.warning("Rejected backend configuration %s:%s: %s", host, port, e)
            return False

        try:
            await self.store.save(endpoint)
        except ConfigStoreError as e:
            logger.error("Could not save manual configuration: %s", e.message)
            self.status.set(ConnectionState.ERROR)
            return False

        logger.info("Custom backend set to %s", endpoint)
        self.status.set(ConnectionState.UNKNOWN)
        return True

    async def base_url(self, environment: Environment = Environment.DEVELOPMENT) -> str:
        """API base URL for `environment` (DEVELOPMENT uses the saved endpoint)."""
        if environment == Environment.STAGING:
            return self.settings.staging_url
        if environment == Environment.PRODUCTION:
            return self.settings.production_url
        return (await self.store.load()).api_url

    async def run_diagnostics(self) -> DiagnosticsReport:
        return await self.diagnostics.run(await self.store.load())


def build_connection_manager(
    settings: Optional[DiscoverySettings] = None,
    store: Optional[ConfigStore] = None,
    prober: Optional[ReachabilityProber] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BackendConnectionManager:
    """Wire up a manager from settings; any piece can be overridden for tests."""
    settings = settings or DiscoverySettings()
    store = store or JsonFileConfigStore(
        settings.config_path,
        default_host=settings.default_host,
        default_port=settings.default_port,
    )
    prober = prober or ReachabilityProber(
        probe_timeout=settings.probe_timeout,
        host_check_timeout=settings.host_check_timeout,
    )
    resolver = BackendResolver(prober, store, settings, transport=transport)
    diagnostics = NetworkDiagnostics(prober, settings, transport=transport)
    return BackendConnectionManager(settings, store, prober, resolver, diagnostics)
