"""
Pocket Writer — Backend Discovery Client
=========================================

Finds the Pocket Writer backend on a local network and remembers where it is.

Layers (leaves first):
    prober        bounded TCP reachability checks
    candidates    lazy host / port candidate generators
    config_store  persisted BackendEndpoint
    resolver      fast path → scan → server-info → persist
    diagnostics   one-shot DiagnosticsReport
    manager       composition root + connection state machine
    cli           `pocketwriter-discover`
"""

from pocketwriter.discovery.config_store import (
    ConfigStore,
    InMemoryConfigStore,
    JsonFileConfigStore,
)
from pocketwriter.discovery.manager import BackendConnectionManager, build_connection_manager
from pocketwriter.discovery.models import (
    BackendEndpoint,
    ConnectionState,
    DiagnosticsReport,
    DiscoveryResult,
    Environment,
)
from pocketwriter.discovery.resolver import BackendResolver
from pocketwriter.discovery.settings import DiscoverySettings

__all__ = [
    "BackendConnectionManager",
    "BackendEndpoint",
    "BackendResolver",
    "ConfigStore",
    "ConnectionState",
    "DiagnosticsReport",
    "DiscoveryResult",
    "DiscoverySettings",
    "Environment",
    "InMemoryConfigStore",
    "JsonFileConfigStore",
    "build_connection_manager",
]
