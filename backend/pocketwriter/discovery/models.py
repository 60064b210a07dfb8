"""
Discovery Client — Data Types
==============================

BackendEndpoint    persisted (host, port) pair, validated on construction
DiscoveryResult    outcome of one resolver pass; never an exception
DiagnosticsReport  one-shot network snapshot for troubleshooting
ConnectionState    states of the client's connection state machine
Environment        which backend base URL the client should use
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ConnectionState(str, Enum):
    UNKNOWN = "UNKNOWN"
    DISCOVERING = "DISCOVERING"
    TESTING = "TESTING"
    CONNECTED = "CONNECTED"
    DISCONNECTED = "DISCONNECTED"
    ERROR = "ERROR"


class Environment(str, Enum):
    DEVELOPMENT = "DEVELOPMENT"
    STAGING = "STAGING"
    PRODUCTION = "PRODUCTION"


class BackendEndpoint(BaseModel):
    """
    Where the backend lives.

    Replaced (never deleted) when discovery succeeds or the user edits the
    configuration by hand.
    """

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    resolved_at: Optional[datetime] = None

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch.isspace() for ch in v) or "/" in v:
            raise ValueError(f"Invalid host '{v}'")
        return v

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/api"

    def same_address(self, other: "BackendEndpoint") -> bool:
        return self.host == other.host and self.port == other.port

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class DiscoveryResult(BaseModel):
    """
    Outcome of BackendResolver.resolve_backend().

    `probes` counts TCP reachability attempts made during the pass (host
    checks and port probes both count). `store_failed` marks a pass that
    found a backend but could not persist it.
    """

    success: bool
    endpoint: Optional[BackendEndpoint] = None
    message: str = ""
    probes: int = 0
    store_failed: bool = False


class DiagnosticsReport(BaseModel):
    internet_available: bool = False
    host_checks: Dict[str, bool] = Field(default_factory=dict)
    server_accessible: bool = False
    server_message: str = ""
    device_ip: str = "Unknown"
    api_status: Optional[str] = None
    preferred_address: Optional[str] = None
    server_addresses: List[str] = Field(default_factory=list)
    access_urls: List[str] = Field(default_factory=list)
