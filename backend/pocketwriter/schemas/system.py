"""
Pocket Writer Backend — System Endpoint Schemas
================================================

What:  Contracts for ping, health, server self-description and errors.
Who:   Returned by routes/health.py and routes/server_info.py; the server-info
       models are also parsed by the discovery client (BackendResolver,
       NetworkDiagnostics), which is why every field the client does not
       strictly need carries a default.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from pocketwriter.schemas.base import CamelModel


class PingResponse(CamelModel):
    """GET /api/ping: cheap liveness probe used for steady-state checks."""
    status: str = Field(default="up")
    message: str = Field(default="Server is running")
    timestamp: str = Field(description="Server local time, yyyy-MM-dd HH:mm:ss")
    version: str


class ComponentHealth(CamelModel):
    status: str = Field(description="UP or DOWN")
    details: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(CamelModel):
    """GET /api/health: aggregate of database and application components."""
    status: str = Field(description="UP when every component is UP, else DOWN")
    components: Dict[str, ComponentHealth]
    timestamp: str


class DatabaseHealthResponse(CamelModel):
    """GET /api/health/db."""
    status: str
    details: Dict[str, Any] = Field(default_factory=dict)
    metrics: Dict[str, Any] = Field(default_factory=dict)


class ServerInfoResponse(CamelModel):
    """
    GET /api/server-info.

    ip is the bind address; "0.0.0.0" means "every interface" and must not
    be dialed literally. preferred_address is a concrete address clients
    can use instead.
    """
    ip: str
    port: int
    status: str = "running"
    timestamp: int = Field(default=0, description="Epoch milliseconds")
    hostname: str = ""
    available_addresses: List[str] = Field(default_factory=list)
    preferred_address: Optional[str] = None


class DetailedServerInfoResponse(CamelModel):
    """GET /api/server-info/detailed: server-info plus access URLs."""
    status: str = "running"
    timestamp: int = 0
    port: Optional[int] = None
    bind_address: Optional[str] = None
    hostname: str = ""
    canonical_host_name: str = ""
    available_addresses: List[str] = Field(default_factory=list)
    preferred_address: Optional[str] = None
    access_urls: List[str] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Template with ID 42 not found",
            "path": "/api/templates/42",
            "requestId": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    path: Optional[str] = Field(default=None, description="Request path")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
