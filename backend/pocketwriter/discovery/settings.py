"""
Discovery Client — Configuration
=================================

What:  Tunables for backend discovery, read from DISCOVERY_* env vars.
How:   Pydantic Settings, same conventions as pocketwriter.config. List-valued
       options are comma-separated strings with a *_list accessor, the way
       CORS_ORIGINS works on the server side.

Candidate tables:
    known_hosts        literal hosts tried right after the emulator alias
    private_prefixes   RFC1918 /24 prefixes expanded to .1 .. .N; entries that
                       are already full addresses are tried as-is
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

EMULATOR_HOST = "10.0.2.2"
EMULATOR_PREFIX = "10.0.2."

DEFAULT_PRIVATE_PREFIXES = ",".join(
    ["192.168.0", "192.168.1", "10.0.0", "10.0.1"]
    + [f"172.{second}" for second in range(16, 32)]
)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class DiscoverySettings(BaseSettings):
    """Settings for the discovery client and the CLI."""

    # ── Persistence ───────────────────────────────────────────────────────
    config_path: Path = Field(default=Path.home() / ".pocketwriter" / "backend.json")
    default_host: str = Field(default=EMULATOR_HOST)
    default_port: int = Field(default=8080, ge=1, le=65535)

    # ── Timeouts (seconds) ────────────────────────────────────────────────
    probe_timeout: float = Field(default=1.0, gt=0)
    host_check_timeout: float = Field(default=1.0, gt=0)
    info_timeout: float = Field(default=5.0, gt=0)

    # ── Host candidates ───────────────────────────────────────────────────
    known_hosts: str = Field(default="127.0.0.1")
    private_prefixes: str = Field(default=DEFAULT_PRIVATE_PREFIXES)
    suffixes_per_prefix: int = Field(default=5, ge=1, le=254)

    # ── Port candidates ───────────────────────────────────────────────────
    common_ports: str = Field(default="8080,8081,8082,8090,8000,9000")
    port_range_scan: bool = Field(default=True)
    port_range_start: int = Field(default=8000, ge=1, le=65535)
    port_range_end: int = Field(default=9000, ge=1, le=65535)

    # ── Diagnostics ───────────────────────────────────────────────────────
    internet_check_host: str = Field(default="1.1.1.1")
    internet_check_port: int = Field(default=53, ge=1, le=65535)

    # ── Non-development environments ──────────────────────────────────────
    staging_url: str = Field(default="https://staging-api.storycanvas.com/api")
    production_url: str = Field(default="https://api.storycanvas.com/api")

    @field_validator("common_ports")
    @classmethod
    def validate_common_ports(cls, v: str) -> str:
        for item in _split_csv(v):
            if not item.isdigit():
                raise ValueError(f"Invalid port '{item}' in common_ports")
        return v

    @model_validator(mode="after")
    def validate_port_range(self) -> "DiscoverySettings":
        if self.port_range_start > self.port_range_end:
            raise ValueError(
                f"port_range_start ({self.port_range_start}) must not exceed "
                f"port_range_end ({self.port_range_end})"
            )
        return self

    @property
    def known_hosts_list(self) -> List[str]:
        return _split_csv(self.known_hosts)

    @property
    def private_prefixes_list(self) -> List[str]:
        return _split_csv(self.private_prefixes)

    @property
    def common_ports_list(self) -> List[int]:
        return [int(item) for item in _split_csv(self.common_ports)]

    model_config = {
        "env_prefix": "DISCOVERY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }
