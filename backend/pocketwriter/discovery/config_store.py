"""
Discovery Client — Configuration Store
=======================================

What:  Durable home of the resolved BackendEndpoint.
How:   A small abstract interface with two implementations:
         JsonFileConfigStore  JSON document on disk (default ~/.pocketwriter/backend.json)
         InMemoryConfigStore  tests and throwaway sessions

Document format:
    {"backend_host": "192.168.1.50", "backend_port": 8080,
     "resolved_at": "2024-05-01T12:00:00+00:00"}

Contract:
    load()  never raises. Missing or corrupt data yields the defaults
            (10.0.2.2:8080) and a warning in the log.
    save()  raises ConfigStoreError when the write fails. Last write wins.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiofiles

from pocketwriter.discovery.models import BackendEndpoint
from pocketwriter.discovery.settings import EMULATOR_HOST
from pocketwriter.exceptions import ConfigStoreError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


class ConfigStore(ABC):
    """Persistence interface used by the resolver and the connection manager."""

    def __init__(self, default_host: str = EMULATOR_HOST, default_port: int = DEFAULT_PORT):
        self.default_host = default_host
        self.default_port = default_port

    def defaults(self) -> BackendEndpoint:
        return BackendEndpoint(host=self.default_host, port=self.default_port)

    @abstractmethod
    async def load(self) -> BackendEndpoint:
        """Return the saved endpoint, or the defaults when nothing usable is saved."""
        ...

    @abstractmethod
    async def save(self, endpoint: BackendEndpoint) -> None:
        """
        Persist `endpoint`, replacing whatever was saved.

        Raises:
            ConfigStoreError: the write failed
        """
        ...


class InMemoryConfigStore(ConfigStore):
    def __init__(
        self,
        initial: Optional[BackendEndpoint] = None,
        default_host: str = EMULATOR_HOST,
        default_port: int = DEFAULT_PORT,
    ):
        super().__init__(default_host, default_port)
        self._endpoint = initial
        self.save_count = 0

    async def load(self) -> BackendEndpoint:
        return self._endpoint if self._endpoint is not None else self.defaults()

    async def save(self, endpoint: BackendEndpoint) -> None:
        self._endpoint = endpoint
        self.save_count += 1


class JsonFileConfigStore(ConfigStore):
    """
    JSON file store.

    Writes go to a sibling temp file which is then renamed over the target,
    so a crash mid-write never leaves a truncated document behind.
    """

    def __init__(
        self,
        path: Path,
        default_host: str = EMULATOR_HOST,
        default_port: int = DEFAULT_PORT,
    ):
        super().__init__(default_host, default_port)
        self.path = Path(path).expanduser()

    async def load(self) -> BackendEndpoint:
        if not self.path.exists():
            return self.defaults()

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw)
            return BackendEndpoint(
                host=data["backend_host"],
                port=data["backend_port"],
                resolved_at=data.get("resolved_at"),
            )
        except (OSError, ValueError, KeyError, TypeError) as e:
            # pydantic's ValidationError is a ValueError subclass
            logger.warning(
                "Backend configuration at %s is unreadable (%s); using defaults %s:%d",
                self.path, e, self.default_host, self.default_port,
            )
            return self.defaults()

    async def save(self, endpoint: BackendEndpoint) -> None:
        document = {
            "backend_host": endpoint.host,
            "backend_port": endpoint.port,
            "resolved_at": endpoint.resolved_at.isoformat() if endpoint.resolved_at else None,
        }
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(document, indent=2))
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to save backend configuration to %s: %s", self.path, e)
            raise ConfigStoreError(
                message=f"Could not save backend configuration: {e}",
                context={"path": str(self.path)},
            )

        logger.info("Saved backend configuration: %s", endpoint)
