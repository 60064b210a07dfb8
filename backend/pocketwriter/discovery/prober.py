"""
Discovery Client — Reachability Prober
=======================================

What:  Bounded TCP connect checks.
How:   asyncio.open_connection under asyncio.wait_for; one attempt, no retry.
       The socket is closed as soon as the handshake completes.

Two questions are answered here:
    is_reachable(host, port)   does anything accept connections on host:port?
    is_host_reachable(host)    is the host itself up at all?

The host check dials the echo port (7). An active refusal (RST) still
proves the host answered, so ConnectionRefusedError counts as reachable.
When port 7 is silently filtered (timeout) or unroutable, one ICMP ping
through the system `ping` binary gets the final say.
"""

import asyncio
import logging
import math
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)

ECHO_PORT = 7


class ReachabilityProber:
    """Stateless apart from its default timeouts; safe to share."""

    def __init__(self, probe_timeout: float = 1.0, host_check_timeout: float = 1.0):
        self.probe_timeout = probe_timeout
        self.host_check_timeout = host_check_timeout

    async def _connect(self, host: str, port: int, timeout: float) -> None:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout
        )
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug("Error closing probe socket to %s:%d: %s", host, port, e)

    async def is_reachable(self, host: str, port: int, timeout: Optional[float] = None) -> bool:
        """True iff a TCP connection to host:port completes within the timeout."""
        try:
            await self._connect(host, port, timeout or self.probe_timeout)
            logger.debug("Probe %s:%d succeeded", host, port)
            return True
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("Probe %s:%d failed: %s", host, port, str(e) or type(e).__name__)
            return False

    async def is_host_reachable(self, host: str, timeout: Optional[float] = None) -> bool:
        """
        True if the host answers on the echo port (even with a refusal) or,
        failing that, replies to a single ICMP ping.
        """
        timeout = timeout or self.host_check_timeout
        try:
            await self._connect(host, ECHO_PORT, timeout)
            return True
        except ConnectionRefusedError:
            return True
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("Echo check on %s failed: %s", host, str(e) or type(e).__name__)

        if await self._ping(host, timeout):
            logger.debug("Host %s answered ping", host)
            return True
        logger.debug("Host %s unreachable", host)
        return False

    async def _ping(self, host: str, timeout: float) -> bool:
        """One ICMP echo via the system ping binary; False if it is missing or silent."""
        try:
            process = await asyncio.create_subprocess_exec(
                *_ping_command(host, timeout),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug("Cannot run ping for %s: %s", host, e)
            return False

        try:
            return_code = await asyncio.wait_for(process.wait(), timeout=timeout + 1.0)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            return False
        return return_code == 0


def _ping_command(host: str, timeout: float) -> List[str]:
    seconds = max(1, math.ceil(timeout))
    if sys.platform.startswith("win"):
        return ["ping", "-n", "1", "-w", str(seconds * 1000), host]
    if sys.platform == "darwin":
        return ["ping", "-c", "1", "-t", str(seconds), host]
    return ["ping", "-c", "1", "-W", str(seconds), host]
