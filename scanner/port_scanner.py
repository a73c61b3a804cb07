import asyncio
import logging
from typing import Optional

from core.models import ProbeTask, ProbeResult, PortStatus

logger = logging.getLogger(__name__)

DEFAULT_PORT_TIMEOUT = 15.0
CLOSE_TIMEOUT = 2.0


class AsyncPortScanner:
    """TCP connect prober. A probe never raises; every failure means closed."""

    def __init__(self, timeout: float = DEFAULT_PORT_TIMEOUT):
        self.timeout = timeout

    async def probe(self, domain: str, ip: str, port: int,
                    timeout: Optional[float] = None) -> ProbeResult:
        """Try one TCP connection to ip:port and classify it as open or closed"""
        if timeout is None:
            timeout = self.timeout

        status = PortStatus.CLOSED
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(ip, port),
                timeout=timeout
            )
            status = PortStatus.OPEN
            # Reachability only, nothing is sent
            await self._close(writer)
        except asyncio.TimeoutError:
            logger.debug(f"[{domain}] {ip}:{port} timed out after {timeout}s")
        except (ConnectionRefusedError, ConnectionResetError) as e:
            logger.debug(f"[{domain}] {ip}:{port} connection refused/reset: {e}")
        except OSError as e:
            logger.debug(f"[{domain}] {ip}:{port} connection error: {e}")
        except Exception as e:
            logger.debug(f"[{domain}] {ip}:{port} failed: {e!r}")

        return ProbeResult(domain=domain, ip=ip, port=port, status=status)

    async def probe_task(self, task: ProbeTask) -> ProbeResult:
        return await self.probe(task.domain, task.ip, task.port, task.timeout)

    async def _close(self, writer: asyncio.StreamWriter):
        writer.close()
        try:
            await asyncio.wait_for(writer.wait_closed(), timeout=CLOSE_TIMEOUT)
        except (asyncio.TimeoutError, ConnectionResetError, OSError):
            # transport is closed either way
            pass
