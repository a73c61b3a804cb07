# core/async_scan_manager.py

import asyncio
import contextlib
import logging
from typing import Callable, ContextManager, List, Optional

from pydantic import BaseModel, Field

from scanner.port_scanner import AsyncPortScanner
from scanner.host_resolver import HostResolver, ResolutionError
from core.models import ResolvedAddress, ProbeTask, ProbeResult

logger = logging.getLogger(__name__)


class ScanOutcome(BaseModel):
    """Everything a run produced, gathered at the final join point."""
    addresses: List[ResolvedAddress] = Field(default_factory=list)
    failed_domains: List[str] = Field(default_factory=list)
    results: List[ProbeResult] = Field(default_factory=list)


class AsyncScanManager:
    """Resolves domains and probes every (domain, ip, port) concurrently.

    There is no concurrency cap: every resolution and every probe is
    started at once and awaited together. Each probe is bounded by its own
    timeout, so a run takes roughly resolution time plus one timeout.
    """

    def __init__(self, host_resolver: Optional[HostResolver] = None,
                 port_scanner: Optional[AsyncPortScanner] = None):
        self.host_resolver = host_resolver or HostResolver()
        self.port_scanner = port_scanner or AsyncPortScanner()

    async def resolve_domains(self, domains: List[str]):
        """Resolve all domains concurrently.

        Returns (addresses, failed_domains). A ResolutionError only drops
        its own domain; any other exception propagates.
        """
        resolved = await asyncio.gather(
            *[self.host_resolver.resolve(domain) for domain in domains],
            return_exceptions=True
        )

        addresses: List[ResolvedAddress] = []
        failed: List[str] = []
        for domain, result in zip(domains, resolved):
            if isinstance(result, ResolutionError):
                logger.warning(f"Skipping {domain}: {result.cause}")
                failed.append(domain)
            elif isinstance(result, BaseException):
                raise result
            else:
                addresses.extend(result)

        logger.info(f"Resolved {len(domains) - len(failed)} out of {len(domains)} domains "
                    f"to {len(addresses)} addresses")
        return addresses, failed

    @staticmethod
    def build_tasks(addresses: List[ResolvedAddress], ports: List[int], timeout: float) -> List[ProbeTask]:
        """Full cross product of addresses and ports. IPs shared between domains are not merged."""
        return [
            ProbeTask(domain=address.domain, ip=address.ip, port=port, timeout=timeout)
            for address in addresses
            for port in ports
        ]

    async def probe_all(self, tasks: List[ProbeTask]) -> List[ProbeResult]:
        """Run every probe at once and wait for all of them"""
        logger.info(f"Probing {len(tasks)} ip:port pairs")
        results = await asyncio.gather(*[self.port_scanner.probe_task(task) for task in tasks])
        open_count = sum(1 for r in results if r.is_open)
        logger.info(f"Probing finished: {open_count} open, {len(results) - open_count} closed")
        return list(results)

    async def scan(self, domains: List[str], ports: List[int], timeout: float,
                   on_resolved: Optional[Callable[[List[ResolvedAddress]], None]] = None,
                   probe_status: Optional[Callable[[], ContextManager]] = None) -> ScanOutcome:
        """Resolve, then probe. Keeps the resolution details for reporting.

        on_resolved is called with the addresses before probing starts;
        probe_status returns a context manager held while probes run.
        """
        try:
            addresses, failed = await self.resolve_domains(domains)
        finally:
            await self.close()

        if on_resolved is not None:
            on_resolved(addresses)

        tasks = self.build_tasks(addresses, ports, timeout)
        with probe_status() if probe_status is not None else contextlib.nullcontext():
            results = await self.probe_all(tasks)
        return ScanOutcome(addresses=addresses, failed_domains=failed, results=results)

    async def run(self, domains: List[str], ports: List[int], timeout: float) -> List[ProbeResult]:
        """Probe results for every (domain, ip, port); order is unspecified"""
        outcome = await self.scan(domains, ports, timeout)
        return outcome.results

    async def close(self):
        """Release resolver resources once resolution is done"""
        close = getattr(self.host_resolver, 'close', None)
        if close is not None:
            await close()

