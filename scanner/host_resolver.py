import asyncio
import aiodns
import aiodns.error
import inspect
import ipaddress
import logging
import socket
from typing import List

from core.models import ResolvedAddress

logger = logging.getLogger(__name__)

DEFAULT_RESOLVE_TIMEOUT = 10.0


class ResolutionError(Exception):
    """A domain name could not be resolved to any IPv4 address."""

    def __init__(self, domain: str, cause: BaseException):
        self.domain = domain
        self.cause = cause
        super().__init__(f"failed to resolve {domain}: {cause}")


class HostResolver:
    def __init__(self, timeout: float = DEFAULT_RESOLVE_TIMEOUT, resolver=None):
        # aiodns binds to the running loop, so the default resolver is created lazily
        self.resolver = resolver
        self.timeout = timeout
        self._owns_resolver = False

    def _get_resolver(self):
        if self.resolver is None:
            self.resolver = aiodns.DNSResolver()
            self._owns_resolver = True
        return self.resolver

    def is_valid_ip(self, host: str) -> bool:
        """Check if string is an IPv4 address literal"""
        try:
            ipaddress.IPv4Address(host)
            return True
        except ValueError:
            return False

    async def resolve(self, domain: str) -> List[ResolvedAddress]:
        """Resolve a domain to all of its IPv4 addresses.

        IPv4 literals are returned as is. Names go through getaddrinfo,
        so the hosts file is honoured. A single attempt is made; any
        failure (NXDOMAIN, no addresses, network error, timeout) raises
        ResolutionError.
        """
        if self.is_valid_ip(domain):
            return [ResolvedAddress(domain=domain, ip=domain)]

        try:
            result = await asyncio.wait_for(
                self._get_resolver().getaddrinfo(domain, family=socket.AF_INET, type=socket.SOCK_STREAM),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.debug(f"DNS resolution timeout for {domain}")
            raise ResolutionError(domain, e) from e
        except aiodns.error.DNSError as e:
            logger.debug(f"DNS resolution failed for {domain}: {e}")
            raise ResolutionError(domain, e) from e

        ips: List[str] = []
        for node in getattr(result, 'nodes', None) or []:
            ip = node.addr[0]
            if isinstance(ip, bytes):
                ip = ip.decode('ascii')
            if ip not in ips:
                ips.append(ip)

        if not ips:
            raise ResolutionError(domain, LookupError("no IPv4 addresses"))

        logger.debug(f"Resolved {domain} -> {', '.join(ips)}")
        return [ResolvedAddress(domain=domain, ip=ip) for ip in ips]

    async def close(self):
        """Release the aiodns channel this resolver created, if any"""
        if not self._owns_resolver or self.resolver is None:
            return
        resolver, self.resolver = self.resolver, None
        self._owns_resolver = False

        result = resolver.close()
        if inspect.isawaitable(result):
            await result
