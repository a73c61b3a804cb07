"""
Scanner modules for dipscan: DNS resolution and TCP connect probing.
"""

from .port_scanner import AsyncPortScanner
from .host_resolver import HostResolver, ResolutionError

__all__ = [
    'AsyncPortScanner',
    'HostResolver',
    'ResolutionError',
]
