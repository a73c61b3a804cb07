"""
Core modules for the dipscan reachability scanner.
"""

from .models import (
    PortStatus,
    ResolvedAddress,
    ProbeTask,
    ProbeResult,
    ReportRow,
    ReportTable
)

from .reporter import ReportGenerator

__all__ = [
    'PortStatus',
    'ResolvedAddress',
    'ProbeTask',
    'ProbeResult',
    'ReportRow',
    'ReportTable',
    'ReportGenerator'
]
