#!/usr/bin/env python3
"""
Scan Configuration
Central settings for a dipscan run, read from the environment (and .env)
"""

import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_TIMEOUT = 15.0
DEFAULT_RESOLVE_TIMEOUT = 10.0
DEFAULT_PORTS = [8091, 8092, 8093, 8094, 8095, 80, 8080]
DEFAULT_INPUT_FILE = "domains.txt"
DEFAULT_OUTPUT_FILE = "net_data.csv"


def parse_ports(raw: str) -> List[int]:
    """Parse a comma separated port list, keeping order and dropping repeats"""
    ports: List[int] = []
    for item in raw.split(','):
        item = item.strip()
        if not item:
            continue
        try:
            port = int(item)
        except ValueError:
            raise ValueError(f"DIPSCAN_PORTS: '{item}' is not a port number")
        if not 1 <= port <= 65535:
            raise ValueError(f"DIPSCAN_PORTS: {port} is out of range 1-65535")
        if port not in ports:
            ports.append(port)

    if not ports:
        raise ValueError("DIPSCAN_PORTS: at least one port is required")
    return ports


def _parse_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name}: '{raw}' is not a number of seconds")
    if value <= 0:
        raise ValueError(f"{name}: must be greater than zero")
    return value


class ScanConfig:
    """Settings for one scan run"""

    def __init__(self, env_file: Optional[str] = None):
        self.load_config(env_file)

    def load_config(self, env_file: Optional[str] = None):
        """Load configuration from environment and defaults"""
        # Existing environment variables win over the .env file
        load_dotenv(env_file)

        # Files
        self.input_file = Path(os.getenv('DIPSCAN_INPUT_FILE', DEFAULT_INPUT_FILE))
        self.output_file = Path(os.getenv('DIPSCAN_OUTPUT_FILE', DEFAULT_OUTPUT_FILE))
        self.logs_dir = Path(os.getenv('DIPSCAN_LOGS_DIR', 'logs'))
        self.log_level = os.getenv('DIPSCAN_LOG_LEVEL', 'WARNING').upper()

        # Scan settings
        self.timeout = _parse_seconds('DIPSCAN_TIMEOUT', DEFAULT_TIMEOUT)
        self.resolve_timeout = _parse_seconds('DIPSCAN_RESOLVE_TIMEOUT', DEFAULT_RESOLVE_TIMEOUT)

        raw_ports = os.getenv('DIPSCAN_PORTS')
        if raw_ports is None:
            self.ports = list(DEFAULT_PORTS)
        else:
            self.ports = parse_ports(raw_ports)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return {
            'input_file': str(self.input_file),
            'output_file': str(self.output_file),
            'logs_dir': str(self.logs_dir),
            'log_level': self.log_level,
            'timeout': self.timeout,
            'resolve_timeout': self.resolve_timeout,
            'ports': list(self.ports),
        }


def get_scan_config(env_file: Optional[str] = None) -> ScanConfig:
    """Build a scan config from the current environment"""
    return ScanConfig(env_file)
