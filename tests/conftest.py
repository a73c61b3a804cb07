import logging
import socket

import pytest

from core.models import ProbeResult, PortStatus


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('DIPSCAN_TIMEOUT', 'DIPSCAN_RESOLVE_TIMEOUT', 'DIPSCAN_PORTS', 'DIPSCAN_INPUT_FILE',
                 'DIPSCAN_OUTPUT_FILE', 'DIPSCAN_LOGS_DIR', 'DIPSCAN_LOG_LEVEL'):
        # setting first makes monkeypatch restore the variable, even if .env loading sets it
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)


@pytest.fixture
def reset_logging():
    root = logging.getLogger()
    saved = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved:
            root.removeHandler(handler)
            handler.close()
    for handler in saved:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture
def make_result():
    def _make(domain, ip, port, is_open):
        return ProbeResult(domain=domain, ip=ip, port=port,
                           status=PortStatus.OPEN if is_open else PortStatus.CLOSED)
    return _make
