"""Reading the newline-delimited domain list."""

import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


def parse_domains(text: str) -> List[str]:
    """One domain per line; surrounding whitespace and blank lines are dropped."""
    return [line.strip() for line in text.split('\n') if line.strip()]


def load_domains(path: Union[str, Path]) -> List[str]:
    """Read domains from a UTF-8 text file. OSError and UnicodeDecodeError propagate."""
    path = Path(path)
    domains = parse_domains(path.read_text(encoding='utf-8'))
    logger.info(f"Loaded {len(domains)} domains from {path}")
    return domains
