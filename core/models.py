from typing import List, Dict
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class PortStatus(Enum):
    """Reachability of a single ip:port."""
    OPEN = "open"
    CLOSED = "closed"


class ResolvedAddress(BaseModel):
    """One IPv4 address found for a domain name."""
    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., min_length=1)
    ip: str


class ProbeTask(BaseModel):
    """Unit of concurrent work: one TCP connect attempt."""
    model_config = ConfigDict(frozen=True)

    domain: str
    ip: str
    port: int = Field(..., ge=1, le=65535)
    timeout: float = Field(..., gt=0)


class ProbeResult(BaseModel):
    """Outcome of exactly one ProbeTask. Never an error."""
    model_config = ConfigDict(frozen=True)

    domain: str
    ip: str
    port: int
    status: PortStatus

    @property
    def is_open(self) -> bool:
        return self.status is PortStatus.OPEN


class ReportRow(BaseModel):
    """Port statuses recorded for one (domain, ip) pair."""
    model_config = ConfigDict(frozen=True)

    domain: str
    ip: str
    ports: Dict[int, PortStatus] = Field(default_factory=dict)

    def cell(self, port: int) -> str:
        # unprobed ports render the same as closed ones
        return "OK" if self.ports.get(port) is PortStatus.OPEN else "-"


class ReportTable(BaseModel):
    """Rows grouped by domain then ip, with one column per configured port."""
    model_config = ConfigDict(frozen=True)

    ports: List[int]
    rows: List[ReportRow] = Field(default_factory=list)

    @property
    def columns(self) -> List[str]:
        return ["DomainName", "IP"] + [f":{port}" for port in self.ports]
