from dataclasses import dataclass
from typing import Optional

from .ports import PortRange


@dataclass(frozen=True)
class ScanTarget:
    host: str
    start_port: int
    end_port: int

    def __post_init__(self):
        # raises InvalidRangeError on bad bounds or start > end
        PortRange(self.start_port, self.end_port)

    @property
    def ports(self) -> PortRange:
        return PortRange(self.start_port, self.end_port)


@dataclass(frozen=True)
class PortProbeResult:
    port: int
    is_open: bool
    service: Optional[str] = None


@dataclass(frozen=True)
class ScanSummary:
    open_port_count: int
    elapsed_seconds: float
    ports_scanned: int = 0
    cancelled: bool = False
