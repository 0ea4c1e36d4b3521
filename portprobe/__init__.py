"""TCP connect port scanner."""

from .errors import (
    InvalidOptionError,
    InvalidRangeError,
    ProbeError,
    ResolutionError,
    ScanError,
    UsageError,
)
from .models import PortProbeResult, ScanSummary, ScanTarget
from .prober import probe
from .scanner import ScanRun, scan
from .services import UNKNOWN_SERVICE, service_name

__version__ = "0.1.0"

__all__ = [
    "InvalidOptionError",
    "InvalidRangeError",
    "PortProbeResult",
    "ProbeError",
    "ResolutionError",
    "ScanError",
    "ScanRun",
    "ScanSummary",
    "ScanTarget",
    "UNKNOWN_SERVICE",
    "UsageError",
    "probe",
    "scan",
    "service_name",
]
