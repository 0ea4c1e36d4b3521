from __future__ import annotations


class ScanError(Exception):
    """Base class for failures that abort a scan."""

    kind = "error"
    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(ScanError):
    kind = "usage"


class ResolutionError(ScanError):
    kind = "resolution"


class InvalidRangeError(ScanError, ValueError):
    kind = "invalid_range"


class InvalidOptionError(ScanError, ValueError):
    kind = "invalid_option"


class ProbeError(ScanError):
    """
    Raised when a probe cannot even be attempted (e.g. no socket could be
    created). A refused or timed-out connection is never a ProbeError.
    """

    kind = "probe"
