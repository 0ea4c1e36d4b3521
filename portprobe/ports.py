from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import InvalidRangeError

MIN_PORT = 1
MAX_PORT = 65535


def validate_port(port: int) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidRangeError(f"Invalid port: {port!r}")
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidRangeError(f"Invalid port: {port} (must be {MIN_PORT}-{MAX_PORT})")
    return port


@dataclass(frozen=True)
class PortRange:
    """
    Inclusive, ascending run of port numbers.

    Every call to iter() starts again from ``start``; the only state is the
    cursor of the iterator it hands out.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        validate_port(self.start)
        validate_port(self.end)
        if self.start > self.end:
            raise InvalidRangeError(f"Invalid port range: {self.start}-{self.end} (start > end)")

    def __iter__(self) -> Iterator[int]:
        port = self.start
        while port <= self.end:
            yield port
            port += 1

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, port: object) -> bool:
        return isinstance(port, int) and self.start <= port <= self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
