from __future__ import annotations

import logging
import math
import socket

from .errors import InvalidOptionError, ProbeError, ResolutionError
from .ports import validate_port

DEFAULT_TIMEOUT = 1.0

log = logging.getLogger(__name__)


def validate_timeout(timeout: float) -> float:
    if timeout is None or not math.isfinite(timeout) or timeout <= 0:
        raise InvalidOptionError(f"Timeout must be a positive number of seconds, got {timeout!r}")
    return timeout


def probe(host: str, port: int, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """
    Single TCP connect attempt to host:port.

    Returns True if the connection is accepted within ``timeout`` seconds,
    False if it is refused, times out or otherwise fails to connect.
    """
    validate_port(port)
    validate_timeout(timeout)

    # literals come back as-is; names pick up whichever family they resolve to
    try:
        family, socktype, proto, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_STREAM
        )[0]
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"Could not resolve host '{host}': {e}") from e

    try:
        sock = socket.socket(family, socktype, proto)
    except OSError as e:
        raise ProbeError(f"Could not create socket for {host}:{port}: {e}") from e

    try:
        sock.settimeout(timeout)
        sock.connect(sockaddr)
        return True
    except OSError as e:
        # refused, timed out, unreachable: the port is closed to us
        log.debug("%s:%d closed (%s)", host, port, e)
        return False
    finally:
        sock.close()
