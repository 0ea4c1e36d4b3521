from __future__ import annotations

import ipaddress
import logging
import socket

from .errors import ResolutionError

log = logging.getLogger(__name__)


def resolve_host(host: str) -> str:
    """
    Turns the user-supplied host into an address the prober can connect to.
    Supports:
      - IPv4 / IPv6 literals: "127.0.0.1", "::1" (returned as-is)
      - Hostnames: "localhost" (resolved to one IPv4 address)
    """
    host = (host or "").strip()
    if not host:
        raise ResolutionError("Empty host")

    try:
        return str(ipaddress.ip_address(host))
    except ValueError:
        pass

    try:
        resolved = socket.gethostbyname(host)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"Could not resolve host '{host}': {e}") from e

    log.debug("Resolved %s -> %s", host, resolved)
    return resolved
