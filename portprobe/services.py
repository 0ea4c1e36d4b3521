from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Union

UNKNOWN_SERVICE = "Unknown service"

# Well-known TCP ports reported by name.
SERVICE_NAMES: Mapping[int, str] = MappingProxyType({
    21: "FTP",
    22: "SSH",
    23: "TELNET",
    25: "SMTP",
    53: "DNS",
    69: "TFTP",
    80: "HTTP",
    109: "POP2",
    110: "POP3",
    123: "NTP",
    137: "NETBIOS-NS",
    138: "NETBIOS-DGM",
    139: "NETBIOS-SSN",
    143: "IMAP",
    156: "SQL-SERVER",
    389: "LDAP",
    443: "HTTPS",
    546: "DHCP-CLIENT",
    547: "DHCP-SERVER",
    631: "CUPS-SERVER",
    993: "IMAP-SSL",
    995: "POP3-SSL",
    2082: "CPANEL",
    2083: "CPANEL",
    2086: "WHM/CPANEL",
    2087: "WHM/CPANEL",
    3306: "MYSQL",
    5432: "POSTGRESQL",
    8443: "PLESK",
    10000: "VIRTUALMIN/WEBMIN",
})


def service_name(port: Union[int, str]) -> str:
    """Exact-match lookup; accepts the port as an int or a decimal string."""
    try:
        key = int(str(port).strip(), 10)
    except ValueError:
        return UNKNOWN_SERVICE
    if str(key) != str(port).strip():
        # "080" or "+80" are not the port "80"
        return UNKNOWN_SERVICE
    return SERVICE_NAMES.get(key, UNKNOWN_SERVICE)
