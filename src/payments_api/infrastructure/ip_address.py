"""Client IP resolution for requests that may have crossed proxies."""

from __future__ import annotations

import ipaddress
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN_IP = "Unknown"

# Checked in order; the first header holding a public address wins.
IP_HEADER_CANDIDATES = (
    "X-Forwarded-For",
    "Proxy-Client-IP",
    "WL-Proxy-Client-IP",
    "HTTP_X_FORWARDED_FOR",
    "HTTP_X_FORWARDED",
    "HTTP_X_CLUSTER_CLIENT_IP",
    "HTTP_CLIENT_IP",
    "HTTP_FORWARDED_FOR",
    "HTTP_FORWARDED",
    "HTTP_VIA",
    "REMOTE_ADDR",
)

LOCALHOST_IPS = frozenset({"127.0.0.1", "::1", "0:0:0:0:0:0:0:1"})


def resolve_client_ip(headers: Mapping[str, str], remote_addr: str | None) -> str:
    """Best guess at the originating client address.

    Proxy headers are scanned first. Values that are blank or start with
    "unknown" are skipped, comma-separated lists are read left to right,
    and only syntactically valid, non-private addresses are accepted.
    Otherwise the socket peer address is used, then "Unknown".
    """
    for header in IP_HEADER_CANDIDATES:
        value = headers.get(header)
        if not value or not value.strip():
            continue
        if value.strip().lower().startswith("unknown"):
            continue

        for candidate in value.split(","):
            address = _strip_port(candidate.strip())
            if _is_public_ip(address):
                return address

    if remote_addr and remote_addr.strip():
        return remote_addr.strip()
    return UNKNOWN_IP


def is_localhost(ip: str | None) -> bool:
    return ip is not None and ip in LOCALHOST_IPS


def _strip_port(address: str) -> str:
    # Only IPv4 "host:port"; IPv6 literals contain several colons.
    if address.count(":") == 1:
        return address.split(":", 1)[0]
    return address


def _is_public_ip(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return not (ip.is_private or ip.is_loopback)
