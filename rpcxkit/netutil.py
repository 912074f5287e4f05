"""Network helpers: free ports, address parsing, metadata strings, local IPs."""

from __future__ import annotations

import ipaddress
import re
import socket
from collections.abc import Mapping
from urllib.parse import quote_plus, unquote_plus

import psutil

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def get_free_port() -> int:
    """Return a TCP port on 127.0.0.1 that is free at the moment of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def parse_rpcx_address(addr: str) -> tuple[str, str, int]:
    """Split an address such as ``tcp@127.0.0.1:8972`` into network, host and port."""
    ati = addr.find("@")
    if ati <= 0:
        raise ValueError(f"invalid rpcx address: {addr}")
    network, hostport = addr[:ati], addr[ati + 1 :]
    host, sep, port = hostport.rpartition(":")
    bracketed = host.startswith("[") and host.endswith("]")
    if bracketed:
        host = host[1:-1]
    if not sep or any(c in host + port for c in "[]") or (":" in host and not bracketed):
        raise ValueError(f"invalid address: {hostport}")
    if not re.fullmatch(r"[+-]?[0-9]+", port):
        raise ValueError(f"invalid port: {port!r}")
    return network, host, int(port)


def _unescape(text: str) -> str:
    if _BAD_ESCAPE_RE.search(text):
        raise ValueError(f"invalid URL escape in {text!r}")
    return unquote_plus(text, errors="surrogateescape")


def convert_meta_to_map(meta: str) -> dict[str, str]:
    """Parse a query string into first values; a malformed string gives ``{}``."""
    result: dict[str, str] = {}
    for piece in filter(None, meta.split("&")):
        key, _, value = piece.partition("=")
        try:
            if ";" in key:
                raise ValueError("invalid semicolon separator in query")
            result.setdefault(_unescape(key), _unescape(value))
        except ValueError:
            return {}
    return result


def convert_map_to_string(meta: Mapping[str, str]) -> str:
    """Encode a dict as a query string with keys in sorted order."""
    return "&".join(f"{quote_plus(k)}={quote_plus(meta[k])}" for k in sorted(meta))


def _external_ip(convert) -> str:
    all_stats = psutil.net_if_stats()
    for name, addrs in psutil.net_if_addrs().items():
        stats = all_stats.get(name)
        if stats is None or not stats.isup or "loopback" in getattr(stats, "flags", "").split(","):
            continue
        for addr in addrs:
            if addr.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            try:
                ip = ipaddress.ip_address(addr.address.split("%", 1)[0])
            except ValueError:
                continue
            text = None if ip.is_loopback else convert(ip)
            if text is not None:
                return text
    raise OSError("are you connected to the network?")


def _to4(ip) -> str | None:
    if ip.version == 4:
        return str(ip)
    return None if ip.ipv4_mapped is None else str(ip.ipv4_mapped)


def _to16(ip) -> str:
    return str(ip.ipv4_mapped) if ip.version == 6 and ip.ipv4_mapped else str(ip)


def external_ipv4() -> str:
    """Return the first IPv4 address of an up, non-loopback interface."""
    return _external_ip(_to4)


def external_ipv6() -> str:
    """Return the first IP address of an up, non-loopback interface in 16-byte form."""
    return _external_ip(_to16)